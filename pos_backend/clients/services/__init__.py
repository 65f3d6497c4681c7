from .directory import find_client_by_name, resolve_client

__all__ = [
    "find_client_by_name",
    "resolve_client",
]
