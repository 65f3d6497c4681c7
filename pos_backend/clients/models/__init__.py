# clients/models/__init__.py

from .client import Client

__all__ = ["Client"]
