from .mirror import cancel_invoice_mirror, sync_invoice_mirror

__all__ = [
    "sync_invoice_mirror",
    "cancel_invoice_mirror",
]
