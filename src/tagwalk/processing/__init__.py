"""Public API surface for tagwalk.processing."""
__all__ = [
    "environ",
]
