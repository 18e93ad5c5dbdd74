from typing import Optional


class ValidationError(Exception):
    """Caller-supplied task data broke a field rule. Raised before any DB access."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class StoreError(Exception):
    """Persistence backend failure. The message is safe to log, not to return."""
