"""
Store-related domain exceptions.
"""


class StoreError(Exception):
    """Raised when a transactional write fails; nothing was persisted."""

    retryable = True

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"{operation} failed and was rolled back: {message}")
