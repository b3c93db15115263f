"""
Common API schemas.
"""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    message: str
    type: str
    retryable: Optional[bool] = None
