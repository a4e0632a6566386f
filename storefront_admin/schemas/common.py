from typing import Optional, Any
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every non-2xx response"""
    error: str
    details: Optional[Any] = None
