"""API Response models."""

from pydantic import BaseModel, Field
from typing import Optional, Generic, TypeVar
from datetime import datetime


T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    success: bool = Field(..., description="Whether the call succeeded")
    message: str = Field(..., description="Message")
    data: Optional[T] = Field(None, description="Response payload")
    timestamp: datetime = Field(default_factory=datetime.now, description="Response time")


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = Field(False, description="Whether the call succeeded")
    message: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    timestamp: datetime = Field(default_factory=datetime.now, description="Response time")
