"""Common schemas used across multiple endpoints."""

from typing import List

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str


class ProviderStatus(BaseModel):
    """Storage usage reported by one provider."""
    name: str
    chunk_count: int
    storage_size: int


class ReadyResponse(BaseModel):
    ready: bool
    database: str
    providers: List[ProviderStatus] = []
