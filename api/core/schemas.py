"""
Shared response schemas.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Results(BaseModel, Generic[T]):
    """
    Envelope for list responses: {"results": [...]}.
    """

    results: list[T] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    detail: str


# OpenAPI documentation of the error bodies rendered by `main`.
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "InvalidIdentifier or ValidationError"},
    404: {"model": ErrorResponse, "description": "NotFound"},
    502: {"model": ErrorResponse, "description": "StoreError"},
    503: {"model": ErrorResponse, "description": "PoolExhausted"},
}
