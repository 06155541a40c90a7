"""
Like wire schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_serializer

from core import codec

from .repository import LikeRow


class Like(BaseModel):
    id: str
    tweet_id: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return codec.to_wire_timestamp(value)

    @classmethod
    def from_row(cls, row: LikeRow) -> "Like":
        return cls(
            id=codec.to_wire_identifier(row.id),
            tweet_id=codec.to_wire_identifier(row.tweet_id),
            created_at=codec.from_storage_timestamp(row.created_at),
        )
