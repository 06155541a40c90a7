"""
Tweet wire schemas and conversion to/from storage rows.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from core import codec, errors
from likes.schemas import Like

from .repository import TweetRow


class Tweet(BaseModel):
    id: str
    created_at: datetime
    message: str
    likes: list[Like] = Field(default_factory=list)

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return codec.to_wire_timestamp(value)

    @classmethod
    def new(cls, message: str) -> "Tweet":
        return cls(
            id=codec.to_wire_identifier(codec.mint_identifier()),
            created_at=codec.utc_now(),
            message=message,
        )

    @classmethod
    def from_row(cls, row: TweetRow) -> "Tweet":
        return cls(
            id=codec.to_wire_identifier(row.id),
            created_at=codec.from_storage_timestamp(row.created_at),
            message=row.message,
        )

    def to_row(self) -> TweetRow:
        # The stored id and timestamp are minted here, never taken from the wire form.
        return TweetRow(
            id=codec.mint_identifier(),
            created_at=codec.to_storage_timestamp(codec.utc_now()),
            message=self.message,
        )

    def with_likes(self, likes: Iterable[Like]) -> "Tweet":
        return self.model_copy(update={"likes": list(likes)})


class TweetRequest(BaseModel):
    message: str | None = None

    def to_tweet(self) -> Tweet:
        if self.message is None:
            raise errors.ValidationError("message is required.")
        return Tweet.new(self.message)
