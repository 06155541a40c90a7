"""
Tweets persistence (raw SQL).

Rows are returned in storage form (`TweetRow`): uuid ids and naive UTC
timestamps. Likes live in their own table and are never loaded here.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from core import db, errors
from core.db import Database


@dataclass(frozen=True)
class TweetRow:
    id: uuid.UUID
    created_at: datetime
    message: str


def _to_row(record: dict[str, Any]) -> TweetRow:
    return TweetRow(
        id=record["id"],
        created_at=record["created_at"],
        message=str(record["message"]),
    )


async def list_tweets(database: Database, *, limit: int) -> list[TweetRow]:
    """
    Newest tweets first, at most `limit` rows.
    """
    if limit < 1:
        raise errors.ValidationError("limit must be a positive integer.")

    rows = await database.fetch_all(
        """
        SELECT id, created_at, message
        FROM tweets
        ORDER BY created_at DESC
        LIMIT $1
        """,
        limit,
    )
    return [_to_row(r) for r in rows]


async def find_tweet(database: Database, tweet_id: uuid.UUID) -> TweetRow:
    row = await database.fetch_one(
        """
        SELECT id, created_at, message
        FROM tweets
        WHERE id = $1
        """,
        tweet_id,
    )
    if row is None:
        raise errors.NotFound("Tweet not found.")
    return _to_row(row)


async def create_tweet(database: Database, tweet: TweetRow) -> TweetRow:
    row = await database.fetch_one(
        """
        INSERT INTO tweets (id, created_at, message)
        VALUES ($1, $2, $3)
        RETURNING id, created_at, message
        """,
        tweet.id,
        tweet.created_at,
        tweet.message,
    )
    if row is None:
        raise errors.StoreError("Tweet was not persisted.")
    return _to_row(row)


async def delete_tweet(database: Database, tweet_id: uuid.UUID) -> int:
    """
    Delete a tweet (its likes go with it via ON DELETE CASCADE).

    Returns the number of deleted rows; zero is not an error.
    """
    status = await database.execute(
        """
        DELETE FROM tweets
        WHERE id = $1
        """,
        tweet_id,
    )
    return db.rows_affected(status)
