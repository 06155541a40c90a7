"""
Likes persistence (raw SQL).
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import asyncpg

from core import codec, errors
from core.db import Database


@dataclass(frozen=True)
class LikeRow:
    id: uuid.UUID
    tweet_id: uuid.UUID
    created_at: datetime


def _to_row(record: dict[str, Any]) -> LikeRow:
    return LikeRow(
        id=record["id"],
        tweet_id=record["tweet_id"],
        created_at=record["created_at"],
    )


async def list_likes(database: Database, tweet_id: uuid.UUID) -> list[LikeRow]:
    """
    All likes of one tweet, newest first.
    """
    rows = await database.fetch_all(
        """
        SELECT id, tweet_id, created_at
        FROM likes
        WHERE tweet_id = $1
        ORDER BY created_at DESC
        """,
        tweet_id,
    )
    return [_to_row(r) for r in rows]


async def list_likes_for_tweets(
    database: Database,
    tweet_ids: Sequence[uuid.UUID],
) -> dict[uuid.UUID, list[LikeRow]]:
    """
    Likes of several tweets in one query, grouped by tweet id.

    Every requested id is a key of the result, mapped to an empty list when
    the tweet has no likes.
    """
    grouped: dict[uuid.UUID, list[LikeRow]] = {tweet_id: [] for tweet_id in tweet_ids}
    if not grouped:
        return grouped

    rows = await database.fetch_all(
        """
        SELECT id, tweet_id, created_at
        FROM likes
        WHERE tweet_id = ANY($1::uuid[])
        ORDER BY tweet_id, created_at DESC
        """,
        list(grouped),
    )
    for record in rows:
        row = _to_row(record)
        grouped.setdefault(row.tweet_id, []).append(row)
    return grouped


async def add_like(database: Database, tweet_id: uuid.UUID) -> LikeRow:
    like_id = codec.mint_identifier()
    created_at = codec.to_storage_timestamp(codec.utc_now())

    async with database.lease() as conn:
        try:
            row = await conn.fetchrow(
                """
                INSERT INTO likes (id, created_at, tweet_id)
                VALUES ($1, $2, $3)
                RETURNING id, tweet_id, created_at
                """,
                like_id,
                created_at,
                tweet_id,
            )
        except asyncpg.ForeignKeyViolationError as exc:
            raise errors.NotFound("Tweet not found.") from exc

    if row is None:
        raise errors.StoreError("Like was not persisted.")
    return _to_row(dict(row))


async def remove_like(database: Database, tweet_id: uuid.UUID) -> bool:
    """
    Remove the newest like of a tweet. Returns False when it had none.
    """
    row = await database.fetch_one(
        """
        DELETE FROM likes
        WHERE id = (
            SELECT id
            FROM likes
            WHERE tweet_id = $1
            ORDER BY created_at DESC
            LIMIT 1
        )
        RETURNING id
        """,
        tweet_id,
    )
    return row is not None
