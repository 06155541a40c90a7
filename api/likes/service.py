"""
Likes business logic.
"""

from __future__ import annotations

import logging

from core import codec
from core.db import Database

from . import repository
from .schemas import Like

logger = logging.getLogger(__name__)


async def list_likes(database: Database, tweet_id: str) -> list[Like]:
    rows = await repository.list_likes(database, codec.parse_identifier(tweet_id))
    return [Like.from_row(r) for r in rows]


async def plus_one(database: Database, tweet_id: str) -> Like:
    row = await repository.add_like(database, codec.parse_identifier(tweet_id))
    logger.info("like_added tweet_id=%s like_id=%s", row.tweet_id, row.id)
    return Like.from_row(row)


async def minus_one(database: Database, tweet_id: str) -> None:
    parsed = codec.parse_identifier(tweet_id)
    removed = await repository.remove_like(database, parsed)
    logger.info("like_removed tweet_id=%s removed=%s", parsed, removed)
