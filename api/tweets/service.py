"""
Tweets orchestration.

A tweet on the wire is its row plus the current likes, which live in a
separate table. Composition happens here:

1) load the tweet row(s) (tweets repository)
2) load likes per tweet, either one lookup per tweet (`enrich_many`, bounded
   fan-out) or a single batched lookup (`enrich_many_batched`)
3) attach likes, keeping the order the tweets were loaded in

Each store call leases its own pooled connection; nothing holds a
connection across the steps above.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from core import codec, errors
from core.db import Database
from likes import repository as likes_repository
from likes.schemas import Like

from . import repository
from .schemas import Tweet, TweetRequest

MAX_LIST_TWEETS = 50
DEFAULT_ENRICH_CONCURRENCY = 8

logger = logging.getLogger(__name__)


async def enrich_one(tweet: Tweet, database: Database) -> Tweet:
    rows = await likes_repository.list_likes(database, codec.parse_identifier(tweet.id))
    return tweet.with_likes(Like.from_row(r) for r in rows)


async def enrich_many(
    tweets: Sequence[Tweet],
    database: Database,
    *,
    concurrency: int = DEFAULT_ENRICH_CONCURRENCY,
) -> list[Tweet]:
    """
    Attach likes to every tweet with one lookup per tweet.

    At most `concurrency` lookups run at once. The result is in input order.
    If any lookup fails the others are cancelled, awaited so their connections
    are back in the pool, and the error propagates.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1.")

    semaphore = asyncio.Semaphore(concurrency)

    async def _enrich(tweet: Tweet) -> Tweet:
        async with semaphore:
            return await enrich_one(tweet, database)

    tasks = [asyncio.ensure_future(_enrich(t)) for t in tweets]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        # Siblings hold leases until their cancellation has run.
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def enrich_many_batched(tweets: Sequence[Tweet], database: Database) -> list[Tweet]:
    """
    Attach likes to every tweet with a single lookup. The result is in input order.
    """
    if not tweets:
        return []

    tweet_ids = [codec.parse_identifier(t.id) for t in tweets]
    grouped = await likes_repository.list_likes_for_tweets(database, tweet_ids)
    return [
        tweet.with_likes(Like.from_row(r) for r in grouped.get(tweet_id, []))
        for tweet, tweet_id in zip(tweets, tweet_ids)
    ]


async def enrich_tweets(
    tweets: Sequence[Tweet],
    database: Database,
    *,
    strategy: str = "batched",
    concurrency: int = DEFAULT_ENRICH_CONCURRENCY,
) -> list[Tweet]:
    if strategy == "fanout":
        return await enrich_many(tweets, database, concurrency=concurrency)
    return await enrich_many_batched(tweets, database)


async def list_tweets(database: Database, *, limit: int = MAX_LIST_TWEETS) -> list[Tweet]:
    """
    Newest tweets first, without likes.

    A failing tweets query yields an empty list (logged); pool exhaustion
    still propagates.
    """
    limit = max(1, min(limit, MAX_LIST_TWEETS))
    try:
        rows = await repository.list_tweets(database, limit=limit)
    except errors.StoreError:
        logger.warning("list_tweets_failed limit=%s returning=empty", limit, exc_info=True)
        return []
    return [Tweet.from_row(r) for r in rows]


async def list_enriched_tweets(
    database: Database,
    *,
    strategy: str = "batched",
    concurrency: int = DEFAULT_ENRICH_CONCURRENCY,
) -> list[Tweet]:
    tweets = await list_tweets(database)
    return await enrich_tweets(tweets, database, strategy=strategy, concurrency=concurrency)


async def get_tweet(database: Database, tweet_id: str) -> Tweet:
    parsed = codec.parse_identifier(tweet_id)
    row = await repository.find_tweet(database, parsed)
    return await enrich_one(Tweet.from_row(row), database)


async def create_tweet(database: Database, request: TweetRequest) -> Tweet:
    tweet = request.to_tweet()
    row = await repository.create_tweet(database, tweet.to_row())
    logger.info("tweet_created id=%s", row.id)
    return Tweet.from_row(row)


async def delete_tweet(database: Database, tweet_id: str) -> None:
    parsed = codec.parse_identifier(tweet_id)
    deleted = await repository.delete_tweet(database, parsed)
    logger.info("tweet_deleted id=%s rows=%s", parsed, deleted)
