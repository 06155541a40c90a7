"""
Tweets API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from core.db import Database
from core.dependencies import get_database, get_settings
from core.schemas import ERROR_RESPONSES, Results
from core.settings import Settings

from . import service
from .schemas import Tweet, TweetRequest

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("/tweets", response_model=Results[Tweet])
async def list_tweets(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> Results[Tweet]:
    """
    Up to 50 tweets, newest first, each with its likes.
    """
    tweets = await service.list_enriched_tweets(
        database,
        strategy=settings.enrich_strategy,
        concurrency=settings.enrich_concurrency,
    )
    return Results[Tweet](results=tweets)


@router.post("/tweets", response_model=Tweet, status_code=status.HTTP_201_CREATED)
async def create_tweet(
    request: TweetRequest,
    database: Database = Depends(get_database),
) -> Tweet:
    return await service.create_tweet(database, request)


@router.get("/tweets/{tweet_id}", response_model=Tweet)
async def get_tweet(
    tweet_id: str,
    database: Database = Depends(get_database),
) -> Tweet:
    return await service.get_tweet(database, tweet_id)


@router.delete("/tweets/{tweet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tweet(
    tweet_id: str,
    database: Database = Depends(get_database),
) -> Response:
    """
    Idempotent: deleting an unknown tweet still answers 204.
    """
    await service.delete_tweet(database, tweet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
