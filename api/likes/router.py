"""
Likes API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from core.db import Database
from core.dependencies import get_database
from core.schemas import ERROR_RESPONSES, Results

from . import service
from .schemas import Like

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("/tweets/{tweet_id}/likes", response_model=Results[Like])
async def list_likes(
    tweet_id: str,
    database: Database = Depends(get_database),
) -> Results[Like]:
    likes = await service.list_likes(database, tweet_id)
    return Results[Like](results=likes)


@router.post("/tweets/{tweet_id}/likes", response_model=Like, status_code=status.HTTP_201_CREATED)
async def plus_one(
    tweet_id: str,
    database: Database = Depends(get_database),
) -> Like:
    return await service.plus_one(database, tweet_id)


@router.delete("/tweets/{tweet_id}/likes", status_code=status.HTTP_204_NO_CONTENT)
async def minus_one(
    tweet_id: str,
    database: Database = Depends(get_database),
) -> Response:
    await service.minus_one(database, tweet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
