"""Articles API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, Request, Response

from ..db import articles as articles_db
from ..models.articles import Article, ArticleCreate, ArticleFilter, ArticleListResponse
from .dependencies import Pagination, QueryTimeout, Service, add_link_header


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/articles",
    tags=["Articles"],
    responses={
        404: {"description": "Not Found"},
        503: {"description": "Database unavailable"}
    }
)


@router.get(
    "",
    response_model=ArticleListResponse,
    summary="List articles",
    description="List articles by publish time with cursor-based pagination.",
)
async def list_articles(
    request: Request,
    response: Response,
    options: Pagination,
    timeout: QueryTimeout,
    article_filter: Annotated[
        ArticleFilter,
        Query(alias="filter", description="Subset of articles to list")
    ] = ArticleFilter.ALL
) -> ArticleListResponse:
    """List articles one page at a time.

    Articles sharing a publish second are ordered by id, so paging never
    skips or repeats them.
    """
    page = await articles_db.list_articles(options, article_filter, timeout=timeout)
    add_link_header(request, response, page, options, {"filter": article_filter.value})

    logger.info(f"Retrieved {len(page.items)} {article_filter.value} articles")
    return ArticleListResponse(cursor=page.cursor, items=page.items)


@router.post(
    "",
    response_model=Article,
    status_code=201,
    summary="Add an article",
    responses={
        400: {"description": "Invalid published date"},
        404: {"description": "Feed not found"},
        409: {"description": "Article already exists"}
    }
)
async def create_article(article_data: ArticleCreate, service: Service) -> Article:
    return await service.create_article(article_data)


@router.get("/{article_id}", response_model=Article, summary="Get an article")
async def get_article(article_id: int) -> Article:
    return await articles_db.get_article(article_id)


@router.post("/{article_id}/read", response_model=Article, summary="Mark an article read")
async def mark_article_read(article_id: int) -> Article:
    return await articles_db.mark_article_read(article_id)


@router.post(
    "/{article_id}/favorite",
    response_model=Article,
    summary="Toggle article favorite"
)
async def mark_article_favorite(article_id: int) -> Article:
    return await articles_db.mark_article_favorite(article_id)
