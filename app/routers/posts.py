import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app import dependencies as deps
from app.exceptions import BlogError
from app.routers.errors import to_http_exception
from app.schemas.blog import (
    DeleteResponse,
    PostCreate,
    PostDetail,
    PostSummary,
    PostUpdate,
    SlugResponse,
)
from app.services.posts_service import PostsService
from app.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=List[PostSummary])
def list_posts(
    published: Optional[bool] = Query(None),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get posts, newest first, optionally filtered by status and category."""
    try:
        return service.list_posts(
            published=published, category_id=category_id, limit=limit, offset=offset
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/published", response_model=List[PostSummary])
def list_published_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Get every published post, newest first."""
    try:
        return service.list_published()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing published posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/generate-slug", response_model=SlugResponse)
def generate_post_slug(
    title: str = Query(...),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return SlugResponse(slug=service.generate_slug(title))
    except Exception as e:
        logger.error(f"Unexpected error generating slug for '{title}': {e}")
        raise HTTPException(status_code=500, detail="Failed to generate slug")


@router.get("/slug/{slug}", response_model=PostDetail)
def get_post_by_slug(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug."""
    try:
        return service.get_post_by_slug(slug)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/{post_id}", response_model=PostDetail)
def get_post(
    post_id: int,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by id."""
    try:
        return service.get_post(post_id)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.post("", response_model=PostDetail, status_code=201)
def create_post(
    payload: PostCreate,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.create_post(payload)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error creating post {payload.slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create post")


@router.patch("/{post_id}", response_model=PostDetail)
def update_post(
    post_id: int,
    payload: PostUpdate,
    service: PostsService = Depends(deps.get_posts_service),
):
    """
    Partial update. Sending categoryIds, even as [], replaces the post's
    categories; leaving it out keeps them.
    """
    try:
        return service.update_post(post_id, payload)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error updating post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update post")


@router.delete("/{post_id}", response_model=DeleteResponse)
def delete_post(
    post_id: int,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        service.delete_post(post_id)
        return DeleteResponse(success=True)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error deleting post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete post")
