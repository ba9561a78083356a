import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app import dependencies as deps
from app.exceptions import BlogError
from app.routers.errors import to_http_exception
from app.schemas.blog import DeleteResponse, SlugResponse
from app.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from app.services.categories_service import CategoriesService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(
    service: CategoriesService = Depends(deps.get_categories_service),
):
    try:
        return service.list_categories()
    except Exception as e:
        logger.error(f"Unexpected error listing categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve categories")


@router.get("/generate-slug", response_model=SlugResponse)
def generate_category_slug(
    name: str = Query(...),
    service: CategoriesService = Depends(deps.get_categories_service),
):
    try:
        return SlugResponse(slug=service.generate_slug(name))
    except Exception as e:
        logger.error(f"Unexpected error generating slug for '{name}': {e}")
        raise HTTPException(status_code=500, detail="Failed to generate slug")


@router.get("/slug/{slug}", response_model=CategoryOut)
def get_category_by_slug(
    slug: str,
    service: CategoriesService = Depends(deps.get_categories_service),
):
    try:
        return service.get_category_by_slug(slug)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error retrieving category {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve category")


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: int,
    service: CategoriesService = Depends(deps.get_categories_service),
):
    try:
        return service.get_category(category_id)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error retrieving category {category_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve category")


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(
    payload: CategoryCreate,
    service: CategoriesService = Depends(deps.get_categories_service),
):
    try:
        return service.create_category(payload)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error creating category {payload.slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create category")


@router.patch("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    service: CategoriesService = Depends(deps.get_categories_service),
):
    try:
        return service.update_category(category_id, payload)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error updating category {category_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update category")


@router.delete("/{category_id}", response_model=DeleteResponse)
def delete_category(
    category_id: int,
    service: CategoriesService = Depends(deps.get_categories_service),
):
    """Delete a category. Posts keep existing, minus this category."""
    try:
        service.delete_category(category_id)
        return DeleteResponse(success=True)
    except BlogError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Unexpected error deleting category {category_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete category")
