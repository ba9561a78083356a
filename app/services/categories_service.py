import logging
from typing import Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.category import Category
from app.repos.categories_repo import CategoriesRepo
from app.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from app.services.slug_service import resolve_unique_slug
from app.utils import utcnow

logger = logging.getLogger(__name__)

REQUIRED_CATEGORY_FIELDS = ("name", "slug")


class CategoriesService:
    def __init__(self, db: Session, repo=None):
        self.db = db
        self.repo = repo or CategoriesRepo(db)

    def list_categories(self) -> List[CategoryOut]:
        return [CategoryOut(**category_to_dict(c)) for c in self.repo.list_all()]

    def get_category(self, category_id: int) -> CategoryOut:
        category = self.repo.get(category_id)
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        return CategoryOut(**category_to_dict(category))

    def get_category_by_slug(self, slug: str) -> CategoryOut:
        category = self.repo.get_by_slug(slug)
        if not category:
            raise NotFoundError(f"Category '{slug}' not found")
        return CategoryOut(**category_to_dict(category))

    def generate_slug(self, name: str) -> str:
        return resolve_unique_slug(name, self.repo.slug_exists, fallback="category")

    def create_category(self, data: CategoryCreate) -> CategoryOut:
        try:
            category = Category(
                name=data.name, description=data.description, slug=data.slug
            )
            self._save_row(category)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Created category {category.id} ({category.slug})")
        return CategoryOut(**category_to_dict(category))

    def update_category(self, category_id: int, data: CategoryUpdate) -> CategoryOut:
        changes = data.model_dump(exclude_unset=True)
        try:
            category = self.repo.get(category_id)
            if not category:
                raise NotFoundError(f"Category {category_id} not found")

            for field in REQUIRED_CATEGORY_FIELDS:
                if field in changes and changes[field] is None:
                    raise ValidationError(f"Category {field} cannot be null")

            for field, value in changes.items():
                setattr(category, field, value)
            category.updated_at = utcnow()
            self._save_row(category)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Updated category {category_id}")
        return CategoryOut(**category_to_dict(category))

    def delete_category(self, category_id: int) -> None:
        """Delete the category; its post associations go with it, the posts stay."""
        try:
            category = self.repo.get(category_id)
            if not category:
                raise NotFoundError(f"Category {category_id} not found")
            self.repo.delete(category)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Deleted category {category_id}")

    def _save_row(self, category: Category) -> None:
        """Flush the category row; slug is its only unique constraint."""
        try:
            if category.id is None:
                self.repo.add(category)
            else:
                self.db.flush()
        except IntegrityError as e:
            raise ConflictError(f"Category slug '{category.slug}' already exists") from e


def category_to_dict(category: Category) -> Dict:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "slug": category.slug,
        "createdAt": category.created_at,
        "updatedAt": category.updated_at,
    }
