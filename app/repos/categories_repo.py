from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from app.models.category import Category


class CategoriesRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Category]:
        return (
            self.db.query(Category)
            .order_by(Category.created_at.desc(), Category.id.desc())
            .all()
        )

    def get(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def get_by_slug(self, slug: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.slug == slug).first()

    def existing_ids(self, category_ids: Iterable[int]) -> Set[int]:
        ids = set(category_ids)
        if not ids:
            return set()
        rows = self.db.query(Category.id).filter(Category.id.in_(sorted(ids))).all()
        return {category_id for (category_id,) in rows}

    def add(self, category: Category) -> Category:
        self.db.add(category)
        self.db.flush()
        return category

    def delete(self, category: Category) -> None:
        self.db.delete(category)
        self.db.flush()

    def slug_exists(self, slug: str) -> bool:
        return (
            self.db.query(Category.id).filter(Category.slug == slug).limit(1).first()
            is not None
        )
