from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, insert
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.post import Post
from app.models.post_category import PostCategory
from app.utils import dedupe_ids


class PostsRepo:
    """SQL for posts and their category associations."""

    def __init__(self, db: Session):
        self.db = db

    def list_posts(
        self,
        published: Optional[bool] = None,
        post_ids: Optional[List[int]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Post]:
        query = self.db.query(Post)
        if published is not None:
            query = query.filter(Post.published == published)
        if post_ids is not None:
            query = query.filter(Post.id.in_(post_ids))
        query = query.order_by(Post.created_at.desc(), Post.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get(self, post_id: int) -> Optional[Post]:
        return self.db.get(Post, post_id)

    def get_by_slug(self, slug: str) -> Optional[Post]:
        return self.db.query(Post).filter(Post.slug == slug).first()

    def post_ids_for_category(self, category_id: int) -> List[int]:
        rows = (
            self.db.query(PostCategory.post_id)
            .filter(PostCategory.category_id == category_id)
            .all()
        )
        return [post_id for (post_id,) in rows]

    def categories_for_posts(self, post_ids: Iterable[int]) -> Dict[int, List[Category]]:
        """Map every requested post id to its categories; posts without any get []."""
        ids = list(post_ids)
        grouped: Dict[int, List[Category]] = defaultdict(list)
        if not ids:
            return grouped

        rows = (
            self.db.query(PostCategory.post_id, Category)
            .join(Category, Category.id == PostCategory.category_id)
            .filter(PostCategory.post_id.in_(ids))
            .order_by(Category.name, Category.id)
            .all()
        )
        for post_id, category in rows:
            grouped[post_id].append(category)
        return grouped

    def add(self, post: Post) -> Post:
        self.db.add(post)
        self.db.flush()
        return post

    def delete(self, post: Post) -> None:
        self.db.delete(post)
        self.db.flush()

    def add_categories(self, post_id: int, category_ids: Iterable[int]) -> None:
        rows = [
            {"post_id": post_id, "category_id": category_id}
            for category_id in dedupe_ids(category_ids)
        ]
        if rows:
            self.db.execute(insert(PostCategory), rows)

    def replace_categories(self, post_id: int, category_ids: Iterable[int]) -> None:
        """Drop every association of the post, then insert the given set."""
        self.db.execute(delete(PostCategory).where(PostCategory.post_id == post_id))
        self.add_categories(post_id, category_ids)

    def slug_exists(self, slug: str) -> bool:
        return (
            self.db.query(Post.id).filter(Post.slug == slug).limit(1).first()
            is not None
        )
