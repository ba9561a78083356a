import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.category import Category
from app.models.post import Post
from app.repos.categories_repo import CategoriesRepo
from app.repos.posts_repo import PostsRepo
from app.schemas.blog import CategoryRef, PostCreate, PostDetail, PostSummary, PostUpdate
from app.services.slug_service import resolve_unique_slug
from app.utils import utcnow

logger = logging.getLogger(__name__)

# Columns that may not be set to null through an update
REQUIRED_POST_FIELDS = ("title", "content", "slug", "published")


class PostsService:
    def __init__(self, db: Session, repo=None, categories_repo=None):
        self.db = db
        self.repo = repo or PostsRepo(db)
        self.categories_repo = categories_repo or CategoriesRepo(db)

    # --- queries ---

    def list_posts(
        self,
        published: Optional[bool] = None,
        category_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[PostSummary]:
        """
        Newest posts first, each with its categories.
        Both filters may be combined; a category without posts short-circuits
        to an empty list.
        """
        post_ids = None
        if category_id is not None:
            post_ids = self.repo.post_ids_for_category(category_id)
            if not post_ids:
                return []

        posts = self.repo.list_posts(
            published=published, post_ids=post_ids, limit=limit, offset=offset
        )
        return self._summaries(posts)

    def list_published(self) -> List[PostSummary]:
        posts = self.repo.list_posts(published=True)
        return self._summaries(posts)

    def get_post(self, post_id: int) -> PostDetail:
        post = self.repo.get(post_id)
        if not post:
            raise NotFoundError(f"Post {post_id} not found")
        return self._detail(post)

    def get_post_by_slug(self, slug: str) -> PostDetail:
        post = self.repo.get_by_slug(slug)
        if not post:
            raise NotFoundError(f"Post '{slug}' not found")
        return self._detail(post)

    def generate_slug(self, title: str) -> str:
        return resolve_unique_slug(title, self.repo.slug_exists, fallback="post")

    # --- mutations ---

    def create_post(self, data: PostCreate) -> PostDetail:
        try:
            self._check_category_ids(data.categoryIds)
            post = Post(
                title=data.title,
                content=data.content,
                excerpt=data.excerpt,
                slug=data.slug,
                published=data.published,
            )
            self._save_row(post, data.slug)
            self._write_categories(post.id, data.categoryIds)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Created post {post.id} ({post.slug})")
        return self._detail(post)

    def update_post(self, post_id: int, data: PostUpdate) -> PostDetail:
        """
        Apply only the fields present in `data`. A present `categoryIds`,
        even an empty one, replaces every association of the post.
        """
        changes = data.model_dump(exclude_unset=True)
        category_ids = changes.pop("categoryIds", None)
        replace_categories = "categoryIds" in data.model_fields_set

        try:
            post = self.repo.get(post_id)
            if not post:
                raise NotFoundError(f"Post {post_id} not found")

            for field in REQUIRED_POST_FIELDS:
                if field in changes and changes[field] is None:
                    raise ValidationError(f"Post {field} cannot be null")
            if replace_categories:
                if category_ids is None:
                    raise ValidationError("Post categoryIds cannot be null")
                self._check_category_ids(category_ids)

            for field, value in changes.items():
                setattr(post, field, value)
            post.updated_at = utcnow()
            self._save_row(post, post.slug)

            if replace_categories:
                self._write_categories(post.id, category_ids, replace=True)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Updated post {post_id}")
        return self._detail(post)

    def delete_post(self, post_id: int) -> None:
        try:
            post = self.repo.get(post_id)
            if not post:
                raise NotFoundError(f"Post {post_id} not found")
            self.repo.delete(post)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Deleted post {post_id}")

    # --- helpers ---

    def _save_row(self, post: Post, slug: str) -> None:
        """Flush the post row; the only unique constraint it can break is the slug."""
        try:
            if post.id is None:
                self.repo.add(post)
            else:
                self.db.flush()
        except IntegrityError as e:
            raise ConflictError(f"Post slug '{slug}' already exists") from e

    def _write_categories(
        self, post_id: int, category_ids: List[int], replace: bool = False
    ) -> None:
        """
        Insert (or reset to) the given associations. A foreign key failure here
        means a category vanished after _check_category_ids ran.
        """
        try:
            if replace:
                self.repo.replace_categories(post_id, category_ids)
            else:
                self.repo.add_categories(post_id, category_ids)
        except IntegrityError as e:
            raise ValidationError(
                f"Unknown category ids: {', '.join(str(i) for i in sorted(set(category_ids)))}"
            ) from e

    def _check_category_ids(self, category_ids: Iterable[int]) -> None:
        requested = set(category_ids)
        missing = requested - self.categories_repo.existing_ids(requested)
        if missing:
            raise ValidationError(
                f"Unknown category ids: {', '.join(str(i) for i in sorted(missing))}"
            )

    def _summaries(self, posts: List[Post]) -> List[PostSummary]:
        categories = self.repo.categories_for_posts(p.id for p in posts)
        return [
            PostSummary(**post_to_dict(p, categories.get(p.id, []))) for p in posts
        ]

    def _detail(self, post: Post) -> PostDetail:
        categories = self.repo.categories_for_posts([post.id])
        return PostDetail(
            **post_to_dict(post, categories.get(post.id, []), include_content=True)
        )


def category_ref(category: Category) -> CategoryRef:
    return CategoryRef(id=category.id, name=category.name, slug=category.slug)


def post_to_dict(
    post: Post, categories: List[Category], include_content: bool = False
) -> Dict:
    """Standardized post payload with nested categories."""
    post_data = {
        "id": post.id,
        "title": post.title,
        "excerpt": post.excerpt,
        "slug": post.slug,
        "published": post.published,
        "createdAt": post.created_at,
        "updatedAt": post.updated_at,
        "categories": [category_ref(c) for c in categories],
    }
    if include_content:
        post_data["content"] = post.content
    return post_data
