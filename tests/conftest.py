import os

# Must be set before app.settings is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.postgres.base import build_engine, create_tables  # noqa: E402
from app.exceptions import NotFoundError  # noqa: E402
from app.schemas.blog import PostCreate  # noqa: E402
from app.schemas.category import CategoryCreate  # noqa: E402
from app.services.categories_service import CategoriesService  # noqa: E402
from app.services.posts_service import PostsService  # noqa: E402


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite database, one connection shared across threads."""
    engine = build_engine("sqlite+pysqlite://", poolclass=StaticPool)
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    TestingSession = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def posts_service(db_session):
    return PostsService(db_session)


@pytest.fixture
def categories_service(db_session):
    return CategoriesService(db_session)


@pytest.fixture
def make_category(categories_service):
    def _make(name: str, slug: str | None = None, description: str | None = None):
        return categories_service.create_category(
            CategoryCreate(
                name=name,
                slug=slug or name.lower().replace(" ", "-"),
                description=description,
            )
        )

    return _make


@pytest.fixture
def make_post(posts_service):
    def _make(title: str, slug: str | None = None, **fields):
        data = {
            "title": title,
            "content": fields.pop("content", f"Body of {title}"),
            "slug": slug or title.lower().replace(" ", "-"),
            **fields,
        }
        return posts_service.create_post(PostCreate(**data))

    return _make


# --- Fakes for router tests ---

NOW = datetime(2024, 6, 1, 12, 0, 0)


def fake_post(post_id: int = 1, **overrides) -> dict:
    post = {
        "id": post_id,
        "title": f"Post {post_id}",
        "excerpt": None,
        "slug": f"post-{post_id}",
        "published": False,
        "createdAt": NOW,
        "updatedAt": NOW,
        "categories": [],
        "content": "hi",
    }
    post.update(overrides)
    return post


def fake_category(category_id: int = 1, **overrides) -> dict:
    category = {
        "id": category_id,
        "name": f"Category {category_id}",
        "description": None,
        "slug": f"category-{category_id}",
        "createdAt": NOW,
        "updatedAt": NOW,
    }
    category.update(overrides)
    return category


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    Records the arguments of the last call in `calls`.
    """

    def __init__(self, list_posts_return=None, get_post_return=None, slug="slug"):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._slug = slug
        self.calls = []

    def list_posts(self, **kwargs):
        self.calls.append(("list_posts", kwargs))
        return self._list_posts_return

    def list_published(self):
        self.calls.append(("list_published", {}))
        return self._list_posts_return

    def get_post(self, post_id: int):
        self.calls.append(("get_post", post_id))
        if self._get_post_return is None:
            raise NotFoundError(f"Post {post_id} not found")
        return self._get_post_return

    def get_post_by_slug(self, slug: str):
        self.calls.append(("get_post_by_slug", slug))
        if self._get_post_return is None:
            raise NotFoundError(f"Post '{slug}' not found")
        return self._get_post_return

    def generate_slug(self, title: str):
        self.calls.append(("generate_slug", title))
        return self._slug

    def create_post(self, data):
        self.calls.append(("create_post", data))
        return self._get_post_return

    def update_post(self, post_id, data):
        self.calls.append(("update_post", (post_id, data)))
        return self._get_post_return

    def delete_post(self, post_id):
        self.calls.append(("delete_post", post_id))


class FakeCategoriesService:
    """
    Minimal categories service stand-in for router tests.
    """

    def __init__(self, categories=None, slug="slug"):
        self.categories = categories or []
        self._slug = slug
        self.calls = []

    def list_categories(self):
        return self.categories

    def get_category(self, category_id: int):
        for category in self.categories:
            if category["id"] == category_id:
                return category
        raise NotFoundError(f"Category {category_id} not found")

    def get_category_by_slug(self, slug: str):
        for category in self.categories:
            if category["slug"] == slug:
                return category
        raise NotFoundError(f"Category '{slug}' not found")

    def generate_slug(self, name: str):
        self.calls.append(("generate_slug", name))
        return self._slug

    def create_category(self, data):
        self.calls.append(("create_category", data))
        return fake_category(99, name=data.name, slug=data.slug)

    def update_category(self, category_id, data):
        self.calls.append(("update_category", (category_id, data)))
        return self.get_category(category_id)

    def delete_category(self, category_id):
        self.calls.append(("delete_category", category_id))
        self.get_category(category_id)
