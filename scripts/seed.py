import logging

from sqlalchemy import delete, insert

from app.db.postgres.base import SessionLocal, create_tables
from app.models.category import Category
from app.models.post import Post
from app.models.post_category import PostCategory

logger = logging.getLogger(__name__)

CATEGORIES = [
    {
        "name": "Technology",
        "description": "Latest technology trends and news",
        "slug": "technology",
    },
    {
        "name": "Web Development",
        "description": "Frontend and backend web development",
        "slug": "web-development",
    },
    {
        "name": "Programming",
        "description": "Programming languages and techniques",
        "slug": "programming",
    },
]

POSTS = [
    {
        "title": "Getting Started with FastAPI",
        "slug": "getting-started-with-fastapi",
        "content": (
            "FastAPI makes building typed HTTP APIs in Python quick.\n\n"
            "In this guide we cover routers, dependency injection, pydantic "
            "models for request validation and running the app with uvicorn."
        ),
        "excerpt": "Learn the basics of building an API with FastAPI.",
        "published": True,
    },
    {
        "title": "SQLAlchemy Patterns for Web Apps",
        "slug": "sqlalchemy-patterns-for-web-apps",
        "content": (
            "A session per request, repositories for queries and services for "
            "rules keep a web backend easy to test.\n\n"
            "## Many-to-many\nAssociation tables with cascading foreign keys "
            "keep join rows consistent when either side is deleted."
        ),
        "excerpt": "Practical SQLAlchemy patterns for request-scoped sessions.",
        "published": True,
    },
    {
        "title": "Designing Slugs That Last",
        "slug": "designing-slugs-that-last",
        "content": (
            "Slugs are the public identifiers of your content. Keep them "
            "lowercase, hyphenated and unique, and let the database enforce it."
        ),
        "excerpt": "How to generate stable, unique URL slugs.",
        "published": True,
    },
]

# (post index, category index)
ASSOCIATIONS = [(0, 0), (0, 1), (1, 2), (1, 1), (2, 1), (2, 2)]


def seed(db) -> None:
    db.execute(delete(PostCategory))
    db.execute(delete(Post))
    db.execute(delete(Category))

    categories = [Category(**data) for data in CATEGORIES]
    db.add_all(categories)
    db.flush()
    logger.info("Created categories")

    posts = [Post(**data) for data in POSTS]
    db.add_all(posts)
    db.flush()
    logger.info("Created posts")

    db.execute(
        insert(PostCategory),
        [
            {"post_id": posts[p].id, "category_id": categories[c].id}
            for p, c in ASSOCIATIONS
        ],
    )
    db.commit()
    logger.info("Associated posts with categories")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_tables()
    session = SessionLocal()
    try:
        seed(session)
        logger.info("Database seeded successfully.")
    except Exception as e:
        session.rollback()
        logger.error(f"Seeding failed: {e}", exc_info=True)
        raise SystemExit(1)
    finally:
        session.close()
