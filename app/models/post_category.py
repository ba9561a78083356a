from sqlalchemy import Column, ForeignKey, Integer

from app.db.postgres.base import Base


class PostCategory(Base):
    """Association row between a post and a category."""

    __tablename__ = "post_categories"

    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
