from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CategoryRef(BaseModel):
    id: int
    name: str
    slug: str


class PostSummary(BaseModel):
    id: int
    title: str
    excerpt: Optional[str] = None
    slug: str
    published: bool = False
    createdAt: datetime
    updatedAt: datetime
    categories: List[CategoryRef] = Field(default_factory=list)


class PostDetail(PostSummary):
    content: str


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = None
    slug: str = Field(..., min_length=1, max_length=255)
    published: bool = False
    categoryIds: List[int] = Field(default_factory=list)


class PostUpdate(BaseModel):
    # Only fields present in the request are applied; see PostsService.update_post
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    published: Optional[bool] = None
    categoryIds: Optional[List[int]] = None


class SlugResponse(BaseModel):
    slug: str


class DeleteResponse(BaseModel):
    success: bool = True
