from fastapi import Depends

from app.db.postgres.base import get_db
from app.repos.categories_repo import CategoriesRepo
from app.repos.posts_repo import PostsRepo
from app.services.categories_service import CategoriesService
from app.services.posts_service import PostsService


def get_posts_repo(db=Depends(get_db)):
    return PostsRepo(db)


def get_categories_repo(db=Depends(get_db)):
    return CategoriesRepo(db)


def get_posts_service(
    db=Depends(get_db),
    repo=Depends(get_posts_repo),
    categories_repo=Depends(get_categories_repo),
):
    return PostsService(db, repo=repo, categories_repo=categories_repo)


def get_categories_service(
    db=Depends(get_db),
    repo=Depends(get_categories_repo),
):
    return CategoriesService(db, repo=repo)
