"""Posts API routes: CRUD, likes and comments."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import ValidationError

from app.application.services import post_service
from app.application.services.common import options
from app.core.exceptions import ValidationException, validation_details
from app.domain.models.post import Post, POST_CATEGORIES
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import ListParams
from app.domain.schemas.post import (
    CommentCreate,
    CommentRead,
    LikeResponse,
    PostCreate,
    PostRead,
    PostUpdate,
)
from app.interfaces.api.deps import get_current_user, get_optional_user, require_admin
from app.interfaces.api.responses import paginated, set_etag, split_csv
from app.interfaces.deps import get_post_repository, if_match_version, list_params

router = APIRouter(prefix="/api/posts", tags=["Posts"])


def writable_post(
    post_id: int,
    repo: BaseRepository[Post] = Depends(get_post_repository),
    user: User = Depends(get_current_user),
) -> Post:
    return post_service.get_writable_post(repo, post_id, user)


async def post_update_body(request: Request) -> PostUpdate:
    """Parse the PUT body by hand; declared after ``writable_post`` so the body is only read for writers."""
    try:
        return PostUpdate.model_validate_json(await request.body())
    except ValidationError as exc:
        raise ValidationException(details=validation_details(exc.errors()))


@router.get("")
def list_posts(
    category: Optional[str] = None,
    visibility: Optional[str] = None,
    priority: Optional[str] = None,
    tags: Optional[str] = None,
    author_id: Optional[int] = Query(None, alias="authorId"),
    params: ListParams = Depends(list_params()),
    repo: BaseRepository[Post] = Depends(get_post_repository),
    viewer: Optional[User] = Depends(get_optional_user),
):
    page = post_service.list_posts(
        repo, params, viewer,
        category=category,
        visibility=visibility,
        priority=priority,
        tags=split_csv(tags),
        author_id=author_id,
    )
    return paginated(page, PostRead)


@router.get("/all")
def list_all_posts(
    params: ListParams = Depends(list_params()),
    repo: BaseRepository[Post] = Depends(get_post_repository),
    admin: User = Depends(require_admin),
):
    return paginated(post_service.list_all_posts(repo, params), PostRead)


@router.get("/stats")
def post_stats(
    repo: BaseRepository[Post] = Depends(get_post_repository),
    admin: User = Depends(require_admin),
):
    return {"stats": post_service.post_stats(repo)}


@router.get("/categories/list")
def post_categories():
    return {"categories": options(POST_CATEGORIES)}


@router.get("/user/{user_id}")
def list_user_posts(
    user_id: int,
    params: ListParams = Depends(list_params()),
    repo: BaseRepository[Post] = Depends(get_post_repository),
    user: User = Depends(get_current_user),
):
    return paginated(post_service.list_user_posts(repo, user_id, user, params), PostRead)


@router.get("/{post_id}")
def get_post(
    post_id: int,
    response: Response,
    repo: BaseRepository[Post] = Depends(get_post_repository),
    viewer: Optional[User] = Depends(get_optional_user),
):
    post = post_service.get_post(repo, post_id, viewer)
    set_etag(response, post)
    return {"post": PostRead.model_validate(post)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreate,
    repo: BaseRepository[Post] = Depends(get_post_repository),
    user: User = Depends(get_current_user),
):
    post = post_service.create_post(repo, body, user)
    return {"message": "Post created successfully", "post": PostRead.model_validate(post)}


@router.put("/{post_id}")
def update_post(
    post_id: int,
    _post: Post = Depends(writable_post),
    body: PostUpdate = Depends(post_update_body),
    expected_version: Optional[int] = Depends(if_match_version),
    repo: BaseRepository[Post] = Depends(get_post_repository),
    user: User = Depends(get_current_user),
):
    post = post_service.update_post(repo, post_id, body, user, expected_version)
    return {"message": "Post updated successfully", "post": PostRead.model_validate(post)}


@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    _post: Post = Depends(writable_post),
    repo: BaseRepository[Post] = Depends(get_post_repository),
    user: User = Depends(get_current_user),
):
    post_service.delete_post(repo, post_id, user)
    return {"message": "Post deleted successfully"}


@router.put("/{post_id}/like")
def toggle_like(
    post_id: int,
    repo: BaseRepository[Post] = Depends(get_post_repository),
    user: User = Depends(get_current_user),
):
    state, post = post_service.toggle_like(repo, post_id, user)
    liked = state is post_service.LikeState.LIKED
    return {
        "message": "Post liked" if liked else "Post unliked",
        **LikeResponse(liked=liked, likes=post.likes, like_count=post.like_count).model_dump(by_alias=True),
    }


@router.post("/{post_id}/comment", status_code=status.HTTP_201_CREATED)
def add_comment(
    post_id: int,
    body: CommentCreate,
    repo: BaseRepository[Post] = Depends(get_post_repository),
    user: User = Depends(get_current_user),
):
    comment = post_service.add_comment(repo, post_id, body, user)
    return {"message": "Comment added successfully", "comment": CommentRead.model_validate(comment)}


@router.delete("/{post_id}/comment/{comment_id}")
def delete_comment(
    post_id: int,
    comment_id: int,
    repo: BaseRepository[Post] = Depends(get_post_repository),
    user: User = Depends(get_current_user),
):
    post_service.delete_comment(repo, post_id, comment_id, user)
    return {"message": "Comment deleted successfully"}
