"""Post service: visibility rules, lifecycle, likes and comments."""

from collections import Counter
from enum import Enum
from typing import Optional

import structlog

from app.application.services.common import check_version, get_or_404
from app.application.services.query_pipeline import Page, QuerySpec, build_filters, run_query
from app.core.exceptions import (
    EntityNotFoundException,
    ForbiddenException,
    UnauthorizedException,
)
from app.domain.models.post import Post, PostComment, PostLike, POST_CATEGORIES
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import ListParams
from app.domain.schemas.post import CommentCreate, PostCreate, PostUpdate
from app.infrastructure.database import utcnow

logger = structlog.get_logger(__name__)

POST_QUERY = QuerySpec(
    search_fields=("title", "content"),
    sort_fields={
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "title": "title",
        "category": "category",
        "likeCount": "like_count",
        "commentCount": "comment_count",
    },
    default_sort="createdAt",
    default_order="desc",
    date_fields=frozenset({"created_at", "updated_at"}),
)


class LikeState(str, Enum):
    UNLIKED = "unliked"
    LIKED = "liked"

    def toggled(self) -> "LikeState":
        return LikeState.UNLIKED if self is LikeState.LIKED else LikeState.LIKED


def _is_author_or_admin(post: Post, viewer: Optional[User]) -> bool:
    return viewer is not None and (viewer.id == post.author_id or viewer.role == "admin")


def can_view(post: Post, viewer: Optional[User]) -> bool:
    """Listing rule: drafts and private posts only reach their author or an admin."""
    if _is_author_or_admin(post, viewer):
        return True
    if not post.is_published:
        return False
    if post.visibility == "public":
        return True
    if post.visibility == "community":
        return viewer is not None
    return False


def list_posts(
    repo: BaseRepository[Post],
    params: ListParams,
    viewer: Optional[User],
    category: Optional[str] = None,
    visibility: Optional[str] = None,
    priority: Optional[str] = None,
    tags: Optional[list[str]] = None,
    author_id: Optional[int] = None,
) -> Page:
    filters = build_filters({
        "category": (category, "exact"),
        "visibility": (visibility, "exact"),
        "priority": (priority, "exact"),
        "tags": ([t.lower() for t in tags] if tags else None, "any"),
        "author_id": (author_id, "exact"),
    })
    return run_query(repo.find(), POST_QUERY, params, filters, visible=lambda p: can_view(p, viewer))


def list_all_posts(repo: BaseRepository[Post], params: ListParams) -> Page:
    """Every post regardless of visibility (admin view)."""
    return run_query(repo.find(), POST_QUERY, params)


def list_user_posts(repo: BaseRepository[Post], user_id: int, viewer: User, params: ListParams) -> Page:
    if viewer.role != "admin" and viewer.id != user_id:
        raise ForbiddenException("You can only view your own posts")
    return run_query(repo.find(author_id=user_id), POST_QUERY, params)


def get_post(repo: BaseRepository[Post], post_id: int, viewer: Optional[User]) -> Post:
    post = get_or_404(repo, post_id, "Post")

    if _is_author_or_admin(post, viewer):
        return post
    if post.visibility == "private":
        raise ForbiddenException("This post is private and you do not have permission to view it")
    if not post.is_published:
        raise EntityNotFoundException("Post not found", {"id": post_id})
    if post.visibility == "community" and viewer is None:
        raise UnauthorizedException("Sign in to view community posts")
    return post


def create_post(repo: BaseRepository[Post], body: PostCreate, author: User) -> Post:
    data = body.model_dump()
    data.update(
        author_id=author.id,
        author_name=author.full_name,
        author_role=author.role,
    )
    post = repo.create(data)
    logger.info("Post created", post_id=post.id, author_id=author.id)
    return post


def get_writable_post(repo: BaseRepository[Post], post_id: int, user: User) -> Post:
    """Author-or-admin gate for edits and deletes."""
    post = get_or_404(repo, post_id, "Post")
    if not _is_author_or_admin(post, user):
        raise ForbiddenException("You can only modify your own posts")
    return post


def update_post(
    repo: BaseRepository[Post],
    post_id: int,
    body: PostUpdate,
    user: User,
    expected_version: Optional[int] = None,
) -> Post:
    post = get_writable_post(repo, post_id, user)
    check_version(post, expected_version)

    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    changes["updated_at"] = utcnow()
    post = repo.update(post, changes)
    logger.info("Post updated", post_id=post.id, fields=sorted(changes))
    return post


def delete_post(repo: BaseRepository[Post], post_id: int, user: User) -> None:
    post = get_writable_post(repo, post_id, user)
    # Comments and likes go with the post (delete-orphan cascade)
    repo.delete(post.id)
    logger.info("Post deleted", post_id=post_id, by=user.id)


def like_state(post: Post, user_id: int) -> LikeState:
    return LikeState.LIKED if user_id in post.likes else LikeState.UNLIKED


def set_like_state(repo: BaseRepository[Post], post: Post, user_id: int, desired: LikeState) -> Post:
    """Move the (post, user) like to ``desired``; a no-op when already there."""
    current = like_state(post, user_id)
    if current is desired:
        return post

    if desired is LikeState.LIKED:
        post.like_records.append(PostLike(user_id=user_id))
    else:
        for record in [r for r in post.like_records if r.user_id == user_id]:
            post.like_records.remove(record)
    return repo.save(post)


def toggle_like(repo: BaseRepository[Post], post_id: int, user: User) -> tuple[LikeState, Post]:
    post = get_post(repo, post_id, user)
    desired = like_state(post, user.id).toggled()
    post = set_like_state(repo, post, user.id, desired)
    return desired, post


def add_comment(repo: BaseRepository[Post], post_id: int, body: CommentCreate, user: User) -> PostComment:
    post = get_post(repo, post_id, user)
    comment = PostComment(
        author_id=user.id,
        author_name=user.full_name,
        content=body.content,
        created_at=utcnow(),
    )
    post.comments.append(comment)
    repo.save(post)
    logger.info("Comment added", post_id=post.id, comment_id=comment.id, author_id=user.id)
    return comment


def delete_comment(repo: BaseRepository[Post], post_id: int, comment_id: int, user: User) -> Post:
    post = get_post(repo, post_id, user)
    comment = next((c for c in post.comments if c.id == comment_id), None)
    if comment is None:
        raise EntityNotFoundException("Comment not found", {"id": comment_id})
    if comment.author_id != user.id and user.role != "admin":
        raise ForbiddenException("You can only delete your own comments")

    post.comments.remove(comment)
    post = repo.save(post)
    logger.info("Comment deleted", post_id=post.id, comment_id=comment_id, by=user.id)
    return post


def post_stats(repo: BaseRepository[Post]) -> dict:
    posts = repo.find()
    by_category = Counter(p.category for p in posts)
    by_visibility = Counter(p.visibility for p in posts)
    return {
        "totalPosts": len(posts),
        "publishedPosts": sum(1 for p in posts if p.is_published),
        "highPriorityPosts": sum(1 for p in posts if p.priority == "high"),
        "postsByCategory": [{"category": c, "count": by_category.get(c, 0)} for c in POST_CATEGORIES],
        "postsByVisibility": dict(by_visibility),
    }
