"""Post domain model: posts, their likes and their comments."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base, utcnow

POST_CATEGORIES = ("general", "announcement", "event", "marketplace", "question", "discussion")
POST_VISIBILITIES = ("public", "community", "private")
POST_PRIORITIES = ("low", "medium", "high")


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    visibility = Column(String(20), nullable=False, default="public", index=True)
    priority = Column(String(20), nullable=True)
    tags = Column(JSON, nullable=False, default=list)

    # Author fields are always copied from the authenticated user
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    author_name = Column(String(120), nullable=False)
    author_role = Column(String(20), nullable=False)

    is_published = Column(Boolean, nullable=False, default=True, index=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    like_records = relationship(
        "PostLike",
        cascade="all, delete-orphan",
        order_by="PostLike.id",
        lazy="selectin",
    )
    comments = relationship(
        "PostComment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostComment.id",
        lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def owner_id(self) -> int:
        return self.author_id

    @property
    def likes(self) -> list[int]:
        return [like.user_id for like in self.like_records]

    @property
    def like_count(self) -> int:
        return len(self.like_records)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def __repr__(self):
        return f"<Post {self.id} - {self.title}>"


class PostLike(Base):
    """One row per (post, user); the unique constraint gives set semantics."""

    __tablename__ = "post_likes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_like"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)


class PostComment(Base):
    __tablename__ = "post_comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    author_name = Column(String(120), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    post = relationship("Post", back_populates="comments")
