# src/flodaz_community/models/post.py
"""SQLAlchemy model for community posts."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from flodaz_community.db.session import Base
from flodaz_community.db.time import utcnow


class Post(Base):
    """User-authored content: text, image or recipe posts.

    Authors live in the external identity store; ``user_id`` is an opaque
    reference into it and is never joined in SQL.
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    images: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)
    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)
    # Opaque to this service; only ever written for recipe posts.
    recipe_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    shares: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # Cached counter: incremented per comment, never reconciled.
    comment_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=True
    )
