"""Uploaded photos and videos."""
import enum
import uuid
from typing import Optional

from sqlalchemy import Enum, String, Integer, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from gymsmash.models.base import Base


class MediaKind(str, enum.Enum):
    VIDEO = "video"
    PHOTO = "photo"


class MediaCategory(str, enum.Enum):
    """What a capture shows: one exercise, a whole workout, or the before photo."""
    EXERCISE = "exercise"
    WORKOUT = "workout"
    BEFORE = "before"


class MediaAsset(Base):
    """File stored in the media directory."""

    __tablename__ = "media_assets"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    kind: Mapped[MediaKind] = mapped_column(Enum(MediaKind))
    category: Mapped[MediaCategory] = mapped_column(Enum(MediaCategory))
    file_path: Mapped[str] = mapped_column(Text)  # relative to media_dir
    file_url: Mapped[str] = mapped_column(Text)
    content_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    size_bytes: Mapped[int] = mapped_column(Integer, default=0)
    workout_log_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("workout_logs.id", ondelete="SET NULL"), nullable=True
    )
    exercise_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
