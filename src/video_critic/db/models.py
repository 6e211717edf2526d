"""SQLAlchemy ORM models."""

from datetime import datetime
from typing import Any
from uuid import UUID as PyUUID
from uuid import uuid4

from sqlalchemy import (
    JSON,
    BigInteger,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SubmissionModel(Base):
    """One analysis request and its lifecycle."""

    __tablename__ = "submissions"

    id: Mapped[PyUUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    source_type: Mapped[str] = mapped_column(String(20), nullable=False)
    target_audience: Mapped[str] = mapped_column(String(50), nullable=False)
    youtube_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    file_name: Mapped[str | None] = mapped_column(String(512), nullable=True)
    file_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    status: Mapped[str] = mapped_column(String(50), server_default="pending", index=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    celery_task_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Resolved platform metadata, kept so the background task needs no re-fetch
    source_metadata: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    critique: Mapped["CritiqueResultModel | None"] = relationship(
        "CritiqueResultModel",
        back_populates="submission",
        uselist=False,
        cascade="all, delete-orphan",
    )


class CritiqueResultModel(Base):
    """Structured critique for a submission (at most one per submission)."""

    __tablename__ = "critique_results"

    id: Mapped[PyUUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    submission_id: Mapped[PyUUID] = mapped_column(
        Uuid, ForeignKey("submissions.id", ondelete="CASCADE"), unique=True, index=True
    )
    overall_score: Mapped[int] = mapped_column(Integer, nullable=False)
    edit_quality_score: Mapped[int] = mapped_column(Integer, nullable=False)
    pacing_score: Mapped[int] = mapped_column(Integer, nullable=False)
    retention_score: Mapped[int] = mapped_column(Integer, nullable=False)
    overall_feedback: Mapped[str] = mapped_column(Text, nullable=False, default="")
    strengths: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    weaknesses: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    edit_analysis: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    pacing_analysis: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    audio_analysis: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    risk_zones: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    recommendations: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    benchmark_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    model_response: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    model_used: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    submission: Mapped["SubmissionModel"] = relationship(
        "SubmissionModel", back_populates="critique"
    )


class BenchmarkVideoModel(Base):
    """Cached comparable video, keyed by its YouTube id."""

    __tablename__ = "benchmark_videos"

    id: Mapped[PyUUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    youtube_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    channel_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    views: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    likes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    engagement: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )
