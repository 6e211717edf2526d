"""Initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Submissions table
    op.create_table(
        "submissions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("source_type", sa.String(20), nullable=False),
        sa.Column("target_audience", sa.String(50), nullable=False),
        sa.Column("youtube_url", sa.String(2048), nullable=True),
        sa.Column("file_name", sa.String(512), nullable=True),
        sa.Column("file_path", sa.String(1024), nullable=True),
        sa.Column("title", sa.String(512), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("thumbnail_url", sa.String(2048), nullable=True),
        sa.Column("status", sa.String(50), nullable=False, server_default="pending"),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("celery_task_id", sa.String(255), nullable=True),
        sa.Column("source_metadata", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_submissions_status", "submissions", ["status"])
    op.create_index("ix_submissions_created_at", "submissions", ["created_at"])

    # Critique results table (one per submission)
    op.create_table(
        "critique_results",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("submission_id", sa.Uuid(), nullable=False),
        sa.Column("overall_score", sa.Integer(), nullable=False),
        sa.Column("edit_quality_score", sa.Integer(), nullable=False),
        sa.Column("pacing_score", sa.Integer(), nullable=False),
        sa.Column("retention_score", sa.Integer(), nullable=False),
        sa.Column("overall_feedback", sa.Text(), nullable=False),
        sa.Column("strengths", sa.JSON(), nullable=False),
        sa.Column("weaknesses", sa.JSON(), nullable=False),
        sa.Column("edit_analysis", sa.JSON(), nullable=False),
        sa.Column("pacing_analysis", sa.JSON(), nullable=False),
        sa.Column("audio_analysis", sa.JSON(), nullable=False),
        sa.Column("risk_zones", sa.JSON(), nullable=False),
        sa.Column("recommendations", sa.JSON(), nullable=False),
        sa.Column("benchmark_data", sa.JSON(), nullable=True),
        sa.Column("model_response", sa.JSON(), nullable=True),
        sa.Column("model_used", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["submission_id"], ["submissions.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("submission_id", name="uq_critique_results_submission_id"),
    )
    op.create_index("ix_critique_results_submission_id", "critique_results", ["submission_id"])

    # Benchmark videos table
    op.create_table(
        "benchmark_videos",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("youtube_id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("channel_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("views", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("likes", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("engagement", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_benchmark_videos_youtube_id", "benchmark_videos", ["youtube_id"], unique=True)


def downgrade() -> None:
    op.drop_table("benchmark_videos")
    op.drop_table("critique_results")
    op.drop_table("submissions")
