"""Celery job definitions."""

from video_critic.jobs.analysis import run_analysis_task

__all__ = ["run_analysis_task"]
