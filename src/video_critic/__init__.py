"""Video Critic - AI critique of video editing, pacing and retention."""

__version__ = "0.1.0"
