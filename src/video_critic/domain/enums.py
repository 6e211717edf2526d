"""Domain enumerations."""

from enum import StrEnum


class SourceType(StrEnum):
    """Where a submitted video comes from."""

    YOUTUBE = "youtube"  # url-reference
    UPLOAD = "upload"  # uploaded-file


class TargetAudience(StrEnum):
    """Audience segments a critique can be steered towards."""

    GEN_Z = "gen_z"
    MILLENNIALS = "millennials"
    GEN_X = "gen_x"
    BABY_BOOMERS = "baby_boomers"


class AnalysisStatus(StrEnum):
    """Lifecycle status of a submission."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (AnalysisStatus.COMPLETED, AnalysisStatus.FAILED)


class Severity(StrEnum):
    """Severity of a retention risk zone."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def coerce(cls, value: object) -> "Severity":
        """Map model output onto a known severity, defaulting to medium."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM


class PerformanceLabel(StrEnum):
    """How a video performs relative to its benchmark set."""

    ABOVE_AVERAGE = "above average"
    AVERAGE = "average"
    BELOW_AVERAGE = "below average"
    NO_DATA = "No benchmark data available"
