"""
Job Monitoring Value Objects

Immutable value objects describing encoding job and job output state.
Enum values are the wire strings used by the media service.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, NamedTuple, Optional


class JobState(Enum):
    """Lifecycle state of a job or of one of its outputs."""
    CANCELED = "Canceled"
    CANCELING = "Canceling"
    ERROR = "Error"
    FINISHED = "Finished"
    PROCESSING = "Processing"
    QUEUED = "Queued"
    SCHEDULED = "Scheduled"

    def is_terminal(self) -> bool:
        """Check if state is terminal (canceled, error or finished)."""
        return self in (JobState.CANCELED, JobState.ERROR, JobState.FINISHED)

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["JobState"]:
        """Parse a wire string, returning None for missing or unknown values."""
        return _parse_enum(cls, value)


class JobRetry(Enum):
    """Retry hint attached to a job error by the media service."""
    DO_NOT_RETRY = "DoNotRetry"
    MAY_RETRY = "MayRetry"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["JobRetry"]:
        return _parse_enum(cls, value)


class JobErrorCategory(Enum):
    """Informational error category; never consulted for retry decisions."""
    SERVICE = "Service"
    DOWNLOAD = "Download"
    UPLOAD = "Upload"
    CONFIGURATION = "Configuration"
    CONTENT = "Content"
    ACCOUNT = "Account"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["JobErrorCategory"]:
        return _parse_enum(cls, value)


def _parse_enum(enum_cls, value):
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if member.value.lower() == str(value).lower():
            return member
    return None


@dataclass(frozen=True)
class JobError:
    """
    Value object for the structured error attached to a failed job output.

    The retry field is the only signal used for retry eligibility.
    """
    code: Optional[str] = None
    message: Optional[str] = None
    category: Optional[JobErrorCategory] = None
    retry: Optional[JobRetry] = None
    details: List[dict] = field(default_factory=list)

    def may_retry(self) -> bool:
        """Check if the media service flagged this error as transient."""
        return self.retry == JobRetry.MAY_RETRY

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "category": self.category.value if self.category else None,
            "retry": self.retry.value if self.retry else None,
            "details": list(self.details),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["JobError"]:
        """Create JobError from dictionary; None stays None."""
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ValueError("Job error must be an object")
        if not isinstance(data.get("details") or [], list):
            raise ValueError("Job error details must be a list")
        return cls(
            code=data.get("code"),
            message=data.get("message"),
            category=JobErrorCategory.parse(data.get("category")),
            retry=JobRetry.parse(data.get("retry")),
            details=list(data.get("details") or []),
        )


# Earliest representable timestamp, used when no job output matches
MIN_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)


class JobOutputStatus(NamedTuple):
    """State of one job output and the time that state was reached."""
    state: Optional[JobState]
    timestamp: datetime

    @classmethod
    def unknown(cls) -> "JobOutputStatus":
        """Sentinel returned when no output matches: unknown state, minimum timestamp."""
        return cls(state=None, timestamp=MIN_TIMESTAMP)

    def is_known(self) -> bool:
        return self.state is not None

    def to_dict(self) -> dict:
        return {
            "state": self.state.value if self.state else None,
            "timestamp": self.timestamp.isoformat(),
        }
