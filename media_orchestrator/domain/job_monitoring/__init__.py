"""
Job Monitoring Domain

Inspects encoding job and job output state to decide retry eligibility.
"""

from .entities import Job, JobOutput, JobOutputAsset, parse_timestamp
from .services import RetryClassifier
from .value_objects import (
    JobError,
    JobErrorCategory,
    JobOutputStatus,
    JobRetry,
    JobState,
)

__all__ = [
    'Job',
    'JobOutput',
    'JobOutputAsset',
    'JobError',
    'JobErrorCategory',
    'JobOutputStatus',
    'JobRetry',
    'JobState',
    'RetryClassifier',
    'parse_timestamp',
]
