"""
Job Monitoring Entities

Read-only views of encoding jobs and their outputs, as returned by the
media service (polled job objects) or delivered in job-output state-change
events.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .value_objects import JobError, JobState

JOB_OUTPUT_ASSET_ODATA_TYPE = "#Microsoft.Media.JobOutputAsset"

_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_timestamp(value: Optional[Any]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp from the media service.

    Accepts a trailing 'Z' and fractional seconds longer than microseconds.
    Naive timestamps are assumed to be UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class JobOutput:
    """
    A result produced by a job.

    Plain outputs carry no asset name and are never considered for retry.
    """

    label: Optional[str] = None
    state: Optional[JobState] = None
    progress: int = 0
    error: Optional[JobError] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def is_error(self) -> bool:
        return self.state == JobState.ERROR

    def status_time(self, fallback: datetime) -> datetime:
        """Time the current state was reached: end, else start, else fallback."""
        if self.end_time is not None:
            return self.end_time
        if self.start_time is not None:
            return self.start_time
        return fallback

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "state": self.state.value if self.state else None,
            "progress": self.progress,
            "error": self.error.to_dict() if self.error else None,
            "startTime": _format_timestamp(self.start_time),
            "endTime": _format_timestamp(self.end_time),
        }

    @staticmethod
    def from_dict(data: dict) -> "JobOutput":
        """
        Create a job output from its service representation.

        The '@odata.type' discriminator selects JobOutputAsset; an
        'assetName' without a discriminator is also treated as an asset
        output, which is how event payloads flatten the type.

        Raises:
            ValueError: If the output is not an object or a field is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Job output must be an object")

        odata_type = data.get("@odata.type")
        if odata_type == JOB_OUTPUT_ASSET_ODATA_TYPE or (
            odata_type is None and "assetName" in data
        ):
            return JobOutputAsset._from_dict(data)
        return JobOutput(**_common_output_fields(data))


def _parse_progress(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid job output progress: {value!r}") from e


def _common_output_fields(data: dict) -> Dict[str, Any]:
    return {
        "label": data.get("label"),
        "state": JobState.parse(data.get("state")),
        "progress": _parse_progress(data.get("progress")),
        "error": JobError.from_dict(data.get("error")),
        "start_time": parse_timestamp(data.get("startTime")),
        "end_time": parse_timestamp(data.get("endTime")),
    }


@dataclass
class JobOutputAsset(JobOutput):
    """Job output written to a named asset; the only kind inspected for retry."""

    asset_name: str = ""

    def matches_asset(self, asset_name: str) -> bool:
        """Case-insensitive comparison against a target asset name."""
        if asset_name is None:
            return False
        return self.asset_name.casefold() == asset_name.casefold()

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["@odata.type"] = JOB_OUTPUT_ASSET_ODATA_TYPE
        data["assetName"] = self.asset_name
        return data

    @classmethod
    def _from_dict(cls, data: dict) -> "JobOutputAsset":
        asset_name = data.get("assetName") or ""
        if not isinstance(asset_name, str):
            raise ValueError("Job output assetName must be a string")
        return cls(asset_name=asset_name, **_common_output_fields(data))

    @classmethod
    def from_event_data(cls, data: dict) -> "JobOutputAsset":
        """
        Create from the 'data' section of a job-output state-change event.

        Args:
            data: Event data with an 'output' object and optional 'previousState'

        Raises:
            ValueError: If the payload has no output object
        """
        output = data.get("output")
        if not isinstance(output, dict):
            raise ValueError("Event data does not contain a job output")
        return cls._from_dict(output)


@dataclass
class Job:
    """
    Entity representing an encoding job.

    The overall state is trusted as a precondition by the classifier; it is
    not cross-checked against the outputs.
    """

    name: str
    state: Optional[JobState]
    outputs: List[JobOutput] = field(default_factory=list)
    created: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    correlation_data: Dict[str, str] = field(default_factory=dict)

    def is_error(self) -> bool:
        return self.state == JobState.ERROR

    def asset_outputs(self) -> List[JobOutputAsset]:
        """Asset outputs in their original order."""
        return [output for output in self.outputs if isinstance(output, JobOutputAsset)]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "properties": {
                "state": self.state.value if self.state else None,
                "outputs": [output.to_dict() for output in self.outputs],
                "created": _format_timestamp(self.created),
                "lastModified": _format_timestamp(self.last_modified),
                "correlationData": dict(self.correlation_data),
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Job":
        """
        Create Job from its service representation.

        Accepts both the resource envelope ({"name", "properties": {...}})
        and a flattened object.

        Raises:
            ValueError: If the job, its outputs or its timestamps are malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Job must be an object")

        props = data.get("properties")
        if props is None:
            props = data
        elif not isinstance(props, dict):
            raise ValueError("Job properties must be an object")

        outputs = props.get("outputs") or []
        if not isinstance(outputs, list):
            raise ValueError("Job outputs must be a list")

        correlation_data = props.get("correlationData") or {}
        if not isinstance(correlation_data, dict):
            raise ValueError("Job correlationData must be an object")

        return cls(
            name=data.get("name") or "",
            state=JobState.parse(props.get("state")),
            outputs=[JobOutput.from_dict(o) for o in outputs],
            created=parse_timestamp(props.get("created")),
            last_modified=parse_timestamp(props.get("lastModified")),
            correlation_data=dict(correlation_data),
        )
