"""
Encoding Value Objects

Transforms (encoding recipes) and the assets they read from and write to.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

BUILT_IN_PRESET_ODATA_TYPE = "#Microsoft.Media.BuiltInStandardEncoderPreset"


class OnErrorType(Enum):
    """What a job does when one transform output fails."""
    STOP_PROCESSING_JOB = "StopProcessingJob"
    CONTINUE_JOB = "ContinueJob"


class Priority(Enum):
    """Relative priority of a transform output."""
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"


@dataclass(frozen=True)
class TransformOutput:
    """A single output of a transform, built from a named encoder preset."""
    preset: str
    on_error: OnErrorType = OnErrorType.STOP_PROCESSING_JOB
    relative_priority: Priority = Priority.NORMAL

    def __post_init__(self):
        if not self.preset:
            raise ValueError("Preset name is required")

    def to_dict(self) -> dict:
        return {
            "preset": {
                "@odata.type": BUILT_IN_PRESET_ODATA_TYPE,
                "presetName": self.preset,
            },
            "onError": self.on_error.value,
            "relativePriority": self.relative_priority.value,
        }


@dataclass(frozen=True)
class Transform:
    """Encoding recipe registered in the media account."""
    name: str
    outputs: Tuple[TransformOutput, ...] = field(default_factory=tuple)
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Transform":
        props = data.get("properties") or {}
        outputs = []
        for output in props.get("outputs") or []:
            preset = (output.get("preset") or {}).get("presetName")
            if not preset:
                continue
            outputs.append(
                TransformOutput(
                    preset=preset,
                    on_error=OnErrorType(output.get("onError", OnErrorType.STOP_PROCESSING_JOB.value)),
                    relative_priority=Priority(output.get("relativePriority", Priority.NORMAL.value)),
                )
            )
        return cls(
            name=data.get("name", ""),
            outputs=tuple(outputs),
            description=props.get("description"),
        )


@dataclass(frozen=True)
class Asset:
    """Stored media asset; container is the storage container holding its blobs."""
    name: str
    asset_id: Optional[str] = None
    container: Optional[str] = None
    storage_account_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Asset":
        props = data.get("properties") or {}
        return cls(
            name=data.get("name", ""),
            asset_id=props.get("assetId"),
            container=props.get("container"),
            storage_account_name=props.get("storageAccountName"),
        )
