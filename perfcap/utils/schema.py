"""Data structures for capture sessions and baked animation tracks."""

from __future__ import annotations

import bisect
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from perfcap.channels import DEFAULT_EPSILON
from perfcap.interpolate import lerp_vec, slerp


class CaptureSettings(BaseModel):
    """Tunable parameters for a recorder."""

    epsilon: float = Field(default=DEFAULT_EPSILON, ge=0.0)

    @field_validator("epsilon")
    @classmethod
    def check_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"epsilon must be finite, got {v}")
        return v


@dataclass(frozen=True)
class Sample:
    """One snapshot of one node's transform at one instant.

    Position and rotation are copied into tuples at capture time, so later
    edits to the live scene transform never leak into a recorded sample.
    """

    time: float
    position: tuple[float, float, float]
    rotation: tuple[float, float, float, float]


@dataclass
class SessionState:
    """Mutable state of the single active capture session."""

    is_recording: bool = False
    tracked_ids: list[str] = field(default_factory=list)
    samples_by_entity: dict[str, list[Sample]] = field(default_factory=dict)

    def reset(self) -> None:
        self.is_recording = False
        self.tracked_ids = []
        self.samples_by_entity = {}


class Interpolation(str, Enum):
    """Interpolation mode of a keyframe toward the next one."""

    LINEAR = "linear"


class Keyframe(BaseModel):
    """A retained, time-stamped channel value."""

    model_config = ConfigDict(frozen=True)

    time: float
    value: tuple[float, ...]
    interpolation: Interpolation = Interpolation.LINEAR

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> tuple[float, ...]:
        if isinstance(v, list):
            return tuple(v)
        return v


class AnimationTrack(BaseModel):
    """Keyframes for one channel of one scene node, ordered by time."""

    entity_id: str
    channel_path: str
    keyframes: list[Keyframe] = Field(default_factory=list)

    def add_keyframe(self, keyframe: Keyframe) -> None:
        """Insert a keyframe, keeping time order.

        A keyframe sharing its time with existing ones goes after them.
        """
        index = bisect.bisect_right(self.times, keyframe.time)
        self.keyframes.insert(index, keyframe)

    def remove_keyframe(self, index: int) -> None:
        """Remove the keyframe at index. Out-of-range indices are ignored."""
        if 0 <= index < len(self.keyframes):
            del self.keyframes[index]

    def evaluate(self, time: float) -> tuple[float, ...]:
        """Sample the track at an arbitrary time.

        Holds the first value before the first keyframe and the last value
        after the last one. Rotation channels are blended with slerp, all
        others component-wise.

        Raises:
            ValueError: If the track has no keyframes.
        """
        if not self.keyframes:
            raise ValueError(f"Track '{self.entity_id}/{self.channel_path}' has no keyframes")

        first = self.keyframes[0]
        last = self.keyframes[-1]
        if time <= first.time:
            return first.value
        if time >= last.time:
            return last.value

        # First keyframe strictly after time; the segment starts one before it
        upper = bisect.bisect_right(self.times, time)
        kf_a = self.keyframes[upper - 1]
        kf_b = self.keyframes[upper]

        span = kf_b.time - kf_a.time
        if span <= 0:
            return kf_a.value
        t = (time - kf_a.time) / span

        if self.is_rotation and len(kf_a.value) == 4 and len(kf_b.value) == 4:
            return slerp(kf_a.value, kf_b.value, t)
        return lerp_vec(kf_a.value, kf_b.value, t)

    @property
    def times(self) -> list[float]:
        return [kf.time for kf in self.keyframes]

    @property
    def duration(self) -> float:
        """Time of the last keyframe, 0.0 for an empty track."""
        if not self.keyframes:
            return 0.0
        return self.keyframes[-1].time

    @property
    def is_rotation(self) -> bool:
        return "rotation" in self.channel_path

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str) -> AnimationTrack:
        return cls.model_validate_json(data)

    def __len__(self) -> int:
        return len(self.keyframes)

    def __repr__(self) -> str:
        return (
            f"AnimationTrack(entity_id='{self.entity_id}', "
            f"channel='{self.channel_path}', keyframes={len(self.keyframes)})"
        )
