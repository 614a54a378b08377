"""Domain value objects representing click series concepts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass


class Granularity(str, Enum):
    """Bucket resolutions selectable for a click chart, finest first."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"

    @property
    def coarseness(self) -> int:
        return _COARSENESS[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Granularity):
            return NotImplemented
        return self.coarseness < other.coarseness

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Granularity):
            return NotImplemented
        return self.coarseness <= other.coarseness

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Granularity):
            return NotImplemented
        return self.coarseness > other.coarseness

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Granularity):
            return NotImplemented
        return self.coarseness >= other.coarseness

    @classmethod
    def parse(cls, value: Union["Granularity", str, int]) -> "Granularity":
        """Accept an enum member, its value, a plural tab label or a tab index."""

        if isinstance(value, Granularity):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unsupported granularity '{value}'")
        if isinstance(value, int):
            ordered = sorted(cls, key=lambda item: item.coarseness)
            if not 0 <= value < len(ordered):
                raise ValueError(f"Granularity index out of range: {value}")
            return ordered[value]
        normalized = str(value).strip().lower()
        if normalized.endswith("s"):
            normalized = normalized[:-1]
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unsupported granularity '{value}'") from exc


_COARSENESS = {"minute": 0, "hour": 1, "day": 2}


@pydantic_dataclass(frozen=True)
class TimeKey:
    """Bucket identity captured at derivation time.

    ``key`` identifies the window, ``label`` is what a chart axis shows and
    ``sort_ordinal`` is the only value series ordering may rely on.
    """

    key: str
    label: str
    sort_ordinal: int


class BucketRecord(BaseModel):
    """One point of a click series."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    count: int = Field(..., ge=1)


Series = Tuple[BucketRecord, ...]


@dataclass(frozen=True)
class Aggregation:
    """Bucket counts over the well-formed subset of a raw click list."""

    counts: Dict[TimeKey, int] = field(default_factory=dict)
    skipped: int = 0


class AggregationRequest(BaseModel):
    """The intent a click chart is currently showing."""

    model_config = ConfigDict(frozen=True)

    subject: str
    token: str = Field(default="", repr=False)
    granularity: Granularity = Granularity.MINUTE

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("subject must be a non-empty string")
        return value


class FetchStatus(str, Enum):
    """Lifecycle of a fetch orchestrator."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ErrorKind(str, Enum):
    """Errors that can surface on a published series state.

    Empty results and malformed timestamps are recovered locally and never
    appear here.
    """

    SOURCE_UNAVAILABLE = "source_unavailable"


class SeriesState(BaseModel):
    """Snapshot published to series subscribers."""

    model_config = ConfigDict(frozen=True)

    status: FetchStatus = FetchStatus.IDLE
    request: Optional[AggregationRequest] = None
    series: Series = Field(default_factory=tuple)
    is_loading: bool = False
    error: Optional[ErrorKind] = None
    skipped: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_status(self) -> "SeriesState":
        if self.is_loading != (self.status is FetchStatus.LOADING):
            raise ValueError("is_loading must be set exactly while loading")
        if (self.error is not None) != (self.status is FetchStatus.FAILED):
            raise ValueError("error must be present exactly when failed")
        return self
