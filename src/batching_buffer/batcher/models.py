"""Configuration model and flush trigger types for the batching buffer."""

from __future__ import annotations

import threading
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigurationError

BatchCallback = Callable[[List[Any]], Any]


class FlushTrigger(str, Enum):
    """What caused a batch to be delivered."""

    SIZE = "size"
    TIMEOUT = "timeout"
    MANUAL = "manual"


class BufferConfig(BaseModel):
    """Immutable buffer configuration, validated at construction.

    Invalid values raise ``ConfigurationError`` instead of pydantic's
    ``ValidationError`` so callers only need to know about this package's
    exceptions.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    max_size: int = Field(..., gt=0, strict=True, description="Flush when this many items are pending")
    timeout: Optional[float] = Field(None, ge=0, le=threading.TIMEOUT_MAX, allow_inf_nan=False, description="Seconds after the first item before a timed flush")
    callback: BatchCallback = Field(..., description="Receives each batch as an ordered list")

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            errors = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
            raise ConfigurationError(f"Invalid buffer configuration: {'; '.join(errors)}", errors) from e

    @field_validator("timeout", mode="before")
    @classmethod
    def convert_timedelta(cls, value: Any) -> Any:
        """Accept ``timedelta`` timeouts as seconds. Bools are not durations."""
        if isinstance(value, bool):
            raise ValueError("timeout must be a number of seconds, not a bool")
        if isinstance(value, timedelta):
            return value.total_seconds()
        return value

    @property
    def timed_flush_enabled(self) -> bool:
        """A timeout of ``None`` or zero disables the timed flush."""
        return bool(self.timeout)
