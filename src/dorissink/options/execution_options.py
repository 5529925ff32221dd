"""
Execution Options Module.

This module defines `ExecutionOptions`, the immutable set of knobs a streaming
load sink reads once at startup: retry budget, buffering strategy and flush
thresholds, delete forwarding, two-phase commit participation, label prefix
and the raw stream load properties.

Instances are produced by `ExecutionOptionsBuilder` and can be captured in
checkpoint state via `to_json()` / `from_json()` (or pickle) and restored
verbatim on recovery.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, TYPE_CHECKING
import logging as log

import pydantic

from ..enum import BufferingMode
from ..errors import _make_invalid_argument
from . import constants as c

if TYPE_CHECKING:
    from .builder import ExecutionOptionsBuilder


class ExecutionOptions(pydantic.BaseModel):
    """
    Immutable execution options of the sink.

    The model is frozen: attribute assignment raises. `stream_load_prop` is a
    read-only view over a private copy owned by this instance, so neither the
    dict originally handed to the builder nor the exposed mapping can change it.

    Use `ExecutionOptions.builder()` to assemble a new instance, or
    `ExecutionOptions.defaults()` for the JSON-lines defaults.
    """

    model_config = pydantic.ConfigDict(frozen=True, extra="forbid", strict=True)

    check_interval: int = c.DEFAULT_CHECK_INTERVAL
    """Polling interval (ms) for checking in-flight load job status."""

    max_retries: int = pydantic.Field(default=c.DEFAULT_MAX_RETRY_TIMES, ge=0)
    """Max retry attempts for a failed flush or commit."""

    buffer_size: int = c.DEFAULT_BUFFER_SIZE
    """Size in bytes of each write buffer (checkpoint mode)."""

    buffer_count: int = c.DEFAULT_BUFFER_COUNT
    """Number of buffers in rotation (checkpoint mode)."""

    label_prefix: str = c.DEFAULT_LABEL_PREFIX
    """Prefix of the generated load labels. May be empty."""

    stream_load_prop: Dict[str, str] = pydantic.Field(
        default_factory=dict, validate_default=True
    )
    """Protocol properties passed opaquely to the stream load request (read-only)."""

    enable_delete: bool = c.DEFAULT_ENABLE_DELETE
    """Whether delete-marked rows are forwarded as deletions."""

    enable_2pc: bool = c.DEFAULT_ENABLE_2PC
    """Whether loads are pre-committed and committed/aborted on checkpoint."""

    enable_batch_mode: bool = c.DEFAULT_ENABLE_BATCH_MODE
    """Selects the batch flush queue instead of checkpoint driven flushing."""

    flush_queue_size: int = c.DEFAULT_FLUSH_QUEUE_SIZE
    """Depth of the pending flush queue (batch mode)."""

    buffer_flush_max_rows: int = c.DEFAULT_BUFFER_FLUSH_MAX_ROWS
    """Row count threshold triggering a flush (batch mode)."""

    buffer_flush_max_bytes: int = c.DEFAULT_BUFFER_FLUSH_MAX_BYTES
    """Byte size threshold triggering a flush (batch mode)."""

    buffer_flush_interval_ms: int = pydantic.Field(
        default=c.DEFAULT_BUFFER_FLUSH_INTERVAL_MS,
        ge=c.MIN_BUFFER_FLUSH_INTERVAL_MS,
    )
    """Elapsed time threshold (ms) triggering a flush (batch mode). At least one second."""

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except pydantic.ValidationError as e:
            raise _make_invalid_argument("Invalid execution options", e) from e

    # --- Read-only stream load properties ---

    @pydantic.field_validator("stream_load_prop", mode="before")
    @classmethod
    def copy_stream_load_prop(cls, value: Any) -> Any:
        # Read-only views (e.g. from another instance) are validated as plain dicts
        if isinstance(value, Mapping) and not isinstance(value, dict):
            return dict(value)
        return value

    @pydantic.field_validator("stream_load_prop", mode="after")
    @classmethod
    def freeze_stream_load_prop(cls, value: Dict[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @pydantic.field_serializer("stream_load_prop")
    def dump_stream_load_prop(self, value: Mapping[str, str]) -> Dict[str, str]:
        return dict(value)

    def __getstate__(self) -> Dict[Any, Any]:
        # Read-only views cannot be pickled, store a plain dict instead
        state = super().__getstate__()
        fields = dict(state["__dict__"])
        fields["stream_load_prop"] = dict(fields["stream_load_prop"])
        state["__dict__"] = fields
        return state

    def __setstate__(self, state: Dict[Any, Any]) -> None:
        fields = dict(state["__dict__"])
        fields["stream_load_prop"] = MappingProxyType(dict(fields["stream_load_prop"]))
        super().__setstate__({**state, "__dict__": fields})

    # --- Factory Methods ---

    @classmethod
    def builder(cls) -> "ExecutionOptionsBuilder":
        """Returns a builder holding the plain defaults (empty stream load properties)."""
        from .builder import ExecutionOptionsBuilder

        return ExecutionOptionsBuilder()

    @classmethod
    def builder_defaults(cls) -> "ExecutionOptionsBuilder":
        """
        Returns a builder seeded with JSON-lines stream load properties
        (`format=json`, `read_json_by_line=true`); every other option is default.
        """
        return cls.builder().set_stream_load_prop(c.DEFAULT_JSON_STREAM_LOAD_PROP)

    @classmethod
    def defaults(cls) -> "ExecutionOptions":
        """Same as `builder_defaults().build()`."""
        return cls.builder_defaults().build()

    @classmethod
    def from_properties(cls, props: Dict[str, Any]) -> "ExecutionOptions":
        """
        Builds options from a flat `sink.*` property map.

        See `dorissink.options.properties.builder_from_properties`.
        """
        from .properties import builder_from_properties

        return builder_from_properties(props).build()

    # --- Snapshot ---

    def to_json(self) -> str:
        """Serializes the options into the JSON layout stored in checkpoint state."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str | bytes) -> "ExecutionOptions":
        """
        Restores options previously produced by `to_json()`.

        Raises:
            InvalidArgumentError: If the payload is not a valid options snapshot.
        """
        try:
            options = cls.model_validate_json(data)
        except pydantic.ValidationError as e:
            raise _make_invalid_argument("Invalid execution options snapshot", e) from e
        log.debug("Execution options restored from snapshot")
        return options

    def to_properties(self) -> Dict[str, str]:
        """Returns the flat `sink.*` property map describing these options."""
        from .properties import to_properties

        return to_properties(self)

    # --- Derived Views ---

    @property
    def buffering_mode(self) -> BufferingMode:
        """The buffering strategy selected by `enable_batch_mode`."""
        if self.enable_batch_mode:
            return BufferingMode.Batch
        return BufferingMode.Checkpoint
