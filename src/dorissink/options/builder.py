"""
Execution Options Builder Module.

Holds `ExecutionOptionsBuilder`, the mutable accumulator of option overrides.
Every setter returns the builder itself so configurations can be composed
fluently:

    options = (
        ExecutionOptions.builder()
        .set_label_prefix("orders")
        .set_max_retries(3)
        .enable_batch_mode()
        .set_buffer_flush_interval_ms(5_000)
        .build()
    )
"""

from typing import Any, Mapping, Set
import logging as log

from ..errors import IllegalStateError, InvalidArgumentError
from . import constants as c
from .execution_options import ExecutionOptions

# Options only read by the sink when batch mode is enabled
_BATCH_MODE_OPTIONS = (
    "flush_queue_size",
    "buffer_flush_max_rows",
    "buffer_flush_max_bytes",
    "buffer_flush_interval_ms",
)

# Options expected to be strictly positive. Non-positive values are accepted
# but reported, the consuming pipeline decides how to handle them.
_POSITIVE_OPTIONS = (
    "check_interval",
    "buffer_size",
    "buffer_count",
    "flush_queue_size",
    "buffer_flush_max_rows",
    "buffer_flush_max_bytes",
)


class ExecutionOptionsBuilder:
    """
    Accumulates option overrides on top of the defaults and produces an
    immutable `ExecutionOptions`.

    The builder is not frozen by `build()`: each call returns an independent
    snapshot of the current state. `disable_2pc()` and `enable_batch_mode()`
    are one-way toggles.

    Not thread-safe; intended for sequential configuration at job definition time.
    """

    def __init__(self):
        self._check_interval: int = c.DEFAULT_CHECK_INTERVAL
        self._max_retries: int = c.DEFAULT_MAX_RETRY_TIMES
        self._buffer_size: int = c.DEFAULT_BUFFER_SIZE
        self._buffer_count: int = c.DEFAULT_BUFFER_COUNT
        self._label_prefix: str = c.DEFAULT_LABEL_PREFIX
        self._stream_load_prop: dict[str, str] = {}
        self._enable_delete: bool = c.DEFAULT_ENABLE_DELETE
        self._enable_2pc: bool = c.DEFAULT_ENABLE_2PC

        self._enable_batch_mode: bool = c.DEFAULT_ENABLE_BATCH_MODE
        self._flush_queue_size: int = c.DEFAULT_FLUSH_QUEUE_SIZE
        self._buffer_flush_max_rows: int = c.DEFAULT_BUFFER_FLUSH_MAX_ROWS
        self._buffer_flush_max_bytes: int = c.DEFAULT_BUFFER_FLUSH_MAX_BYTES
        self._buffer_flush_interval_ms: int = c.DEFAULT_BUFFER_FLUSH_INTERVAL_MS

        # Names of the options explicitly set by the caller
        self._overridden: Set[str] = set()

    # --- Checkpoint mode / common ---

    def set_check_interval(self, check_interval: int) -> "ExecutionOptionsBuilder":
        self._check_interval = check_interval
        self._overridden.add("check_interval")
        return self

    def set_max_retries(self, max_retries: int) -> "ExecutionOptionsBuilder":
        """Sets the retry budget. Negative values are rejected by `build()`."""
        self._max_retries = max_retries
        self._overridden.add("max_retries")
        return self

    def set_buffer_size(self, buffer_size: int) -> "ExecutionOptionsBuilder":
        self._buffer_size = buffer_size
        self._overridden.add("buffer_size")
        return self

    def set_buffer_count(self, buffer_count: int) -> "ExecutionOptionsBuilder":
        self._buffer_count = buffer_count
        self._overridden.add("buffer_count")
        return self

    def set_label_prefix(self, label_prefix: str) -> "ExecutionOptionsBuilder":
        self._label_prefix = label_prefix
        self._overridden.add("label_prefix")
        return self

    def set_stream_load_prop(
        self, stream_load_prop: Mapping[str, Any]
    ) -> "ExecutionOptionsBuilder":
        """
        Replaces the stream load properties.

        The mapping is copied and its keys and values are stored as strings.
        Later changes to the caller's mapping are not seen by the builder.

        Raises:
            InvalidArgumentError: If a property name is empty.
        """
        props = {str(k): str(v) for k, v in stream_load_prop.items()}
        if "" in props:
            raise InvalidArgumentError("Stream load property names must not be empty.")
        self._stream_load_prop = props
        self._overridden.add("stream_load_prop")
        return self

    def set_deletable(self, enable_delete: bool) -> "ExecutionOptionsBuilder":
        self._enable_delete = enable_delete
        self._overridden.add("enable_delete")
        return self

    def disable_2pc(self) -> "ExecutionOptionsBuilder":
        """Opts the sink out of two-phase commit. Cannot be undone on this builder."""
        self._enable_2pc = False
        self._overridden.add("enable_2pc")
        return self

    # --- Batch mode ---

    def enable_batch_mode(self) -> "ExecutionOptionsBuilder":
        """Switches to the batch flush queue. Cannot be undone on this builder."""
        self._enable_batch_mode = True
        self._overridden.add("enable_batch_mode")
        return self

    def set_flush_queue_size(self, flush_queue_size: int) -> "ExecutionOptionsBuilder":
        self._flush_queue_size = flush_queue_size
        self._overridden.add("flush_queue_size")
        return self

    def set_buffer_flush_interval_ms(
        self, buffer_flush_interval_ms: int
    ) -> "ExecutionOptionsBuilder":
        """
        Sets the time based flush threshold.

        Raises:
            InvalidArgumentError: If the interval is not an integer.
            IllegalStateError: If the interval is below one second. The builder
                               keeps its previous value.
        """
        if isinstance(buffer_flush_interval_ms, bool) or not isinstance(
            buffer_flush_interval_ms, int
        ):
            raise InvalidArgumentError(
                "buffer_flush_interval_ms must be an integer number of milliseconds, "
                f"got {type(buffer_flush_interval_ms).__name__} {buffer_flush_interval_ms!r}"
            )
        if buffer_flush_interval_ms < c.MIN_BUFFER_FLUSH_INTERVAL_MS:
            raise IllegalStateError(
                "buffer_flush_interval_ms must be greater than or equal to 1 second "
                f"({c.MIN_BUFFER_FLUSH_INTERVAL_MS} ms), got {buffer_flush_interval_ms}"
            )
        self._buffer_flush_interval_ms = buffer_flush_interval_ms
        self._overridden.add("buffer_flush_interval_ms")
        return self

    def set_buffer_flush_max_rows(
        self, buffer_flush_max_rows: int
    ) -> "ExecutionOptionsBuilder":
        self._buffer_flush_max_rows = buffer_flush_max_rows
        self._overridden.add("buffer_flush_max_rows")
        return self

    def set_buffer_flush_max_bytes(
        self, buffer_flush_max_bytes: int
    ) -> "ExecutionOptionsBuilder":
        self._buffer_flush_max_bytes = buffer_flush_max_bytes
        self._overridden.add("buffer_flush_max_bytes")
        return self

    # --- State inspection ---

    def is_2pc_enabled(self) -> bool:
        return self._enable_2pc

    def is_batch_mode_enabled(self) -> bool:
        return self._enable_batch_mode

    # --- Build ---

    def _warn_suspicious_values(self, options: ExecutionOptions):
        """Logs accepted values the consuming sink is likely to misbehave on."""
        for name in _POSITIVE_OPTIONS:
            value = getattr(options, name)
            if value <= 0:
                log.warning(f"Execution option '{name}' is not positive ({value}).")

        if not options.enable_batch_mode:
            ignored = [name for name in _BATCH_MODE_OPTIONS if name in self._overridden]
            if ignored:
                log.warning(
                    f"Batch mode is disabled: options {ignored} have no effect."
                )

    def build(self) -> ExecutionOptions:
        """
        Validates the accumulated values and returns a new `ExecutionOptions`.

        Raises:
            InvalidArgumentError: If `max_retries` is negative, or a value has
                                  the wrong type.
        """
        if isinstance(self._max_retries, int) and self._max_retries < 0:
            raise InvalidArgumentError(
                f"max_retries must be greater than or equal to 0, got {self._max_retries}"
            )

        options = ExecutionOptions(
            check_interval=self._check_interval,
            max_retries=self._max_retries,
            buffer_size=self._buffer_size,
            buffer_count=self._buffer_count,
            label_prefix=self._label_prefix,
            stream_load_prop=dict(self._stream_load_prop),
            enable_delete=self._enable_delete,
            enable_2pc=self._enable_2pc,
            enable_batch_mode=self._enable_batch_mode,
            flush_queue_size=self._flush_queue_size,
            buffer_flush_max_rows=self._buffer_flush_max_rows,
            buffer_flush_max_bytes=self._buffer_flush_max_bytes,
            buffer_flush_interval_ms=self._buffer_flush_interval_ms,
        )

        self._warn_suspicious_values(options)
        log.debug(
            f"Execution options built: mode={options.buffering_mode}, "
            f"2pc={options.enable_2pc}, max_retries={options.max_retries}"
        )
        return options
