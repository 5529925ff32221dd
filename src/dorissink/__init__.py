from .errors import (
    IllegalStateError as IllegalStateError,
    InvalidArgumentError as InvalidArgumentError,
)

from .enum import (
    BufferingMode as BufferingMode,
    SinkOptionKey as SinkOptionKey,
)

from .options import (
    ExecutionOptions as ExecutionOptions,
    ExecutionOptionsBuilder as ExecutionOptionsBuilder,
    builder_from_properties as builder_from_properties,
)

from .labels import (
    LabelGenerator as LabelGenerator,
    is_valid_label as is_valid_label,
)

# useful to do like: `from dorissink import ExecutionOptions`
__all__ = [
    "BufferingMode",
    "ExecutionOptions",
    "ExecutionOptionsBuilder",
    "IllegalStateError",
    "InvalidArgumentError",
    "LabelGenerator",
    "SinkOptionKey",
    "builder_from_properties",
    "is_valid_label",
]
