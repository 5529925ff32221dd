from .execution_options import ExecutionOptions as ExecutionOptions
from .builder import ExecutionOptionsBuilder as ExecutionOptionsBuilder
from .properties import (
    builder_from_properties as builder_from_properties,
    to_properties as to_properties,
)
