from .buffering_mode import BufferingMode as BufferingMode
from .sink_option_key import (
    SinkOptionKey as SinkOptionKey,
    SINK_OPTION_NAMESPACE as SINK_OPTION_NAMESPACE,
    STREAM_LOAD_PROP_PREFIX as STREAM_LOAD_PROP_PREFIX,
)
