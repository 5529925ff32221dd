from .helpers import (
    extract_prefixed as extract_prefixed,
    format_duration_ms as format_duration_ms,
    parse_bool as parse_bool,
    parse_duration_ms as parse_duration_ms,
    parse_int as parse_int,
    with_prefix as with_prefix,
)
