"""
Execution Options Inspection Tool.

Resolves a set of `sink.*` properties into `ExecutionOptions` exactly the way
a sink would, and prints the result. Useful to check a job definition before
submitting it.

Typical usage:
    $ doris-sink-options -p sink.label-prefix=orders -p sink.enable.batch-mode=true
    $ doris-sink-options --defaults --properties-file ./sink.json --json
"""

import argparse
import json
import logging as log
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .errors import IllegalStateError, InvalidArgumentError
from .options import ExecutionOptions, builder_from_properties


def _parse_property_args(pairs: Optional[List[str]]) -> Dict[str, str]:
    """
    Parses repeated `KEY=VALUE` arguments.

    Raises:
        InvalidArgumentError: If an argument has no '=' or an empty key.
    """
    props: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise InvalidArgumentError(f"Expected KEY=VALUE, got '{pair}'")
        props[key] = value
    return props


def _load_properties_file(path: Path) -> Dict[str, str]:
    """
    Reads a JSON object of properties from `path`.

    Raises:
        InvalidArgumentError: If the file cannot be read or is not a JSON object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidArgumentError(f"Cannot read properties file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise InvalidArgumentError(
            f"Properties file '{path}' must contain a JSON object."
        )
    return data


def render_options(options: ExecutionOptions, console: Console):
    """Prints `options` as a two column table."""
    table = Table(title=f"Execution options ({options.buffering_mode} mode)")
    table.add_column("Option", style="bold cyan")
    table.add_column("Value")

    for name, value in options.model_dump().items():
        if isinstance(value, dict):
            value = ", ".join(f"{k}={v}" for k, v in value.items()) or "-"
        table.add_row(name, escape(str(value)))

    console.print(table)


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """
    Console script entry point.

    Returns:
        int: Process exit status (0 on success, 1 on configuration errors).
    """
    parser = argparse.ArgumentParser(
        description="Resolve and print stream load sink execution options."
    )
    parser.add_argument(
        "-p",
        "--property",
        action="append",
        metavar="KEY=VALUE",
        help="Sink property, e.g. sink.max-retries=3 (repeatable)",
    )
    parser.add_argument(
        "--properties-file",
        type=Path,
        help="JSON file holding an object of sink properties",
    )
    parser.add_argument(
        "--defaults",
        action="store_true",
        help="Start from the JSON-lines defaults (format=json, read_json_by_line=true)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the options snapshot as JSON instead of a table",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (Default: WARNING)",
    )

    args = parser.parse_args(argv)

    log.basicConfig(
        level=getattr(log, args.log_level),
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    console = console or Console()

    try:
        props: Dict[str, str] = {}
        if args.properties_file is not None:
            props.update(_load_properties_file(args.properties_file))
        # Command line properties win over the file
        props.update(_parse_property_args(args.property))

        base = ExecutionOptions.builder_defaults() if args.defaults else None
        options = builder_from_properties(props, base=base).build()
    except (InvalidArgumentError, IllegalStateError) as e:
        log.error(f"Invalid sink configuration: {e}")
        return 1

    if args.json:
        console.print_json(options.to_json())
    else:
        render_options(options, console)
    return 0


def doris_sink_options():
    sys.exit(main())


if __name__ == "__main__":
    doris_sink_options()
