"""Handlers for 'novaticket config' commands."""

from pathlib import Path

from novaticket.cli._common import error, output_json, output_result
from novaticket.config import DEFAULTS, read_config, write_config_key


def config_get(args) -> int:
    """Show settings, or one setting if a key is given."""
    config = read_config(Path(args.data).expanduser())
    if args.key:
        key = args.key.replace("-", "_")
        if key not in config:
            error(f"unknown setting '{args.key}'", args.json)
        config = {key: config[key]}

    if args.json:
        output_json(config)
    else:
        for key, value in config.items():
            print(f"{key.replace('_', '-')} = {value}")
    return 0


def config_set(args) -> int:
    """Write one setting."""
    if args.key.replace("_", "-") not in DEFAULTS:
        error(f"unknown setting '{args.key}'. Known: {', '.join(DEFAULTS)}", args.json)
    try:
        write_config_key(Path(args.data).expanduser(), args.key.replace("-", "_"), args.value)
    except ValueError:
        error(f"invalid value for {args.key}: '{args.value}'", args.json)
    output_result({args.key: args.value}, f"{args.key} = {args.value}", args.json)
    return 0
