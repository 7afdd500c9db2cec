"""CLI entrypoint for inspecting eventflow configuration."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata
import json
from pathlib import Path

from .config import apply_config, ensure_config_dir, load_config
from .logging_utils import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventflow",
        description="eventflow - DOM-style capture/bubble event dispatching",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a config.toml (defaults to ~/.config/eventflow/config.toml)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the effective configuration as JSON",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Load configuration, set up logging and apply dispatcher defaults."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("eventflow")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"eventflow {version}")
        return

    if args.config is None:
        ensure_config_dir()
    config = load_config(config_path=args.config)
    configure_logging(config["logging"])
    apply_config(config)

    if args.print_config:
        print(json.dumps(config, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
