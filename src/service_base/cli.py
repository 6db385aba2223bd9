"""
service-base command line — runs the scaffolding generators.

    service-base install                 # both files
    service-base application-service     # app/services/application_service.py
    service-base types --root ./backend  # app/models/types.py under ./backend
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

import structlog
from pydantic import ValidationError

from service_base import generators
from service_base.config import get_settings
from service_base.logs import configure_structlog

_COMMANDS = {
    "install": generators.install,
    "application-service": lambda root, settings: [
        generators.create_application_service_file(root, settings)
    ],
    "types": lambda root, settings: [generators.create_types_file(root, settings)],
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="service-base",
        description="Scaffold the conventional service_base files in an application.",
    )
    parser.add_argument(
        "command",
        choices=sorted(_COMMANDS),
        help="install runs every generator",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Project root the generated paths are relative to (default: current directory)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        return 1

    configure_structlog(settings.log_level, settings.log_renderer)
    log = structlog.get_logger(__name__)

    try:
        generated = _COMMANDS[args.command](args.root, settings)
    except OSError as e:
        log.error("generator.failed", command=args.command, error=str(e))
        return 1

    for item in generated:
        print(f"{item.action.value:>9}  {item.path}")  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
