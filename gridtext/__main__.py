"""gridtext CLI entry point.

Allows running via `python -m gridtext` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import LOG_LEVELS, load_config
from .version import get_version_string

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gridtext", description="gridtext: text buffer engine")
    parser.add_argument("--version", "-V", action="store_true", help="Print build info and exit")
    parser.add_argument("--console", action="store_true",
                        help="Edit the seed document in this terminal instead of serving HTTP")
    parser.add_argument("--config", type=Path, default=None, help="Config file (JSON)")
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to")
    parser.add_argument("--log-level", default=None, choices=list(LOG_LEVELS))
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.version:
        print(get_version_string())
        return

    config = load_config(args.config)
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    if args.log_level:
        config.log_level = args.log_level

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Lazy imports so --version does not load the server or terminal stack
    if args.console:
        from .console import Console
        from .engine import Engine

        Console(Engine.from_seed(config.seed)).run()
        return

    from .app import create_app

    app = create_app(config)
    logger.info(f"Serving gridtext {get_version_string()} on {config.host}:{config.port}")

    import uvicorn

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)


if __name__ == "__main__":  # pragma: no cover
    main()
