"""Command line launcher: ``mlwpsearch [--config FILE] [--port N] ...``."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from mlwpsearch import __version__
from mlwpsearch.config.settings import Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mlwpsearch", description="Serve MarkLogic-backed site search over HTTP.")
    parser.add_argument("--config", "-c", type=Path, help="YAML settings file")
    parser.add_argument("--host", help="Bind address")
    parser.add_argument("--port", "-p", type=int, help="Bind port")
    parser.add_argument("--marklogic-url", help="MarkLogic REST app server, e.g. http://ml.local:8010")
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--debug", action="store_true", help="Log at debug level regardless of --log-level")
    parser.add_argument("--version", action="version", version=f"mlwpsearch {__version__}")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the config file (or env) and apply command line overrides."""
    if args.config:
        if not args.config.exists():
            raise FileNotFoundError(f"Config file not found: {args.config}")
        settings = Settings.from_yaml(args.config)
    else:
        settings = Settings()

    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.marklogic_url:
        scheme, _, rest = args.marklogic_url.rpartition("://")
        host, _, port = rest.rstrip("/").partition(":")
        settings.marklogic.scheme = scheme or settings.marklogic.scheme
        settings.marklogic.host = host
        if port:
            settings.marklogic.port = int(port)
    if args.log_level:
        settings.observability.log_level = args.log_level
    if args.debug:
        settings.debug = True
    return settings


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    import uvicorn

    from mlwpsearch.api.app import create_app

    # Logging is configured by create_app from the settings
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level="debug" if settings.debug else settings.observability.log_level,
        log_config=None,
    )


if __name__ == "__main__":
    main()
