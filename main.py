"""Main CLI entry-point."""
from __future__ import annotations

import argparse
import asyncio
import sys

from core.errors import ConfigurationError
from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings

_CYAN = "\033[96m"
_YELLOW = "\033[93m"
_RESET = "\033[0m"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rift-resolver", description="Riot player rank and build resolver")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default=settings.HOST)
    serve.add_argument("--port", type=int, default=settings.PORT)

    sub.add_parser("lookup", help="resolve one player (Name#TAG)", add_help=False)
    sub.add_parser("build", help="scrape a champion build", add_help=False)
    return parser


def _serve(host: str, port: int) -> int:
    import uvicorn
    from presentation.api import create_app

    print(f"{_CYAN}Serving on http://{host}:{port}{_RESET}")
    uvicorn.run(create_app(), host=host, port=port, log_config=None)
    return 0


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args, rest = parser.parse_known_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    log_dir = settings.LOG_DIR if settings.LOG_TO_FILE else None
    bootstrap_logging(
        level=settings.LOG_LEVEL,
        log_dir=log_dir,
        log_file_name=f"{args.command}.jsonl",
    )
    try:
        if args.command == "serve":
            return _serve(args.host, args.port)

        # Lazy imports keep `serve` from pulling in the CLI commands
        from presentation.cli import run_build, run_lookup

        if args.command == "lookup":
            return asyncio.run(run_lookup(rest))
        return asyncio.run(run_build(rest))
    except ConfigurationError as exc:
        print(f"{_YELLOW}{exc}{_RESET}")
        return 2
    finally:
        shutdown_logging()


def cli() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
