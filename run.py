"""Cavern Forge CLI entry point.

Subcommands:
  server     run the Flask API that hands out seeded worlds
  generate   render one world straight to the terminal

Flags win over environment variables; a .env file is loaded first when
present (or from --env-file). Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from textwrap import dedent

from dotenv import load_dotenv

__version__ = "0.1.0"

EPILOG = dedent(
    """
    Environment variables:
      HOST, PORT      Bind address and port for `server` (default 0.0.0.0:5000)
      DATABASE_URL    SQLAlchemy URI (default: sqlite:///instance/worlds.db)
      WORLD_WIDTH, WORLD_HEIGHT, WORLD_MIN_CAVERNS, WORLD_MAX_CAVERNS,
      WORLD_EXTRA_TUNNEL_PROBABILITY
                      Generation overrides for both subcommands

    Examples:
      python run.py server --host 127.0.0.1 --port 8080
      python run.py generate 42 --avatar
      python run.py generate 42 --hash
    """
)


def _add_server_command(subparsers) -> None:
    p = subparsers.add_parser("server", help="Run the web server")
    p.add_argument("--host", help="Interface to bind (default: env HOST or 0.0.0.0)")
    p.add_argument("--port", type=int, help="Port to listen on (default: env PORT or 5000)")
    p.add_argument("--db", dest="db_uri", help="Database URI (default: env DATABASE_URL)")
    p.add_argument("--debug", action="store_true", help="Enable the Flask debugger and reloader")
    p.set_defaults(handler=_run_server)


def _add_generate_command(subparsers) -> None:
    p = subparsers.add_parser("generate", help="Print the world for a seed")
    p.add_argument("seed", type=int, help="Integer world seed")
    p.add_argument("--avatar", action="store_true", help="Draw '@' at the default spawn point")
    p.add_argument("--hash", dest="hash_only", action="store_true", help="Print only the content hash")
    p.set_defaults(handler=_run_generate)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cavernforge",
        description="Seeded cavern world generator and API server.",
        epilog=EPILOG,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--env-file", dest="env_file", help="Load this .env file before anything else")
    parser.add_argument("--version", action="version", version=f"Cavern Forge {__version__}")
    # no subcommand means `server` with its defaults
    parser.set_defaults(handler=_run_server, host=None, port=None, db_uri=None, debug=False)
    subparsers = parser.add_subparsers(dest="command")
    _add_server_command(subparsers)
    _add_generate_command(subparsers)
    return parser.parse_args(argv or ["server"])


def _run_generate(args: argparse.Namespace) -> int:
    from cavernforge.logging_utils import log
    from cavernforge.world import World, WorldConfig

    try:
        config = WorldConfig.from_env()
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    world = World(seed=args.seed, config=config)
    log.debug(event="generate", seed=world.seed, floor=world.floor_count())
    if args.hash_only:
        print(world.content_hash())
    else:
        avatar = world.default_spawn() if args.avatar else None
        print("\n".join(world.render(avatar=avatar)))
    return 0


def _run_server(args: argparse.Namespace) -> int:
    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = int(args.port or os.getenv("PORT", "5000"))
    # The app reads DATABASE_URL at import time, so set it before importing.
    if args.db_uri:
        os.environ["DATABASE_URL"] = args.db_uri
    db_banner = args.db_uri or os.getenv("DATABASE_URL") or "auto (instance/worlds.db)"
    debug = bool(args.debug or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    from cavernforge.logging_utils import log
    from cavernforge.server import start_server

    divider = "=" * 40
    print("\n".join([divider, "  Cavern Forge", divider]))
    for label, value in (("Host", host), ("Port", port), ("Database", db_banner), ("Debug", debug)):
        print(f"  {label + ':':12} {value}")
    print(divider)
    log.info(event="startup", host=host, port=port, db=db_banner, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if args.env_file:
        load_dotenv(args.env_file)
    else:
        # a missing .env is fine
        load_dotenv()
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
