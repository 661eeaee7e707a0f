"""Command line entry point for Cryptforge.

    python run.py generate --seed abc --width 30 --height 30
    python run.py server --port 8080

``generate`` prints one dungeon (ASCII or JSON) to stdout or a file;
``server`` runs the HTTP API. Flags beat environment variables, which may
come from a .env file (``--env-file``, otherwise ./.env when present).
"""

import argparse
import json
import os
import signal
import sys
from pathlib import Path
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()

# Plain text when stdout is piped or captured
_COLOR_ENABLED = sys.stdout.isatty()

VERSION_FILE = Path(__file__).resolve().parent / "VERSION"

EPILOG = """
Environment variables:
  HOST                                  Bind address for the API server (default: 0.0.0.0)
  PORT                                  API server port (default: 5000)
  FLASK_DEBUG                           1 behaves like --debug
  CRYPTFORGE_LOG_LEVEL                  debug|info|warn|error (default: info)
  CRYPTFORGE_ENABLE_GENERATION_METRICS  0 to skip per-phase timing

Examples:
  # 30x30 map for a fixed seed
  python run.py generate --seed abc --width 30 --height 30

  # cave preset with loops, as JSON in a file
  python run.py generate --preset cave --seed 42 --loops --format json -o cave.json

  # API on another port, settings from a custom .env
  python run.py --env-file deploy.env server --port 8080
"""


def _load_version() -> str:
    try:
        return VERSION_FILE.read_text(encoding="utf-8").strip()
    except OSError:
        return "0.0.0"


__version__ = _load_version()


def _add_server_command(subparsers) -> None:
    p = subparsers.add_parser("server", help="Run the dungeon HTTP API")
    p.add_argument("--host", default=None, help="Interface to bind (default: $HOST or 0.0.0.0)")
    p.add_argument("--port", type=int, default=None, help="Port (default: $PORT or 5000)")
    p.add_argument("--debug", action="store_true", help="Flask debugger and reloader")
    p.set_defaults(command="server")


def _add_generate_command(subparsers) -> None:
    p = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print it",
        description="Start from a preset, apply the given overrides and print the dungeon.",
    )
    p.add_argument("--preset", default="default", help="Preset name (default: default)")
    p.add_argument("--seed", default=None, help="Number or text; a random seed is drawn when omitted")
    p.add_argument("--width", type=int, default=None)
    p.add_argument("--height", type=int, default=None)
    p.add_argument("--rooms", dest="num_rooms", type=int, default=None, help="Target room count")
    p.add_argument("--density", dest="room_density", type=float, default=None, help="0..1, higher packs rooms tighter")
    p.add_argument("--theme", default=None, help="standard, cave, temple, maze or loopy")
    p.add_argument("--style", dest="hallway_style", default=None, choices=["straight", "bendy", "organic"])
    p.add_argument("--corridor-width", dest="corridor_width", type=int, default=None)
    p.add_argument("--loops", dest="create_loops", action="store_true", default=None, help="Allow extra corridors")
    p.add_argument("--loop-chance", dest="loop_chance", type=float, default=None)
    p.add_argument("--features", dest="feature_density", type=float, default=None, help="Feature density 0..1")
    p.add_argument("--format", dest="output_format", default="ascii", choices=["ascii", "json"])
    p.add_argument("--output", "-o", default=None, help="Write to this file instead of stdout")
    p.set_defaults(command="generate")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cryptforge",
        description="Cryptforge: seeded 2D dungeon generator and HTTP API.",
        epilog=dedent(EPILOG),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--env-file", dest="env_file", help="Load this .env file before reading settings")
    parser.add_argument("--version", action="version", version=f"Cryptforge {__version__}")
    subparsers = parser.add_subparsers(dest="command")
    _add_server_command(subparsers)
    _add_generate_command(subparsers)
    # No subcommand means server
    return parser.parse_args(argv or ["server"])


_PARAM_FLAGS = (
    "seed",
    "width",
    "height",
    "num_rooms",
    "room_density",
    "theme",
    "hallway_style",
    "corridor_width",
    "create_loops",
    "loop_chance",
    "feature_density",
)


def run_generate(args) -> int:
    from cryptforge.dungeon import DungeonGenerator, GenerationParams, ParameterError, preset
    from cryptforge.logging_utils import log

    overrides = {k: getattr(args, k) for k in _PARAM_FLAGS if getattr(args, k, None) is not None}
    try:
        params = GenerationParams.from_mapping(overrides, base=preset(args.preset))
    except ParameterError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    dungeon = DungeonGenerator(params).generate()
    text = json.dumps(dungeon.to_dict(), indent=2) if args.output_format == "json" else dungeon.to_ascii()
    if not args.output:
        print(text)
        return 0
    Path(args.output).write_text(text + "\n", encoding="utf-8")
    log.info(event="dungeon_written", path=args.output, seed=dungeon.seed, rooms=len(dungeon.rooms))
    return 0


def _paint(text, color) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else str(text)


def _banner(rows) -> str:
    rule = _paint("-" * 44, Fore.MAGENTA)
    title = _paint("Cryptforge Dungeon API", Fore.CYAN + Style.BRIGHT)
    body = [f"  {_paint(k + ':', Fore.YELLOW):<18} {_paint(v, Fore.GREEN)}" for k, v in rows]
    return "\n".join([rule, f"  {title}", rule, *body, rule, ""])


def run_server(args) -> int:
    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def on_sigint(sig, frame):
        print("\n[INFO] Shutting down dungeon API...")
        sys.exit(0)

    signal.signal(signal.SIGINT, on_sigint)

    # Late import: .env must be loaded before the app factory reads settings
    from cryptforge.logging_utils import log
    from cryptforge.server import start_server

    print(_banner([("Version", __version__), ("Host", host), ("Port", port), ("Debug", "YES" if debug else "NO")]))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if args.env_file:
        load_dotenv(args.env_file)
    else:
        load_dotenv()
    if args.command == "generate":
        return run_generate(args)
    return run_server(args)


def _console_main() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
