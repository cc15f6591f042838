"""
Green Circle CLI - Command-line interface for the bot.

Usage:
    greencircle play                 Play a game on stdin/stdout
    greencircle decide <file>        Decide on one snapshot file
    greencircle serve                Run the HTTP API
"""

import argparse
import sys

from .config import Settings, configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Green Circle - Turn-based decision bot",
        prog="greencircle",
    )
    parser.add_argument("--personality", help="balanced, cautious or hoarder")
    parser.add_argument("--log-level", help="Logging level (logs go to stderr)")
    parser.add_argument(
        "--adjacency-scope",
        choices=["self", "self_and_opponent"],
        help="Whose desks make neighbouring desks unsafe",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game on stdin/stdout")
    play_parser.add_argument("--max-turns", type=int, default=None, help="Stop after N turns")

    # Decide command
    decide_parser = subparsers.add_parser("decide", help="Decide on one snapshot file")
    decide_parser.add_argument("snapshot_file", help="Path to a line-protocol snapshot")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
        if args.personality:
            settings.personality = args.personality
        if args.log_level:
            settings.log_level = args.log_level
        if args.adjacency_scope:
            settings.adjacency_scope = args.adjacency_scope
        settings.build_personality()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    configure_logging(settings.log_level)

    if args.command == "play":
        cmd_play(args, settings)
    elif args.command == "decide":
        cmd_decide(args, settings)
    elif args.command == "serve":
        cmd_serve(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, settings: Settings):
    """Run the read / decide / write loop."""
    from .bots import DeskBot
    from .protocol import SnapshotReader
    from .session import GameLoop

    bot = DeskBot(personality=settings.build_personality())
    loop = GameLoop(bot, SnapshotReader(sys.stdin), sys.stdout)
    loop.run(max_turns=args.max_turns)


def cmd_decide(args, settings: Settings):
    """Decide on a single snapshot file and print the command."""
    from .bots import DeskBot
    from .engine_core.errors import GreenCircleError
    from .protocol import parse_snapshot

    try:
        with open(args.snapshot_file, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {args.snapshot_file}", file=sys.stderr)
        sys.exit(1)

    try:
        decision = DeskBot(personality=settings.build_personality()).select_action(
            parse_snapshot(text)
        )
    except GreenCircleError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print(decision.action)
    print(f"# {decision.explanation}", file=sys.stderr)


def cmd_serve(args, settings: Settings):
    """Serve the HTTP API with uvicorn."""
    import uvicorn
    from .api import create_app

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
