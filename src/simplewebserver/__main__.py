"""
=============================================================================
WEB SERVER CLI ENTRY POINT
=============================================================================

    # Serve the current directory on port 8080
    python -m simplewebserver

    # Custom port
    python -m simplewebserver 3000

    # Serve another directory, localhost only
    python -m simplewebserver 3000 --root ./www --host 127.0.0.1

A bad port (not a number) or extra positional arguments print a usage
error to stderr and exit with status 2 before anything is bound.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import ServerConfig
from .server import WebServer


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="simplewebserver",
        description="Minimal concurrent HTTP/1.1 file server",
    )

    parser.add_argument(
        "port",
        nargs="?",
        type=int,
        default=8080,
        help="Port to listen on (default: 8080)",
    )

    parser.add_argument(
        "--host", "-H",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--root", "-r",
        default=None,
        help="Directory to serve (default: current directory)",
    )

    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=30.0,
        help="Seconds a client may stay idle while sending its request (default: 30)",
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"SimpleWebServer {__version__}",
    )

    return parser


def main(argv=None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        root_dir=args.root,
        read_timeout=args.timeout,
        log_level=args.log_level,
    )

    try:
        server = WebServer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print("Waiting for request . . . ", file=sys.stderr)
    print(f"port: {config.port}", file=sys.stderr)

    try:
        ok = server.start()
    except KeyboardInterrupt:
        server.shutdown()
        return 0

    if not ok:
        print("Execution failed!", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
