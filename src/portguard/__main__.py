"""portguard command line: check, bind or find a local TCP port."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from portguard.binder import DEFAULT_MAX_RETRIES, bind_port_with_retry, is_port_available
from portguard.config import BindPolicy, load_policy
from portguard.errors import InvalidPortError, PortGuardError
from portguard.ports import DEFAULT_HOST
from portguard.scanner import DEFAULT_MAX_ATTEMPTS, find_available_port

logger = logging.getLogger(__name__)

__all__ = ["build_parser", "run", "main"]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="portguard",
        description="Claim local TCP ports without check-then-bind races.",
    )
    parser.add_argument("--config", type=Path, help="JSON file with bind policy overrides")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every attempt")

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Probe a port once (informational only)")
    check.add_argument("port", type=int)
    check.add_argument("--host", default=DEFAULT_HOST)

    bind = sub.add_parser("bind", help="Bind a port with retry and backoff")
    bind.add_argument("port", type=int)
    bind.add_argument("--host", default=DEFAULT_HOST)
    bind.add_argument("--retries", type=int, default=DEFAULT_MAX_RETRIES)

    find = sub.add_parser("find", help="Find the first bindable port from START")
    find.add_argument("start_port", type=int)
    find.add_argument("--host", default=DEFAULT_HOST)
    find.add_argument("--attempts", type=int, default=DEFAULT_MAX_ATTEMPTS)

    return parser


async def _dispatch(args: argparse.Namespace, policy: BindPolicy) -> int:
    if args.command == "check":
        available = await is_port_available(args.port, args.host, policy=policy)
        print("available" if available else "unavailable")
        return 0 if available else 1

    if args.command == "bind":
        await bind_port_with_retry(args.port, args.host, args.retries, policy=policy)
        print(f"bound {args.host}:{args.port}")
        return 0

    port = await find_available_port(args.start_port, args.host, args.attempts, policy=policy)
    print(port)
    return 0


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    policy = BindPolicy()
    if args.config is not None:
        try:
            policy = load_policy(args.config)
        except FileNotFoundError:
            logger.error(f"Config file not found: {args.config}")
            return 2
        except OSError as e:
            logger.error(f"Cannot read config file {args.config}: {e}")
            return 2
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError, TypeError):
            # load_policy already logged the details
            return 2

    try:
        return asyncio.run(_dispatch(args, policy))
    except InvalidPortError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2
    except PortGuardError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


def main() -> None:
    """Console script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
