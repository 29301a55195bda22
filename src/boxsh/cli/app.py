"""`boxsh` command implementation."""

import argparse
import logging
import sys

from boxsh import __version__
from boxsh.config import load_config
from boxsh.errors import ConfigError, NoShellDetectedError, SessionError
from boxsh.shell import detect_shell, run_shell, with_plan_init_hook, with_user_init_hook

log = logging.getLogger(__name__)

DEFAULT_NIX_PATH = "shell.nix"


def _exit_status(returncode: int | None) -> int:
    """Map the sandbox tool's return code to our exit status."""
    if not returncode:
        return 1
    # subprocess reports death by signal N as -N; shells report it as 128 + N.
    if returncode < 0:
        return 128 - returncode
    return returncode


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the boxsh command."""
    parser = argparse.ArgumentParser(
        prog="boxsh",
        description="Start your own shell inside a sandboxed package environment",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--init-hook",
        default="",
        help="Shell commands to run at startup, after your own shellrc",
    )
    parser.add_argument("--tool", help="Sandbox tool to run (default: nix-shell)")
    parser.add_argument(
        "nix_path",
        nargs="?",
        default=DEFAULT_NIX_PATH,
        help=f"Environment to start the shell in (default: {DEFAULT_NIX_PATH})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Start a sandboxed shell session and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.tool:
        config.sandbox_tool = args.tool

    try:
        profile = detect_shell(
            with_plan_init_hook(args.init_hook),
            with_user_init_hook(config.user_init_hook),
        )
    except NoShellDetectedError as e:
        log.debug("%s; starting the sandbox tool's default shell", e)
        profile = None

    try:
        run_shell(args.nix_path, profile, config=config)
    except SessionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return _exit_status(e.returncode)
    return 0


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
