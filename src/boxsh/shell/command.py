"""Build the command that replaces the sandbox shell with the user's shell."""

import os
from typing import assert_never

from boxsh.models import ShellKind, ShellProfile


def _quote(value: str) -> str:
    return f'"{value}"'


def exec_command(profile: ShellProfile, shellrc_path: str | None = None) -> str:
    """Return the command passed to the sandbox tool's ``--command`` flag.

    The command execs ``env``, which then execs the shell. That lets boxsh set
    environment variables before any of the shell's own init scripts run.
    Without a shellrc the shell is launched with no extra arguments.
    """
    args = [
        "exec",
        "env",
        # SHELL may still name the outer shell; point it at the one we exec.
        _quote(f"SHELL={profile.bin_path}"),
    ]
    if not shellrc_path or profile.kind is ShellKind.UNKNOWN:
        return " ".join([*args, profile.bin_path])

    extra_env: list[str] = []
    extra_args: list[str] = []
    kind = profile.kind
    if kind is ShellKind.BASH:
        extra_args = ["--rcfile", _quote(shellrc_path)]
    elif kind is ShellKind.ZSH:
        # zsh reads .zshrc from the ZDOTDIR directory.
        extra_env = [_quote(f"ZDOTDIR={os.path.dirname(shellrc_path)}")]
    elif kind is ShellKind.KSH or kind is ShellKind.POSIX:
        extra_env = [_quote(f"ENV={shellrc_path}")]
    elif kind is ShellKind.UNKNOWN:
        pass
    else:
        assert_never(kind)

    return " ".join([*args, *extra_env, profile.bin_path, *extra_args])
