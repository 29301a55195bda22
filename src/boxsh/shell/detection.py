"""Shell detection for the sandboxed session."""

import dataclasses
import logging
import os
from collections.abc import Callable, Mapping

from boxsh.errors import NoShellDetectedError
from boxsh.models import ShellKind, ShellProfile

log = logging.getLogger(__name__)

ShellOption = Callable[[ShellProfile], ShellProfile]

# Made-up name for a POSIX shell's init file when ENV isn't set, so there is
# somewhere to put a new one.
DEFAULT_POSIX_SHELLRC = ".shinit"

_RC_BASENAMES = {
    ShellKind.BASH: ".bashrc",
    ShellKind.ZSH: ".zshrc",
    ShellKind.KSH: ".kshrc",
}


def with_plan_init_hook(hook: str) -> ShellOption:
    """Return an option that sets the session-level init hook."""

    def apply(profile: ShellProfile) -> ShellProfile:
        return dataclasses.replace(profile, plan_init_hook=hook)

    return apply


def with_user_init_hook(hook: str) -> ShellOption:
    """Return an option that sets the user-level init hook."""

    def apply(profile: ShellProfile) -> ShellProfile:
        return dataclasses.replace(profile, user_init_hook=hook)

    return apply


def classify_shell(bin_path: str) -> ShellKind:
    """Return the shell kind for a shell binary path."""
    base = os.path.basename(os.path.normpath(bin_path))
    # Login shells are named with a leading dash.
    if base.startswith("-"):
        base = base[1:]
    if base == "bash":
        return ShellKind.BASH
    if base == "zsh":
        return ShellKind.ZSH
    if base == "ksh":
        return ShellKind.KSH
    if base in {"dash", "ash", "sh"}:
        return ShellKind.POSIX
    return ShellKind.UNKNOWN


def rcfile_path(basename: str, environ: Mapping[str, str] | None = None) -> str:
    """Return the absolute path of an rcfile in the user's home directory.

    The file may not exist. Returns an empty string when HOME is unset.
    """
    if environ is None:
        environ = os.environ
    home = environ.get("HOME", "")
    if not home:
        return ""
    return os.path.join(home, basename)


def detect_shell(*opts: ShellOption, environ: Mapping[str, str] | None = None) -> ShellProfile:
    """Detect the user's default shell from SHELL.

    Raises:
        NoShellDetectedError: SHELL is unset or empty.
    """
    if environ is None:
        environ = os.environ
    shell = environ.get("SHELL", "")
    if not shell:
        raise NoShellDetectedError("unable to detect the current shell")

    kind = classify_shell(shell)
    if kind is ShellKind.POSIX:
        shellrc_path = environ.get("ENV", "") or DEFAULT_POSIX_SHELLRC
    elif kind is ShellKind.UNKNOWN:
        shellrc_path = ""
    else:
        shellrc_path = rcfile_path(_RC_BASENAMES[kind], environ)

    profile = ShellProfile(
        kind=kind,
        bin_path=os.path.normpath(shell),
        user_shellrc_path=shellrc_path,
    )
    for opt in opts:
        profile = opt(profile)

    log.debug("detected shell: %s", profile.bin_path)
    log.debug("recognized shell as: %s", profile.kind.value)
    log.debug("looking for user's shell init file at: %s", profile.user_shellrc_path)
    return profile
