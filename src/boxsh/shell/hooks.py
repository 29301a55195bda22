"""Temporary shell startup files for boxsh sessions."""

import logging
import os
import tempfile

from boxsh.errors import ShellrcError
from boxsh.models import ShellProfile
from boxsh.shell.shellrc import render_shellrc

log = logging.getLogger(__name__)

DEFAULT_SHELLRC_NAME = "shellrc"


def _read_user_shellrc(path: str) -> str:
    """Return the user's shellrc content, or an empty string if unreadable."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape") as f:
            return f.read()
    except OSError as e:
        log.debug("not including %s in boxsh shellrc: %s", path, e)
        return ""


def write_shellrc(profile: ShellProfile, *, prompt_prefix: str = "") -> str:
    """Write a shellrc that runs the user's shellrc followed by boxsh hooks.

    The file is written to a new temporary directory because zsh is pointed
    at a directory (ZDOTDIR), not a file. The directory is left in place for
    the lifetime of the shell and is not removed afterwards.

    Returns:
        Absolute path of the new shellrc.

    Raises:
        ShellrcError: the directory or file couldn't be written.
    """
    # Callers launch the shell without a shellrc when its location is
    # unknown, so an empty path here is a detection bug.
    assert profile.user_shellrc_path, "write_shellrc called with an empty user shellrc path"

    try:
        tmp = tempfile.mkdtemp(prefix="boxsh")
    except OSError as e:
        raise ShellrcError(f"create temp dir for shell init file: {e}") from e

    user_shellrc = _read_user_shellrc(profile.user_shellrc_path)

    # Give the new file the same name as the user's so that shells which
    # look it up by name (zsh) find it.
    name = os.path.basename(profile.user_shellrc_path) or DEFAULT_SHELLRC_NAME
    path = os.path.join(tmp, name)

    content = render_shellrc(
        original_init=user_shellrc.strip(),
        original_init_path=os.path.normpath(profile.user_shellrc_path),
        user_hook=profile.user_init_hook.strip(),
        plan_init_hook=profile.plan_init_hook.strip(),
        prompt_prefix=prompt_prefix,
    )
    try:
        with open(path, "w", encoding="utf-8", errors="surrogateescape") as f:
            f.write(content)
    except (OSError, UnicodeError) as e:
        raise ShellrcError(f"write to shell init file: {e}") from e

    log.debug("wrote boxsh shellrc to: %s", path)
    return path
