"""Launch the user's shell inside the sandbox tool."""

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence

from boxsh.errors import SessionError, ShellrcError
from boxsh.models import BoxshConfig, ShellKind, ShellProfile
from boxsh.shell.command import exec_command
from boxsh.shell.environment import build_session_env, env_list_to_dict, to_keep_args
from boxsh.shell.hooks import write_shellrc

log = logging.getLogger(__name__)


def _shell_command(profile: ShellProfile, config: BoxshConfig) -> str:
    """Write the session shellrc and return the exec command for the shell."""
    shellrc_path: str | None = None
    if profile.user_shellrc_path and profile.kind is not ShellKind.UNKNOWN:
        try:
            shellrc_path = write_shellrc(profile, prompt_prefix=config.prompt_prefix)
        except ShellrcError as e:
            # Launch the shell without a custom shellrc.
            log.debug("failed to write boxsh shellrc: %s", e)
    return exec_command(profile, shellrc_path)


def build_argv(
    nix_path: str,
    env: Sequence[str],
    command: str | None,
    config: BoxshConfig,
) -> list[str]:
    """Return the sandbox tool invocation for a session.

    ``command`` is the exec command for the user's shell, or None to let the
    sandbox tool start its own default shell. Nothing is written or spawned.
    """
    keep_args = to_keep_args(env)
    if command is None:
        return [config.sandbox_tool, "--pure", *keep_args, nix_path]
    return [config.sandbox_tool, "--command", command, "--pure", *keep_args, nix_path]


def run_shell(
    nix_path: str,
    profile: ShellProfile | None = None,
    *,
    config: BoxshConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Run an interactive shell in the environment described by ``nix_path``.

    With no ``profile`` the sandbox tool starts its own default shell. Blocks
    until the shell exits.

    Raises:
        SessionError: the sandbox tool couldn't be started or exited non-zero.
    """
    if config is None:
        config = BoxshConfig()
    if environ is None:
        environ = os.environ

    env = build_session_env(environ)
    if profile is None or not profile.bin_path:
        argv = build_argv(nix_path, env, None, config)
        log.debug("unable to detect the user's shell, falling back to: %s", argv)
    else:
        argv = build_argv(nix_path, env, _shell_command(profile, config), config)
        log.debug("executing %s command: %s", config.sandbox_tool, argv)

    # stdin, stdout and stderr are inherited from the controlling terminal.
    try:
        subprocess.run(argv, env=env_list_to_dict(env), check=True)
    except subprocess.CalledProcessError as e:
        raise SessionError(
            f"{config.sandbox_tool} exited with status {e.returncode}",
            returncode=e.returncode,
        ) from e
    except OSError as e:
        raise SessionError(f"failed to run {config.sandbox_tool}: {e}") from e
