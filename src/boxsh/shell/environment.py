"""Environment curation for the sandboxed shell."""

import logging
import os
from collections.abc import Iterable, Mapping, Sequence

log = logging.getLogger(__name__)

# Marker that stops the user's shellrc from sourcing nix-daemon.sh again
# inside the sandbox.
NIX_SOURCED_MARKER = "__ETC_PROFILE_NIX_SOURCED"

# Variables copied verbatim into the sandbox. Everything else is stripped by
# the sandbox tool's --pure mode.
ENV_TO_KEEP: frozenset[str] = frozenset(
    {
        # POSIX
        "HOME",
        "OLDPWD",
        "PWD",
        "TERM",
        "TZ",
        "USER",
        # POSIX locale
        "LC_ALL",  # Overrides all of the variables below.
        "LANG",  # Default for any of the variables below that are unset.
        "LC_COLLATE",
        "LC_CTYPE",
        "LC_MESSAGES",
        "LC_MONETARY",
        "LC_NUMERIC",
        "LC_TIME",
        # Not strictly POSIX, but most programs agree on them.
        "TERM_PROGRAM",
        "TERM_PROGRAM_VERSION",
        "SHLVL",
        # Set by macOS Terminal.app before it launches the shell. Dropping
        # them breaks session save/resume (see /etc/zshrc_Apple_Terminal).
        "TERM_SESSION_ID",
        "SHELL_SESSIONS_DISABLE",
        "SECURITYSESSIONID",
        # Nix and boxsh
        "PARENT_PATH",  # PATH of the shell that invoked boxsh.
        NIX_SOURCED_MARKER,
        "NIX_SSL_CERT_FILE",
        "SSL_CERT_FILE",
    }
)


def keep_list_contains(name: str) -> bool:
    """Return whether a variable is copied verbatim into the sandbox."""
    return name in ENV_TO_KEEP


def to_keep_args(env: Iterable[str]) -> list[str]:
    """Build the ``--keep NAME`` arguments for a list of ``NAME=VALUE`` entries.

    Arguments follow the order of ``env``. A name that appears more than once
    gets a ``--keep`` pair for each occurrence.
    """
    args: list[str] = []
    for entry in env:
        name = entry.partition("=")[0]
        if keep_list_contains(name):
            args.extend(["--keep", name])
    return args


def split_nix_list(value: str) -> list[str]:
    """Split and normalize a space-delimited list of paths.

    Nix variables such as NIX_PROFILES separate entries with spaces, not
    ``os.pathsep``.
    """
    return [os.path.normpath(path) for path in value.split()]


def clean_env_path(path_env: str, profile_dirs: Sequence[str]) -> str:
    """Clean a PATH-style string before handing it to the sandbox.

    Each entry is normalized, then dropped if it is relative or if it lies
    under one of ``profile_dirs``. The remaining entries keep their order.

    The profile check is a plain string prefix match, so ``/nix/store/abc``
    also drops ``/nix/store/abcdef/bin``.
    """
    cleaned: list[str] = []
    for raw in path_env.split(os.pathsep):
        path = os.path.normpath(raw)
        if path == "." or not path.startswith("/"):
            continue
        if any(path.startswith(profile_dir) for profile_dir in profile_dirs):
            continue
        cleaned.append(path)
    return os.pathsep.join(cleaned)


def build_session_env(environ: Mapping[str, str] | None = None) -> list[str]:
    """Return the ``NAME=VALUE`` environment for the sandbox tool.

    The ambient environment comes first, followed by the overrides, so the
    overrides win once the list is turned into a mapping.
    """
    if environ is None:
        environ = os.environ

    # shellrc templates assume NIX_PROFILES entries are normalized.
    profile_dirs = split_nix_list(environ.get("NIX_PROFILES", ""))
    parent_path = clean_env_path(environ.get("PATH", ""), profile_dirs)
    log.debug("PARENT_PATH=%s", parent_path)

    env = [f"{name}={value}" for name, value in environ.items()]
    env.extend(
        [
            f"PARENT_PATH={parent_path}",
            f"NIX_PROFILES={' '.join(profile_dirs)}",
            f"{NIX_SOURCED_MARKER}=1",
        ]
    )
    return env


def env_list_to_dict(env: Iterable[str]) -> dict[str, str]:
    """Convert ``NAME=VALUE`` entries to a mapping; later entries win."""
    result: dict[str, str] = {}
    for entry in env:
        name, _, value = entry.partition("=")
        result[name] = value
    return result
