"""Shell profile model for the sandboxed session."""

import enum
from dataclasses import dataclass


class ShellKind(enum.Enum):
    """Shells whose startup file boxsh knows how to override."""

    BASH = "bash"
    ZSH = "zsh"
    KSH = "ksh"
    POSIX = "posix"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ShellProfile:
    """The user's shell and the hooks to run when it starts in the sandbox.

    An empty ``user_shellrc_path`` means boxsh doesn't know where the shell
    keeps its startup file, so the shell is launched without one.
    """

    kind: ShellKind
    bin_path: str
    user_shellrc_path: str = ""
    plan_init_hook: str = ""
    user_init_hook: str = ""
