"""Model package for boxsh."""

from boxsh.models.boxsh_config import DEFAULT_PROMPT_PREFIX, DEFAULT_SANDBOX_TOOL, BoxshConfig
from boxsh.models.shell_profile import ShellKind, ShellProfile

__all__ = [
    "BoxshConfig",
    "DEFAULT_PROMPT_PREFIX",
    "DEFAULT_SANDBOX_TOOL",
    "ShellKind",
    "ShellProfile",
]
