"""Run the user's own shell inside a sandboxed package environment."""

from boxsh.shell.detection import detect_shell, with_plan_init_hook, with_user_init_hook
from boxsh.shell.launcher import run_shell

__all__ = [
    "detect_shell",
    "run_shell",
    "with_plan_init_hook",
    "with_user_init_hook",
]
