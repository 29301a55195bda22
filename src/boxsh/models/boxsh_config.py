"""Configuration model for boxsh."""

from pydantic import BaseModel

DEFAULT_SANDBOX_TOOL = "nix-shell"
DEFAULT_PROMPT_PREFIX = "(boxsh)"


class BoxshConfig(BaseModel):
    """Runtime configuration for boxsh."""

    sandbox_tool: str = DEFAULT_SANDBOX_TOOL
    user_init_hook: str = ""
    prompt_prefix: str = DEFAULT_PROMPT_PREFIX
