"""Rendering of the startup file that a boxsh shell runs at launch."""


def _section(title: str, body: str) -> str:
    return f"# Begin {title}\n\n{body}\n\n# End {title}\n"


def render_shellrc(
    *,
    original_init: str,
    original_init_path: str,
    user_hook: str,
    plan_init_hook: str,
    prompt_prefix: str = "",
) -> str:
    """Render the boxsh shellrc.

    The user's original init script runs first so the shell feels familiar,
    then the boxsh post-init section, then the session (plan) hook and the
    user hook. Sections whose field is empty are left out.
    """
    parts: list[str] = []
    if original_init:
        parts.append(_section(original_init_path, original_init))

    post_init = [
        # Tools from the sandbox come first; the invoking shell's PATH is
        # appended so host tools remain reachable.
        'if [ -n "$PARENT_PATH" ]; then',
        '  export PATH="$PATH:$PARENT_PATH"',
        "fi",
    ]
    if prompt_prefix:
        # Single-quoted so the prefix is never expanded. PS1 is not exported
        # to keep it out of child processes.
        quoted = prompt_prefix.replace("'", "'\\''")
        post_init.append(f"PS1='{quoted} '\"$PS1\"")
    parts.append(_section("boxsh Post-init Hook", "\n".join(post_init)))

    if plan_init_hook:
        parts.append(_section("Plan Init Hook", plan_init_hook))
    if user_hook:
        parts.append(_section("User Init Hook", user_hook))

    return "\n".join(parts)
