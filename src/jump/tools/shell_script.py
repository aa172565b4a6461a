"""
Shell integration scripts emitted by ``jump shell``.

The script does two things: it records the current directory after every
prompt by calling ``jump chdir``, and it defines the jump function (named
after the configured command) that resolves its arguments with ``jump cd``
and changes into the result.
"""

from enum import Enum
from typing import List


EXECUTABLE_NAME = "jump"


class ShellKind(Enum):
    """Shells an integration script can be generated for."""
    BASH = "bash"
    ZSH = "zsh"


BASH_TEMPLATE = """__jump_prompt_command() {{
    local status=$?
    {executable} chdir && return $status
}}

{command}() {{
    local dir="$({executable} cd "$@")"
    test -d "$dir" && cd "$dir" || echo 'directory not found'
}}

[[ "$PROMPT_COMMAND" =~ __jump_prompt_command ]] || {{
    PROMPT_COMMAND="__jump_prompt_command;$PROMPT_COMMAND"
}}"""

ZSH_TEMPLATE = """__jump_precmd() {{
    {executable} chdir
}}

{command}() {{
    local dir="$({executable} cd "$@")"
    test -d "$dir" && cd "$dir" || echo 'directory not found'
}}

autoload -Uz add-zsh-hook
add-zsh-hook precmd __jump_precmd"""

_TEMPLATES = {
    ShellKind.BASH: BASH_TEMPLATE,
    ShellKind.ZSH: ZSH_TEMPLATE,
}


def supported_shells() -> List[str]:
    """Names accepted by :func:`parse_shell`."""
    return [kind.value for kind in ShellKind]


def parse_shell(name: str) -> ShellKind:
    """
    Convert a shell name to a ShellKind.

    Args:
        name: Shell name such as ``bash``

    Returns:
        The matching ShellKind

    Raises:
        ValueError: If the shell is not supported
    """
    try:
        return ShellKind(name.strip().lower())
    except ValueError:
        raise ValueError(f"Unsupported shell '{name}' (supported: {', '.join(supported_shells())})")


def render_shell_script(command: str, shell: ShellKind = ShellKind.BASH) -> str:
    """
    Render the integration script for a shell.

    Args:
        command: Name of the jump function to define
        shell: Target shell

    Returns:
        Script text to be evaluated by the shell
    """
    return _TEMPLATES[shell].format(command=command, executable=EXECUTABLE_NAME)
