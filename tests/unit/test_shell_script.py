"""
Unit tests for the shell integration scripts.
"""

import pytest

from jump.tools.shell_script import (
    ShellKind,
    parse_shell,
    render_shell_script,
    supported_shells
)


class TestRenderShellScript:
    """Test cases for render_shell_script."""

    def test_bash_defines_configured_function(self):
        """Test the bash script defines the jump function by its configured name."""
        script = render_shell_script("goto")

        assert "goto() {" in script
        assert 'local dir="$(jump cd "$@")"' in script
        assert "echo 'directory not found'" in script

    def test_bash_hooks_prompt_command(self):
        """Test the bash script records visits through PROMPT_COMMAND."""
        script = render_shell_script("j", ShellKind.BASH)

        assert "__jump_prompt_command() {" in script
        assert "jump chdir && return $status" in script
        assert 'PROMPT_COMMAND="__jump_prompt_command;$PROMPT_COMMAND"' in script

    def test_bash_has_no_unrendered_braces(self):
        """Test template escaping leaves plain shell braces."""
        script = render_shell_script("j", ShellKind.BASH)

        assert "{{" not in script
        assert "{command}" not in script

    def test_zsh_uses_precmd_hook(self):
        """Test the zsh script registers a precmd hook."""
        script = render_shell_script("j", ShellKind.ZSH)

        assert "add-zsh-hook precmd __jump_precmd" in script
        assert "j() {" in script
        assert "jump chdir" in script


class TestParseShell:
    """Test cases for parse_shell."""

    @pytest.mark.parametrize("name,expected", [
        ("bash", ShellKind.BASH),
        ("zsh", ShellKind.ZSH),
        (" ZSH ", ShellKind.ZSH),
    ])
    def test_known_shells(self, name, expected):
        """Test supported shell names."""
        assert parse_shell(name) is expected

    def test_unknown_shell(self):
        """Test unsupported shells are rejected with the supported list."""
        with pytest.raises(ValueError, match="Unsupported shell 'fish'.*bash, zsh"):
            parse_shell("fish")

    def test_supported_shells(self):
        """Test the supported shell list."""
        assert supported_shells() == ["bash", "zsh"]
