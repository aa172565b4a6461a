"""
Resolution and shell integration tools for jump.

This module contains the query resolver and the generators for the shell
integration scripts.
"""

from .resolver import DirectoryResolver, InvalidPatternError, resolve
from .shell_script import ShellKind, parse_shell, render_shell_script

__all__ = [
    'DirectoryResolver',
    'InvalidPatternError',
    'resolve',
    'ShellKind',
    'parse_shell',
    'render_shell_script'
]
