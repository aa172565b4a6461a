"""
Configuration data model for jump.

This module defines the user preference record persisted in ``config.yaml``.
It only carries the name of the shell function that the integration script
registers, but it is validated the same way as any other configuration so a
hand-edited file with a typo fails loudly instead of being ignored.
"""

import re
from typing import Dict, List, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_COMMAND = "j"

# Shell function names accepted by both bash and zsh
_COMMAND_NAME_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_-]*$')


class JumpConfig(BaseModel):
    """
    User preferences for jump.

    Attributes:
        command: Name of the shell function the integration script defines
    """

    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    command: str = Field(DEFAULT_COMMAND, description="Name of the shell jump function")

    @field_validator('command', mode='before')
    @classmethod
    def validate_command(cls, v) -> str:
        """Validate that the command is usable as a shell function name."""
        if not isinstance(v, str):
            raise ValueError(f"command must be a string, got {type(v).__name__}")
        v = v.strip()
        if not v:
            raise ValueError("command cannot be empty")
        if not _COMMAND_NAME_PATTERN.match(v):
            raise ValueError(f"Invalid command name '{v}': must be a valid shell function name")
        return v

    @classmethod
    def settable_keys(cls) -> List[str]:
        """Keys that can be changed with ``jump config key=value``."""
        return list(cls.model_fields.keys())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JumpConfig':
        """Create a JumpConfig instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        return f"JumpConfig(command={self.command!r})"
