"""DefaultOutputRule model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class DefaultOutputRule(BaseModel):
    """One platform's default output location.

    The default output path is the value of ``environment_variable_name``
    joined with ``output_directory`` by the host path separator.
    """

    model_config = ConfigDict(frozen=True)

    environment_variable_name: str
    """Name of the environment variable holding the base directory, e.g. 'HOME'."""

    output_directory: str
    """Directory appended to the base directory, e.g. 'Desktop'."""

    @field_validator("environment_variable_name", "output_directory")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @classmethod
    def of(cls, environment_variable_name: str, output_directory: str) -> DefaultOutputRule:
        return cls(
            environment_variable_name=environment_variable_name,
            output_directory=output_directory,
        )

    @classmethod
    def copy_of(cls, rule: DefaultOutputRule) -> DefaultOutputRule:
        """Return a new rule carrying the same values as *rule*."""
        return cls.of(rule.environment_variable_name, rule.output_directory)
