"""DefinitionPath — where a definition file lives and where its output goes.

Usage::

    from mdgen.definition_path import DefinitionPath

    path = DefinitionPath.of("definitions/api.json")
    path.get_output_path()                         # e.g. '/home/me/Desktop'
    path.get_output_path("org.thinkit.generator")  # '/home/me/Desktop/org/thinkit/generator'

When no output path is given, the platform default is resolved once at
construction (see :func:`resolve_default_output_path`) and never recomputed.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, field_validator

from mdgen.config import PACKAGE_DELIMITER
from mdgen.content.loader import OutputRuleTable, default_rule_table
from mdgen.errors import ConfigurationMissingError, InvalidArgumentError
from mdgen.platforms import Platform

logger = logging.getLogger(__name__)


def resolve_default_output_path(
    platform: Platform | None = None,
    *,
    rules: OutputRuleTable | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the default output path for *platform*.

    The result is ``<value of rule.environment_variable_name>`` +
    ``os.sep`` + ``rule.output_directory``.

    Parameters
    ----------
    platform:
        Platform to resolve for.  Defaults to the host platform.
    rules:
        Rule table to consult.  Defaults to the process-wide table.
    environ:
        Environment to read the variable from.  Defaults to ``os.environ``.

    Raises
    ------
    PlatformUnsupportedError
        If the host platform is not a known :class:`Platform`.
    ConfigurationMissingError
        If no rule matches the platform, or the rule's environment
        variable is unset or blank.
    """
    if platform is None:
        platform = Platform.current()
    logger.info("Resolving default output path for platform %s", platform.name)

    if rules is None:
        rules = default_rule_table()
    rule = rules.require(platform.code_string)

    environ = os.environ if environ is None else environ
    base = environ.get(rule.environment_variable_name)
    if base is None or not base.strip():
        raise ConfigurationMissingError(
            f"Environment variable {rule.environment_variable_name} is not set; "
            f"cannot build the default output path for {platform.name}"
        )

    return base + os.sep + rule.output_directory


class DefinitionPath(BaseModel):
    """Definition file path paired with its resolved output path.

    Build instances with :meth:`of`; they are immutable afterwards.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str
    """Path to the file holding the definition to generate from."""

    output_path: str
    """Directory generated output is written under."""

    @field_validator("file_path", "output_path")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @classmethod
    def of(cls, file_path: str | None, output_path: str | None = "") -> DefinitionPath:
        """Create a DefinitionPath.

        A blank *output_path* is replaced by the platform default output
        path.

        Raises
        ------
        InvalidArgumentError
            If *file_path* is None or blank, or *output_path* is None.
        PlatformUnsupportedError, ConfigurationMissingError
            If the default output path is needed and cannot be resolved.
        """
        if file_path is None or not file_path.strip():
            raise InvalidArgumentError("file_path must be a non-blank string")
        if output_path is None:
            raise InvalidArgumentError("output_path must not be None")

        if not output_path.strip():
            output_path = resolve_default_output_path()

        path = cls(file_path=file_path, output_path=output_path)
        logger.info("Output path = (%s)", path.output_path)
        return path

    def get_file_path(self) -> str:
        return self.file_path

    def get_output_path(self, package_name: str | None = "") -> str:
        """Return the output path, optionally extended by a package name.

        Each ``.`` in *package_name* becomes a path separator, so
        ``"org.thinkit.generator"`` appends ``org/thinkit/generator``.  An
        empty *package_name* returns the base output path.

        Raises
        ------
        InvalidArgumentError
            If *package_name* is None.
        """
        if package_name is None:
            raise InvalidArgumentError("package_name must not be None")
        if not package_name:
            return self.output_path
        return self.output_path + os.sep + package_name.replace(PACKAGE_DELIMITER, os.sep)
