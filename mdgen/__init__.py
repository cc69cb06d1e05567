"""mdgen — definition paths and the generator contract for Markdown generators."""

__version__ = "1.0.0"

from mdgen.content.loader import OutputRuleTable, lookup_default_output_rule
from mdgen.content.rules import DefaultOutputRule
from mdgen.definition_path import DefinitionPath, resolve_default_output_path
from mdgen.errors import (
    ConfigurationMissingError,
    InvalidArgumentError,
    MdgenError,
    PlatformUnsupportedError,
)
from mdgen.generator import (
    AbstractGenerator,
    BatchReport,
    ErrorKind,
    GenerationResult,
    Generator,
    execute_all,
    execute_step,
)
from mdgen.platforms import Platform
from mdgen.settings import ConfigManager, configure_logging

__all__ = [
    "__version__",
    # Paths
    "DefinitionPath",
    "resolve_default_output_path",
    "Platform",
    # Rules
    "DefaultOutputRule",
    "OutputRuleTable",
    "lookup_default_output_rule",
    # Generators
    "AbstractGenerator",
    "BatchReport",
    "ErrorKind",
    "GenerationResult",
    "Generator",
    "execute_all",
    "execute_step",
    # Config
    "ConfigManager",
    "configure_logging",
    # Errors
    "ConfigurationMissingError",
    "InvalidArgumentError",
    "MdgenError",
    "PlatformUnsupportedError",
]
