"""OutputRuleTable — the platform code -> DefaultOutputRule lookup.

The table is loaded once from a JSON document of the form::

    {"rules": [{"platform_code": "3",
                "environment_variable_name": "HOME",
                "output_directory": "Desktop"}]}

The bundled document lives at ``mdgen/content/data/default_output_path.json``;
``MDGEN_OUTPUT_RULES`` (or the project config) points at a replacement.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from mdgen.config import DEFAULT_RULES_PATH
from mdgen.content.rules import DefaultOutputRule
from mdgen.errors import ConfigurationMissingError
from mdgen.settings import ConfigManager, rules_path

logger = logging.getLogger(__name__)


class OutputRuleTable:
    """Immutable mapping of platform code to its default output rule."""

    def __init__(self, rules: Mapping[str, DefaultOutputRule] | None = None) -> None:
        self._rules: dict[str, DefaultOutputRule] = {
            str(code): rule for code, rule in (rules or {}).items()
        }

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Mapping[str, str] | DefaultOutputRule]) -> OutputRuleTable:
        """Build a table from ``{platform_code: rule-or-dict}``."""
        rules: dict[str, DefaultOutputRule] = {}
        for code, value in mapping.items():
            if isinstance(value, DefaultOutputRule):
                rules[str(code)] = value
            else:
                rules[str(code)] = _parse_rule(value, source="<mapping>")
        return cls(rules)

    @classmethod
    def load(cls, path: str | Path | None = None) -> OutputRuleTable:
        """Load the table from a JSON file (the bundled one by default).

        Raises
        ------
        ConfigurationMissingError
            If the file cannot be read, is not valid JSON, holds a malformed
            entry, or lists the same platform code twice.
        """
        path = Path(path) if path is not None else DEFAULT_RULES_PATH
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationMissingError(f"Cannot read output rules {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationMissingError(f"Invalid JSON in output rules {path}: {exc}") from exc

        entries = data.get("rules") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise ConfigurationMissingError(f"Output rules {path} has no 'rules' list")

        rules: dict[str, DefaultOutputRule] = {}
        for entry in entries:
            if not isinstance(entry, dict) or "platform_code" not in entry:
                raise ConfigurationMissingError(f"Output rule without platform_code in {path}: {entry!r}")
            code = str(entry["platform_code"])
            if code in rules:
                raise ConfigurationMissingError(
                    f"Duplicate output rule for platform code {code} in {path}"
                )
            rules[code] = _parse_rule(entry, source=str(path))

        logger.debug("Loaded %d output rules from %s", len(rules), path)
        return cls(rules)

    def lookup(self, platform_code: int | str) -> DefaultOutputRule | None:
        """Return the rule for *platform_code*, or None if there is none."""
        return self._rules.get(str(platform_code))

    def require(self, platform_code: int | str) -> DefaultOutputRule:
        """Return the rule for *platform_code* or raise ConfigurationMissingError."""
        rule = self.lookup(platform_code)
        if rule is None:
            raise ConfigurationMissingError(
                f"No default output rule for platform code {platform_code}"
            )
        return rule

    def codes(self) -> list[str]:
        return sorted(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, platform_code: object) -> bool:
        return str(platform_code) in self._rules


def _parse_rule(entry: Mapping[str, Any], source: str) -> DefaultOutputRule:
    try:
        return DefaultOutputRule(
            environment_variable_name=entry.get("environment_variable_name", ""),
            output_directory=entry.get("output_directory", ""),
        )
    except ValidationError as exc:
        raise ConfigurationMissingError(f"Malformed output rule in {source}: {exc}") from exc


# Process-wide table, loaded on first use

_default_table: OutputRuleTable | None = None
_default_lock = threading.Lock()


def default_rule_table() -> OutputRuleTable:
    """Return the process-wide rule table, loading it on first call.

    The source file comes from the layered configuration (see
    :class:`mdgen.settings.ConfigManager`).
    """
    global _default_table
    with _default_lock:
        if _default_table is None:
            _default_table = OutputRuleTable.load(rules_path(ConfigManager().load_config()))
        return _default_table


def reset_default_rule_table() -> None:
    """Forget the cached table so the next call reloads it."""
    global _default_table
    with _default_lock:
        _default_table = None


def lookup_default_output_rule(platform_code: int | str) -> DefaultOutputRule:
    """Look up the default output rule for *platform_code* in the process table."""
    return default_rule_table().require(platform_code)
