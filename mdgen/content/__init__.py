"""Default output rules — platform code -> environment variable + directory."""

from mdgen.content.loader import OutputRuleTable, default_rule_table, lookup_default_output_rule
from mdgen.content.rules import DefaultOutputRule

__all__ = [
    "DefaultOutputRule",
    "OutputRuleTable",
    "default_rule_table",
    "lookup_default_output_rule",
]
