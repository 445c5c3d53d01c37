"""Call classification via an ordered rule table."""

from govdecode.classification.rules import (
    CLASSIFICATION_RULES,
    ClassificationRule,
    classify,
    explain,
    method_name,
    rule_names,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "classify",
    "explain",
    "method_name",
    "rule_names",
]
