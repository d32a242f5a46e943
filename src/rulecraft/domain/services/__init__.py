"""Domain services for RuleCraft.

Services contain business logic that doesn't naturally fit within a single entity.
They depend on storage only through the protocols in ``stores``.
"""

from rulecraft.domain.services.attribute_validator import (
    AttributeValidator,
    extract_attributes,
    guess_data_type,
)
from rulecraft.domain.services.rule_service import RuleEvaluation, RuleService
from rulecraft.domain.services.stores import AttributeCatalog, RuleStore

__all__ = [
    "AttributeCatalog",
    "AttributeValidator",
    "RuleEvaluation",
    "RuleService",
    "RuleStore",
    "extract_attributes",
    "guess_data_type",
]
