"""Domain entities for RuleCraft."""

from rulecraft.domain.entities.attribute import Attribute, DataType
from rulecraft.domain.entities.rule import Rule

__all__ = ["Attribute", "DataType", "Rule"]
