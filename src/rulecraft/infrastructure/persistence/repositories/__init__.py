"""Persistence repositories for database operations."""

from rulecraft.infrastructure.persistence.repositories.attribute_repository import (
    AttributeRepository,
)
from rulecraft.infrastructure.persistence.repositories.rule_repository import (
    RuleRepository,
)

__all__ = [
    "AttributeRepository",
    "RuleRepository",
]
