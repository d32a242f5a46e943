"""SQLAlchemy ORM models."""

from rulecraft.infrastructure.persistence.models.attribute import AttributeModel
from rulecraft.infrastructure.persistence.models.rule import RuleModel

__all__ = ["AttributeModel", "RuleModel"]
