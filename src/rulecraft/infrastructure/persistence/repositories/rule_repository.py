"""Repository for rule operations.

Implements the rule store on top of the rules table.
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rulecraft.core.logging import get_logger
from rulecraft.core.rules.ast import node_from_dict, node_to_dict
from rulecraft.core.rules.exceptions import DuplicateRuleError, InvalidNodeError
from rulecraft.domain.entities import Rule
from rulecraft.infrastructure.persistence.models import RuleModel

logger = get_logger(__name__)


class RuleRepository:
    """Repository for rule database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: RuleModel) -> Rule:
        """Convert a row to a rule entity.

        Raises:
            InvalidNodeError: If the stored tree cannot be decoded.
        """
        return Rule(
            name=model.name,
            rule_string=model.rule_string,
            ast=node_from_dict(model.ast),
            created_at=model.created_at,
        )

    async def find_by_name(self, name: str) -> Rule | None:
        """Get a rule by name.

        Args:
            name: The rule name.

        Returns:
            The rule if found, None otherwise.
        """
        result = await self.session.execute(select(RuleModel).where(RuleModel.name == name))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model is not None else None

    async def find_by_names(self, names: Sequence[str]) -> list[Rule]:
        """Get all rules whose name is in ``names``, in storage order."""
        if not names:
            return []
        result = await self.session.execute(
            select(RuleModel).where(RuleModel.name.in_(set(names))).order_by(RuleModel.id)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def insert(self, rule: Rule) -> Rule:
        """Persist a new rule.

        Args:
            rule: The rule to store.

        Returns:
            The stored rule.

        Raises:
            DuplicateRuleError: If a rule with the same name already exists.
        """
        model = RuleModel(
            name=rule.name,
            rule_string=rule.rule_string,
            ast=node_to_dict(rule.ast),
            created_at=rule.created_at,
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Rule insert rejected: name already exists", rule_name=rule.name)
            raise DuplicateRuleError(rule.name) from e
        return rule

    async def list_all(self) -> list[Rule]:
        """List all rules in creation order.

        Rows whose stored tree cannot be decoded are logged and skipped.
        """
        result = await self.session.execute(select(RuleModel).order_by(RuleModel.id))
        rules = []
        for model in result.scalars().all():
            try:
                rules.append(self._to_entity(model))
            except InvalidNodeError as e:
                logger.warning("Skipping rule with invalid AST", rule_name=model.name, error=str(e))
        return rules
