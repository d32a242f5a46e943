"""Rule service for business logic.

Implements the rule use cases: creating a rule from text, combining stored
rules into one tree, evaluating a stored rule against a record and listing
rules.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from rulecraft.core.logging import get_logger
from rulecraft.core.rules import parse_rule
from rulecraft.core.rules.parser import DEFAULT_MAX_DEPTH
from rulecraft.core.rules.ast import Node
from rulecraft.core.rules.combinator import combine_asts
from rulecraft.core.rules.evaluator import EvaluationResult, Evaluator
from rulecraft.core.rules.exceptions import (
    DuplicateRuleError,
    InvalidNodeError,
    RulesNotFoundError,
    RuleSyntaxError,
)
from rulecraft.domain.entities import Rule
from rulecraft.domain.services.attribute_validator import (
    DEFAULT_NUMERIC_HINTS,
    AttributeValidator,
)
from rulecraft.domain.services.stores import AttributeCatalog, RuleStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class RuleEvaluation:
    """Result of evaluating a stored rule, with its text for display."""

    rule_string: str
    result: EvaluationResult


class RuleService:
    """Service for rule management and evaluation."""

    def __init__(
        self,
        rules: RuleStore,
        attributes: AttributeCatalog,
        numeric_hints: Sequence[str] = DEFAULT_NUMERIC_HINTS,
        max_rule_length: int | None = None,
        max_rule_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize the rule service.

        Args:
            rules: Rule store.
            attributes: Attribute catalog.
            numeric_hints: Name substrings that make auto-registered attributes Number.
            max_rule_length: Optional cap on rule string length.
            max_rule_depth: Maximum parenthesis nesting in a rule string.
        """
        self.rules = rules
        self.attribute_validator = AttributeValidator(attributes, numeric_hints)
        self.max_rule_length = max_rule_length
        self.max_rule_depth = max_rule_depth

    async def create_rule(self, name: str, rule_string: str) -> Node:
        """Parse, validate and store a new rule.

        Args:
            name: Unique rule name.
            rule_string: Rule expression text.

        Returns:
            The parsed rule tree.

        Raises:
            DuplicateRuleError: If a rule with this name exists.
            RuleSyntaxError: If the rule text is malformed.
            AttributeValidationError: If an attribute cannot be resolved.
        """
        if self.max_rule_length is not None and len(rule_string) > self.max_rule_length:
            raise RuleSyntaxError(
                f"Rule string exceeds maximum length of {self.max_rule_length} characters"
            )

        if await self.rules.find_by_name(name) is not None:
            raise DuplicateRuleError(name)

        ast = parse_rule(rule_string, self.max_rule_depth)
        await self.attribute_validator.validate(ast)

        # The store enforces uniqueness too; a concurrent insert surfaces here.
        await self.rules.insert(Rule(name=name, rule_string=rule_string, ast=ast))
        logger.info("Rule created", rule_name=name)
        return ast

    async def combine_rules(self, names: Sequence[str], operator: str) -> Node:
        """Combine stored rules into one tree joined by ``operator``.

        Args:
            names: Rule names, in the order they are folded.
            operator: "AND" or "OR".

        Returns:
            The combined tree. A single name yields that rule's tree.

        Raises:
            RulesNotFoundError: If any name is not stored.
            ValueError: If no names are given or the operator is invalid.
        """
        if not names:
            raise ValueError("At least one rule name is required")

        found = {rule.name: rule for rule in await self.rules.find_by_names(names)}
        missing = [name for name in names if name not in found]
        if missing:
            logger.warning("Rule combination failed: rules not found", missing=missing)
            raise RulesNotFoundError(missing)

        combined = combine_asts([found[name].ast for name in names], operator)
        logger.info("Rules combined", rule_names=list(names), operator=operator)
        return combined

    async def evaluate_rule(self, name: str, record: Mapping[str, Any]) -> RuleEvaluation:
        """Evaluate a stored rule against a record.

        Raises:
            RulesNotFoundError: If the rule does not exist.
        """
        try:
            rule = await self.rules.find_by_name(name)
        except InvalidNodeError as e:
            logger.error("Stored rule has an invalid AST", rule_name=name, error=str(e))
            return RuleEvaluation(rule_string="", result=EvaluationResult.error(str(e)))

        if rule is None:
            raise RulesNotFoundError([name])

        result = Evaluator(record).evaluate(rule.ast)
        logger.info(
            "Rule evaluated",
            rule_name=name,
            outcome=result.outcome.value,
            reason=result.reason,
        )
        return RuleEvaluation(rule_string=rule.rule_string, result=result)

    def evaluate_ast(self, ast: Any, record: Mapping[str, Any]) -> EvaluationResult:
        """Evaluate an unstored tree, such as a combination, against a record."""
        return Evaluator(record).evaluate(ast)

    async def list_rules(self) -> list[Rule]:
        """Return all stored rules."""
        return await self.rules.list_all()
