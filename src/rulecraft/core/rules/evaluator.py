"""Evaluator for rule expressions."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .ast import OperandNode, OperatorNode, fold_tree
from .tokenizer import is_numeric_text, parse_number

NUMERIC_OPERATORS = (">", "<", ">=", "<=")


class Outcome(str, Enum):
    """Three-way result of evaluating a rule."""

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of an evaluation, with a diagnostic when it errored."""

    outcome: Outcome
    reason: str | None = None

    @classmethod
    def passed(cls) -> "EvaluationResult":
        return cls(Outcome.PASSED)

    @classmethod
    def failed(cls) -> "EvaluationResult":
        return cls(Outcome.FAILED)

    @classmethod
    def error(cls, reason: str) -> "EvaluationResult":
        return cls(Outcome.ERROR, reason)

    @classmethod
    def from_bool(cls, value: bool) -> "EvaluationResult":
        return cls.passed() if value else cls.failed()

    @property
    def is_passed(self) -> bool:
        return self.outcome == Outcome.PASSED

    @property
    def is_error(self) -> bool:
        return self.outcome == Outcome.ERROR

    @property
    def display(self) -> str:
        """Human-readable form, e.g. 'Passed Evaluation'."""
        if self.outcome == Outcome.PASSED:
            return "Passed Evaluation"
        if self.outcome == Outcome.FAILED:
            return "Failed Evaluation"
        return f"Error: {self.reason}"


def is_number(value: Any) -> bool:
    """Check for int/float, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def loose_equals(left: Any, right: Any) -> bool:
    """Equality used by the ``=`` operator.

    Two values are equal if they have the same type and are equal (int and
    float share the numeric type, bool is its own type), or if one is a
    numeric-looking string, the other is a number, and their numeric
    values are equal.
    """
    if is_number(left) and is_number(right):
        return left == right
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, str) and is_number(right):
        return is_numeric_text(left) and parse_number(left) == right
    if is_number(left) and isinstance(right, str):
        return is_numeric_text(right) and parse_number(right) == left
    return False


class Evaluator:
    """Evaluates a rule tree against a record."""

    def __init__(self, record: Mapping[str, Any]):
        """Initialize the evaluator.

        Args:
            record: Attribute name to value mapping being tested.
        """
        self.record = record

    def evaluate(self, node: Any) -> EvaluationResult:
        """Evaluate a node and all of its children."""
        if not isinstance(node, (OperatorNode, OperandNode)):
            return EvaluationResult.error("Invalid AST node")

        return fold_tree(node, self._evaluate_operand, self._combine)

    def _combine(
        self, node: OperatorNode, left: EvaluationResult, right: EvaluationResult
    ) -> EvaluationResult:
        # Errors are never folded into Failed.
        if left.is_error:
            return left
        if right.is_error:
            return right

        if node.operator == "AND":
            return EvaluationResult.from_bool(left.is_passed and right.is_passed)
        if node.operator == "OR":
            return EvaluationResult.from_bool(left.is_passed or right.is_passed)

        return EvaluationResult.error(f"Unknown operator {node.operator}")

    def _evaluate_operand(self, node: OperandNode) -> EvaluationResult:
        if node.attribute not in self.record:
            return EvaluationResult.failed()

        actual = self.record[node.attribute]
        expected = node.value
        op = node.operator

        if op in NUMERIC_OPERATORS:
            if not (is_number(actual) and is_number(expected)):
                return EvaluationResult.error(f"Operator '{op}' requires numeric operands")
            if op == ">":
                return EvaluationResult.from_bool(actual > expected)
            if op == "<":
                return EvaluationResult.from_bool(actual < expected)
            if op == ">=":
                return EvaluationResult.from_bool(actual >= expected)
            return EvaluationResult.from_bool(actual <= expected)

        if op == "=":
            return EvaluationResult.from_bool(loose_equals(actual, expected))

        return EvaluationResult.error(f"Unknown operator {op}")
