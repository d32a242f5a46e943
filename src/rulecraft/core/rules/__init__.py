"""Rule Expression Engine API."""

from typing import Any, Mapping

from .ast import (
    Node,
    OperandNode,
    OperatorNode,
    clone_node,
    fold_tree,
    node_from_dict,
    node_to_dict,
    to_rule_string,
)
from .combinator import combine_asts
from .evaluator import EvaluationResult, Evaluator, Outcome
from .exceptions import (
    AttributeValidationError,
    CatalogWriteError,
    DuplicateRuleError,
    InvalidNodeError,
    RuleError,
    RulesNotFoundError,
    RuleSyntaxError,
)
from .parser import DEFAULT_MAX_DEPTH, Parser
from .tokenizer import Token, TokenType, tokenize


def parse_rule(expression: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Node:
    """Parse a rule expression string into an AST.

    Raises:
        RuleSyntaxError: If the text is malformed or its parentheses nest
            deeper than ``max_depth``.
    """
    parser = Parser(tokenize(expression), max_depth)
    return parser.parse()


def evaluate_rule(node: Any, record: Mapping[str, Any]) -> EvaluationResult:
    """Evaluate a parsed rule AST against a record."""
    evaluator = Evaluator(record)
    return evaluator.evaluate(node)


__all__ = [
    "parse_rule",
    "evaluate_rule",
    "combine_asts",
    "tokenize",
    "to_rule_string",
    "node_to_dict",
    "node_from_dict",
    "clone_node",
    "fold_tree",
    "Node",
    "OperandNode",
    "OperatorNode",
    "Token",
    "TokenType",
    "EvaluationResult",
    "Outcome",
    "RuleError",
    "RuleSyntaxError",
    "InvalidNodeError",
    "AttributeValidationError",
    "RulesNotFoundError",
    "DuplicateRuleError",
    "CatalogWriteError",
]
