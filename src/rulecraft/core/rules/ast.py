"""Abstract Syntax Tree nodes for rule expressions.

A rule tree is a closed sum of two node shapes: ``OperatorNode`` joins two
sub-trees with AND/OR, ``OperandNode`` compares one attribute against a
literal. Nodes are immutable. Trees are stored and exchanged as plain
documents of the form::

    {"type": "operator", "operator": "AND", "left": {...}, "right": {...}}
    {"type": "operand", "operator": ">", "attribute": "age", "value": 30}
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Iterator, TypeVar, Union

from .exceptions import InvalidNodeError

LOGICAL_OPERATORS = ("AND", "OR")
COMPARISON_OPERATORS = (">", "<", "=", ">=", "<=")


@dataclass(frozen=True)
class OperatorNode:
    """Boolean combination of two sub-trees."""
    operator: str
    left: "Node"
    right: "Node"

    def __post_init__(self) -> None:
        if self.operator not in LOGICAL_OPERATORS:
            raise InvalidNodeError(f"Invalid logical operator: {self.operator!r}")
        for side in (self.left, self.right):
            if not isinstance(side, (OperatorNode, OperandNode)):
                raise InvalidNodeError(
                    f"Operator children must be nodes, got {type(side).__name__}"
                )


@dataclass(frozen=True)
class OperandNode:
    """Comparison of one attribute against a literal value.

    The operator is kept as written. Comparisons outside
    ``COMPARISON_OPERATORS`` are reported by the evaluator.
    """
    operator: str
    attribute: str
    value: str | int | float


Node = Union[OperatorNode, OperandNode]

T = TypeVar("T")


def fold_tree(
    node: Node,
    on_operand: Callable[[OperandNode], T],
    on_operator: Callable[[OperatorNode, T, T], T],
) -> T:
    """Reduce a tree bottom-up, left child before right.

    Uses an explicit stack, so the depth of a tree is not limited by the
    interpreter's recursion limit.
    """
    values: list[T] = []
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if isinstance(current, OperandNode):
            values.append(on_operand(current))
        elif expanded:
            right = values.pop()
            left = values.pop()
            values.append(on_operator(current, left, right))
        else:
            stack.append((current, True))
            stack.append((current.right, False))
            stack.append((current.left, False))
    return values.pop()


def iter_operands(node: Node) -> Iterator[OperandNode]:
    """Yield every operand of a tree, depth-first, left to right."""
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, OperandNode):
            yield current
        else:
            stack.append(current.right)
            stack.append(current.left)


def clone_node(node: Node) -> Node:
    """Return a structurally equal tree that shares no nodes with ``node``."""
    return fold_tree(
        node,
        lambda operand: OperandNode(operand.operator, operand.attribute, operand.value),
        lambda operator, left, right: OperatorNode(operator.operator, left, right),
    )


def _operand_to_dict(node: OperandNode) -> dict[str, Any]:
    return {
        "type": "operand",
        "operator": node.operator,
        "attribute": node.attribute,
        "value": node.value,
    }


def node_to_dict(node: Node) -> dict[str, Any]:
    """Encode a tree as a plain document."""
    return fold_tree(
        node,
        _operand_to_dict,
        lambda operator, left, right: {
            "type": "operator",
            "operator": operator.operator,
            "left": left,
            "right": right,
        },
    )


def _operand_from_dict(data: dict[str, Any]) -> OperandNode:
    attribute = data.get("attribute")
    operator = data.get("operator")
    value = data.get("value")
    if not isinstance(attribute, str) or not isinstance(operator, str):
        raise InvalidNodeError("Invalid AST node: operand requires attribute and operator")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidNodeError(f"Invalid AST node: unsupported operand value {value!r}")
    return OperandNode(operator=operator, attribute=attribute, value=value)


def node_from_dict(data: Any) -> Node:
    """Decode a plain document into a tree.

    Raises:
        InvalidNodeError: If the document is not a well-formed node.
    """
    values: list[Node] = []
    stack: list[tuple[Any, bool]] = [(data, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            right = values.pop()
            left = values.pop()
            values.append(OperatorNode(operator=current.get("operator"), left=left, right=right))
            continue

        if not isinstance(current, dict):
            raise InvalidNodeError(
                f"Invalid AST node: expected object, got {type(current).__name__}"
            )
        node_type = current.get("type")
        if node_type == "operand":
            values.append(_operand_from_dict(current))
        elif node_type == "operator":
            if "left" not in current or "right" not in current:
                raise InvalidNodeError("Invalid AST node: operator node requires left and right")
            stack.append((current, True))
            stack.append((current["right"], False))
            stack.append((current["left"], False))
        else:
            raise InvalidNodeError(f"Invalid AST node type: {node_type!r}")
    return values.pop()


def _format_value(value: str | int | float) -> str:
    if isinstance(value, str):
        quote = '"' if "'" in value else "'"
        return f"{quote}{value}{quote}"
    if isinstance(value, float):
        # Positional notation only; the tokenizer has no exponent form.
        text = format(Decimal(repr(value)), "f")
        return text if "." in text else f"{text}.0"
    return str(value)


def _render_operator(node: OperatorNode, left: str, right: str) -> str:
    # AND binds tighter, so an OR child of AND needs parentheses. Folds are
    # left-leaning, so a right child with the same operator does too.
    if isinstance(node.left, OperatorNode) and node.operator == "AND" and node.left.operator == "OR":
        left = f"({left})"
    if isinstance(node.right, OperatorNode) and (
        node.right.operator == node.operator or node.operator == "AND"
    ):
        right = f"({right})"
    return f"{left} {node.operator} {right}"


def to_rule_string(node: Node) -> str:
    """Render a tree back into rule text.

    Sub-trees are parenthesised wherever the parser would otherwise group
    them differently, so parsing the output yields an identical tree.
    """
    return fold_tree(
        node,
        lambda operand: f"{operand.attribute} {operand.operator} {_format_value(operand.value)}",
        _render_operator,
    )
