"""Combination of several rule trees under one logical operator."""

from typing import Iterable

from .ast import LOGICAL_OPERATORS, Node, OperatorNode, clone_node


def combine_asts(asts: Iterable[Node], operator: str) -> Node:
    """Fold trees left to right into a single left-leaning tree.

    ``[a, b, c]`` with ``AND`` becomes ``((a AND b) AND c)``. A single tree
    is returned as is. Every tree placed into a new combination is a copy,
    so the inputs are never shared with or altered by the result.

    Args:
        asts: Trees to combine, in order.
        operator: "AND" or "OR".

    Returns:
        The combined tree.

    Raises:
        ValueError: If no trees are given or the operator is not AND/OR.
    """
    if operator not in LOGICAL_OPERATORS:
        raise ValueError(f"Combination operator must be AND or OR, got {operator!r}")

    trees = list(asts)
    if not trees:
        raise ValueError("At least one rule is required to combine")
    if len(trees) == 1:
        return trees[0]

    combined = clone_node(trees[0])
    for tree in trees[1:]:
        combined = OperatorNode(operator=operator, left=combined, right=clone_node(tree))
    return combined
