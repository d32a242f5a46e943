"""Tests for rule tree nodes and their document form."""

import dataclasses

import pytest

from rulecraft.core.rules import combine_asts, parse_rule, to_rule_string
from rulecraft.core.rules.ast import (
    OperandNode,
    OperatorNode,
    clone_node,
    iter_operands,
    node_from_dict,
    node_to_dict,
)
from rulecraft.core.rules.exceptions import InvalidNodeError


class TestNodes:
    """Test node construction."""

    def test_nodes_are_immutable(self):
        """Test that nodes cannot be modified."""
        node = OperandNode(operator=">", attribute="age", value=30)
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.value = 40

    def test_operator_node_rejects_unknown_operator(self):
        """Test that only AND/OR join sub-trees."""
        leaf = OperandNode(operator="=", attribute="a", value=1)
        with pytest.raises(InvalidNodeError):
            OperatorNode(operator="XOR", left=leaf, right=leaf)

    def test_operator_node_rejects_non_node_children(self):
        """Test that children must be nodes."""
        leaf = OperandNode(operator="=", attribute="a", value=1)
        with pytest.raises(InvalidNodeError):
            OperatorNode(operator="AND", left=leaf, right={"type": "operand"})

    def test_iter_operands_order(self):
        """Test that operands are visited left to right."""
        node = parse_rule("(a = 1 OR b = 2) AND c = 3")
        assert [operand.attribute for operand in iter_operands(node)] == ["a", "b", "c"]


class TestDocumentForm:
    """Test converting trees to and from plain documents."""

    def test_to_dict(self):
        """Test the document shape of a small tree."""
        node = parse_rule("age > 30 AND department = 'Sales'")
        assert node_to_dict(node) == {
            "type": "operator",
            "operator": "AND",
            "left": {"type": "operand", "operator": ">", "attribute": "age", "value": 30},
            "right": {
                "type": "operand",
                "operator": "=",
                "attribute": "department",
                "value": "Sales",
            },
        }

    def test_from_dict_restores_tree(self):
        """Test decoding a document back into an equal tree."""
        node = parse_rule("(a > 1 OR b = 'x') AND c <= 2.5")
        assert node_from_dict(node_to_dict(node)) == node

    @pytest.mark.parametrize(
        "document",
        [
            None,
            [],
            {"type": "weird"},
            {"type": "operator", "operator": "AND"},
            {
                "type": "operator",
                "operator": "NAND",
                "left": {"type": "operand", "operator": "=", "attribute": "a", "value": 1},
                "right": {"type": "operand", "operator": "=", "attribute": "b", "value": 2},
            },
            {"type": "operand", "operator": "=", "value": 1},
            {"type": "operand", "operator": "=", "attribute": "a", "value": True},
            {"type": "operand", "operator": "=", "attribute": "a", "value": None},
            {"type": "operand", "operator": "=", "attribute": "a", "value": [1]},
        ],
    )
    def test_from_dict_rejects_malformed_documents(self, document):
        """Test that malformed documents raise InvalidNodeError."""
        with pytest.raises(InvalidNodeError):
            node_from_dict(document)


class TestDeepTrees:
    """Test tree walks on trees deeper than the interpreter recursion limit."""

    @pytest.fixture
    def deep_tree(self):
        return combine_asts([parse_rule(f"a{i} = {i}") for i in range(3000)], "OR")

    def test_iter_operands(self, deep_tree):
        """Test that every operand is visited in order."""
        names = [operand.attribute for operand in iter_operands(deep_tree)]
        assert names == [f"a{i}" for i in range(3000)]

    def test_document_round_trip(self, deep_tree):
        """Test encoding and decoding a deep tree."""
        document = node_to_dict(deep_tree)
        decoded = node_from_dict(document)

        assert to_rule_string(decoded) == to_rule_string(deep_tree)
        assert node_to_dict(decoded)["right"] == {
            "type": "operand",
            "operator": "=",
            "attribute": "a2999",
            "value": 2999,
        }

    def test_rule_string(self, deep_tree):
        """Test rendering a deep left-leaning chain without parentheses."""
        text = to_rule_string(deep_tree)
        assert text.startswith("a0 = 0 OR a1 = 1 OR")
        assert "(" not in text

    def test_clone_shares_no_nodes(self):
        """Test that a clone is equal but built from new nodes."""
        node = parse_rule("(a = 1 OR b = 2) AND c = 3")
        clone = clone_node(node)

        assert clone == node
        assert clone is not node
        assert clone.left is not node.left
        assert clone.right is not node.right
