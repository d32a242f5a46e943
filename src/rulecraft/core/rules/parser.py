"""Parser for rule expressions."""

from .ast import Node, OperandNode, OperatorNode
from .exceptions import RuleSyntaxError
from .tokenizer import Token, TokenType, parse_number

VALUE_TOKENS = (TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.STRING)

DEFAULT_MAX_DEPTH = 64


class Parser:
    """Recursive descent parser for rule expressions.

    Grammar::

        expression := term (OR term)*
        term       := factor (AND factor)*
        factor     := '(' expression ')' | operand
        operand    := attribute comparison value
    """

    def __init__(self, tokens: list[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        self.tokens = tokens
        self.position = 0
        self.max_depth = max_depth
        self.depth = 0

    def error(self, message: str, token: Token | None = None) -> None:
        """Raise a syntax error at the given (or current) token."""
        if token is None and self.position < len(self.tokens):
            token = self.tokens[self.position]
        raise RuleSyntaxError(message, token.position if token is not None else None)

    def peek(self) -> Token | None:
        """Return the current token without consuming it."""
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def check(self, token_type: TokenType) -> bool:
        """Check whether the current token has the given type."""
        token = self.peek()
        return token is not None and token.type == token_type

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.tokens[self.position]
        self.position += 1
        return token

    def parse(self) -> Node:
        """Parse the entire token sequence."""
        node = self.expression()
        if self.position < len(self.tokens):
            self.error("Unexpected trailing tokens")
        return node

    def expression(self) -> Node:
        """Parse OR chains."""
        node = self.term()

        while self.check(TokenType.OR):
            self.advance()
            right = self.term()
            node = OperatorNode(operator="OR", left=node, right=right)

        return node

    def term(self) -> Node:
        """Parse AND chains."""
        node = self.factor()

        while self.check(TokenType.AND):
            self.advance()
            right = self.factor()
            node = OperatorNode(operator="AND", left=node, right=right)

        return node

    def factor(self) -> Node:
        """Parse a parenthesised expression or a single comparison."""
        if self.check(TokenType.LPAREN):
            opening = self.advance()
            self.depth += 1
            if self.depth > self.max_depth:
                self.error("Rule nesting too deep", opening)
            node = self.expression()
            if not self.check(TokenType.RPAREN):
                self.error("Expected closing parenthesis", self.peek() or opening)
            self.advance()
            self.depth -= 1
            return node

        return self.operand()

    def operand(self) -> Node:
        """Parse ``attribute comparison value``."""
        if self.position + 2 >= len(self.tokens):
            self.error("Incomplete operand")

        attribute = self.advance()
        if attribute.type != TokenType.IDENTIFIER:
            self.error(f"Expected attribute name, found '{attribute.lexeme}'", attribute)

        operator = self.advance()
        if operator.type != TokenType.COMPARISON:
            self.error(f"Expected comparison operator, found '{operator.lexeme}'", operator)

        value = self.advance()
        if value.type not in VALUE_TOKENS:
            self.error(f"Expected value, found '{value.lexeme}'", value)

        return OperandNode(
            operator=operator.lexeme,
            attribute=attribute.lexeme,
            value=self._coerce_value(value),
        )

    @staticmethod
    def _coerce_value(token: Token) -> str | int | float:
        """Strip quotes from string literals and convert numeric ones."""
        if token.type == TokenType.STRING:
            return token.lexeme[1:-1]
        if token.type == TokenType.NUMBER:
            return parse_number(token.lexeme)
        return token.lexeme
