"""Tokenizer for rule expressions."""

import re
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Types of tokens in rule expressions."""
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()

    # Comparison operators (<=, >=, <>, !=, =, <, >)
    COMPARISON = auto()

    # Logical keywords
    AND = auto()
    OR = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()


@dataclass(frozen=True)
class Token:
    """A single token in the rule expression."""
    type: TokenType
    lexeme: str
    position: int


# Alternatives are tried in order. Anything that matches none of them,
# whitespace included, is skipped.
TOKEN_PATTERN = re.compile(
    r"""
      (?P<number>-?\d+(?:\.\d+)?(?![\w.]))
    | (?P<word>\w+)
    | (?P<comparison><=|>=|<>|!=|=|<|>)
    | (?P<lparen>\()
    | (?P<rparen>\))
    | (?P<string>'[^']*'|"[^"]*")
    """,
    re.VERBOSE,
)

NUMBER_PATTERN = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")

KEYWORDS = {"AND": TokenType.AND, "OR": TokenType.OR}


def is_numeric_text(text: str) -> bool:
    """Check whether a string reads as a number in its entirety."""
    return NUMBER_PATTERN.fullmatch(text.strip()) is not None


def parse_number(text: str) -> int | float:
    """Convert numeric text to int when integral in form, float otherwise."""
    text = text.strip()
    if re.fullmatch(r"-?\d+", text):
        return int(text)
    return float(text)


class Tokenizer:
    """Splits rule strings into typed tokens."""

    def __init__(self, text: str):
        self.text = text

    def _classify(self, match: re.Match) -> Token:
        kind = match.lastgroup
        lexeme = match.group()
        position = match.start()

        if kind == "number":
            return Token(TokenType.NUMBER, lexeme, position)
        if kind == "word":
            if lexeme in KEYWORDS:
                return Token(KEYWORDS[lexeme], lexeme, position)
            if is_numeric_text(lexeme):
                return Token(TokenType.NUMBER, lexeme, position)
            return Token(TokenType.IDENTIFIER, lexeme, position)
        if kind == "comparison":
            return Token(TokenType.COMPARISON, lexeme, position)
        if kind == "lparen":
            return Token(TokenType.LPAREN, lexeme, position)
        if kind == "rparen":
            return Token(TokenType.RPAREN, lexeme, position)
        return Token(TokenType.STRING, lexeme, position)

    def tokenize(self) -> list[Token]:
        """Return all tokens found in the text, in order."""
        return [self._classify(match) for match in TOKEN_PATTERN.finditer(self.text)]


def tokenize(text: str) -> list[Token]:
    """Tokenize a rule string. Unrecognised characters are dropped."""
    return Tokenizer(text).tokenize()
