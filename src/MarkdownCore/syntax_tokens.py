from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Lexical category a renderer maps to a colour."""

    PLAIN = "plain"
    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    TYPE = "type"
    PROPERTY = "property"
    PUNCTUATION = "punctuation"


@dataclass(frozen=True)
class SyntaxToken:
    text: str
    kind: TokenKind = TokenKind.PLAIN
