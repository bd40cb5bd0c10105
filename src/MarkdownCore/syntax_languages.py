"""Per-language rule tables for the regex tokenizer.

Each table is an ordered list of ``(TokenKind, pattern)`` pairs. Order is
priority: at a given position the earliest rule that matches wins, so
comments and strings sit above keywords, and multi-character operators sit
above the single-character punctuation class.

Tables are compiled once, at import, into a single alternation per language
and shared read-only between callers.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .syntax_tokens import TokenKind

Rule = Tuple[TokenKind, str]


class Language:
    """A named rule table compiled into one ordered alternation."""

    def __init__(self, name: str, aliases: Sequence[str], rules: Sequence[Rule]):
        self.name = name
        self.aliases = tuple(aliases)
        self.rules = tuple(rules)
        self._kinds: Dict[str, TokenKind] = {}
        parts = []
        for index, (kind, pattern) in enumerate(self.rules):
            group = f"r{index}"
            self._kinds[group] = kind
            parts.append(f"(?P<{group}>{pattern})")
        self.pattern = re.compile("|".join(parts))

    def kind_of(self, match: re.Match) -> TokenKind:
        return self._kinds[match.lastgroup]

    def __repr__(self) -> str:
        return f"Language({self.name!r})"


def _words(words: Iterable[str], ignore_case: bool = False) -> str:
    body = "|".join(re.escape(word) for word in words)
    pattern = rf"\b(?:{body})(?!\w)"
    return f"(?i:{pattern})" if ignore_case else pattern


LINE_COMMENT = r"//[^\n]*"
BLOCK_COMMENT = r"/\*[\s\S]*?\*/"
HASH_COMMENT = r"#[^\n]*"
DOUBLE_QUOTED = r'"(?:[^"\\]|\\.)*"'
SINGLE_QUOTED = r"'(?:[^'\\]|\\.)*'"
TRIPLE_DOUBLE_QUOTED = r'"""[\s\S]*?"""'
C_NUMBER = r"\b(?:0x[0-9a-fA-F]+|0b[01]+|0o[0-7]+|\d+\.?\d*(?:[eE][+-]?\d+)?)\b"
TYPE_NAME = r"\b[A-Z][a-zA-Z0-9]*\b"
PROPERTY = r"\.[a-zA-Z_][a-zA-Z0-9_]*"
OPERATOR = r"===|!==|\.\.\.|\.\.<|->|=>|==|!=|<=|>=|&&|\|\||::|:=|\?\?|\+\+|--|\+=|-=|\*=|/="
PUNCTUATION = r"[{}()\[\];:,.<>?!@#$%^&*+=|/\\~-]"


SWIFT_RULES = [
    (TokenKind.COMMENT, LINE_COMMENT),
    (TokenKind.COMMENT, BLOCK_COMMENT),
    (TokenKind.STRING, TRIPLE_DOUBLE_QUOTED),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.NUMBER, C_NUMBER),
    (
        TokenKind.KEYWORD,
        _words(
            "func let var if else guard switch case default for while repeat return break continue "
            "throw throws try catch defer do import struct class enum protocol extension typealias "
            "associatedtype init deinit self Self super nil true false static private fileprivate "
            "internal public open final override mutating nonmutating lazy weak unowned inout async "
            "await actor some any where in is as".split()
        ),
    ),
    (TokenKind.TYPE, TYPE_NAME),
    (TokenKind.PROPERTY, PROPERTY),
    (TokenKind.PUNCTUATION, OPERATOR),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

TYPESCRIPT_RULES = [
    (TokenKind.COMMENT, LINE_COMMENT),
    (TokenKind.COMMENT, BLOCK_COMMENT),
    # template literals
    (TokenKind.STRING, r"`(?:[^`\\]|\\.)*`"),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.STRING, SINGLE_QUOTED),
    (TokenKind.NUMBER, C_NUMBER),
    (
        TokenKind.KEYWORD,
        _words(
            "function const let var if else switch case default for while do return break continue "
            "throw try catch finally new delete typeof instanceof void this super class extends "
            "implements interface type enum namespace module export import from as async await yield "
            "static public private protected readonly abstract get set true false null undefined NaN "
            "Infinity".split()
        ),
    ),
    (TokenKind.TYPE, TYPE_NAME),
    (TokenKind.PROPERTY, PROPERTY),
    (TokenKind.PUNCTUATION, OPERATOR),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

PYTHON_RULES = [
    (TokenKind.COMMENT, HASH_COMMENT),
    (TokenKind.STRING, TRIPLE_DOUBLE_QUOTED),
    (TokenKind.STRING, r"'''[\s\S]*?'''"),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.STRING, SINGLE_QUOTED),
    (TokenKind.NUMBER, C_NUMBER),
    (
        TokenKind.KEYWORD,
        _words(
            "def class if elif else for while try except finally with as import from return yield "
            "raise break continue pass lambda and or not in is True False None async await global "
            "nonlocal".split()
        ),
    ),
    (TokenKind.TYPE, TYPE_NAME),
    (TokenKind.PROPERTY, PROPERTY),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

GO_RULES = [
    (TokenKind.COMMENT, LINE_COMMENT),
    (TokenKind.COMMENT, BLOCK_COMMENT),
    # raw strings
    (TokenKind.STRING, r"`[^`]*`"),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.NUMBER, C_NUMBER),
    (
        TokenKind.KEYWORD,
        _words(
            "func package import if else for range return defer go chan select switch case default "
            "break continue fallthrough goto var const type struct interface map make new append len "
            "cap copy delete panic recover nil true false iota".split()
        ),
    ),
    (TokenKind.TYPE, TYPE_NAME),
    (TokenKind.PROPERTY, PROPERTY),
    (TokenKind.PUNCTUATION, OPERATOR),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

RUST_RULES = [
    (TokenKind.COMMENT, LINE_COMMENT),
    (TokenKind.COMMENT, BLOCK_COMMENT),
    (TokenKind.STRING, DOUBLE_QUOTED),
    # lifetimes ('a, 'static) before char literals
    (TokenKind.TYPE, r"'[a-zA-Z_][a-zA-Z0-9_]*\b(?!')"),
    (TokenKind.STRING, r"'(?:[^'\\]|\\.)+'"),
    (TokenKind.NUMBER, r"\b(?:0x[0-9a-fA-F_]+|0b[01_]+|0o[0-7_]+|\d[\d_]*\.?[\d_]*(?:[eE][+-]?\d+)?)\b"),
    (
        TokenKind.KEYWORD,
        _words(
            "fn let mut if else match loop while for in break continue return pub struct enum impl "
            "trait type mod use crate super self Self const static ref move async await dyn extern "
            "unsafe where as true false Some None Ok Err".split()
        ),
    ),
    (TokenKind.TYPE, TYPE_NAME),
    (TokenKind.PROPERTY, PROPERTY),
    (TokenKind.PUNCTUATION, OPERATOR),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

JAVA_RULES = [
    (TokenKind.COMMENT, LINE_COMMENT),
    (TokenKind.COMMENT, BLOCK_COMMENT),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.STRING, r"'(?:[^'\\]|\\.)+'"),
    (TokenKind.NUMBER, r"\b(?:0x[0-9a-fA-F_]+|0b[01_]+|\d[\d_]*\.?[\d_]*(?:[eE][+-]?\d+)?[fFdDlL]?)\b"),
    (
        TokenKind.KEYWORD,
        _words(
            "public private protected static final abstract class interface enum extends implements "
            "new return if else for while do switch case default break continue try catch finally "
            "throw throws import package void int long short byte float double boolean char null "
            "true false this super instanceof synchronized volatile transient native strictfp "
            "assert".split()
        ),
    ),
    (TokenKind.TYPE, TYPE_NAME),
    (TokenKind.PROPERTY, PROPERTY),
    (TokenKind.PUNCTUATION, OPERATOR),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

KOTLIN_RULES = [
    (TokenKind.COMMENT, LINE_COMMENT),
    (TokenKind.COMMENT, BLOCK_COMMENT),
    (TokenKind.STRING, TRIPLE_DOUBLE_QUOTED),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.NUMBER, r"\b(?:0x[0-9a-fA-F_]+|0b[01_]+|\d[\d_]*\.?[\d_]*(?:[eE][+-]?\d+)?[fFdDlL]?)\b"),
    (
        TokenKind.KEYWORD,
        _words(
            "fun val var if else when for while do return break continue class object interface "
            "enum sealed data open abstract override private protected public internal final "
            "companion init constructor get set in out is as by throw try catch finally import "
            "package typealias inline noinline crossinline reified suspend true false null this "
            "super it".split()
        ),
    ),
    (TokenKind.TYPE, TYPE_NAME),
    (TokenKind.PROPERTY, PROPERTY),
    (TokenKind.PUNCTUATION, OPERATOR),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

RUBY_RULES = [
    (TokenKind.COMMENT, HASH_COMMENT),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.STRING, SINGLE_QUOTED),
    # symbols
    (TokenKind.STRING, r":[a-zA-Z_][a-zA-Z0-9_]*"),
    (TokenKind.NUMBER, r"\b(?:0x[0-9a-fA-F_]+|0b[01_]+|0o[0-7_]+|\d[\d_]*\.?[\d_]*(?:[eE][+-]?\d+)?)\b"),
    (
        TokenKind.KEYWORD,
        _words(
            "def class module if elsif else unless case when then end do begin rescue ensure raise "
            "return break next redo retry yield lambda proc require require_relative include extend "
            "attr_reader attr_writer attr_accessor private protected public self super nil true "
            "false and or not in alias defined?".split()
        ),
    ),
    (TokenKind.TYPE, TYPE_NAME),
    (TokenKind.PROPERTY, r"\.[a-zA-Z_][a-zA-Z0-9_!?]*"),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

SHELL_RULES = [
    (TokenKind.COMMENT, r"#![^\n]*"),
    (TokenKind.COMMENT, HASH_COMMENT),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.STRING, r"'[^']*'"),
    # $NAME, ${NAME}, $1, $?
    (TokenKind.PROPERTY, r"\$\{[^}\n]*\}|\$[a-zA-Z_][a-zA-Z0-9_]*|\$[0-9@#?*$!-]"),
    (TokenKind.NUMBER, r"\b\d+\b"),
    (
        TokenKind.KEYWORD,
        _words(
            "if then else elif fi for do done while until case esac in function return exit break "
            "continue local export readonly declare typeset unset shift source alias true "
            "false".split()
        ),
    ),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

SQL_RULES = [
    (TokenKind.COMMENT, r"--[^\n]*"),
    (TokenKind.COMMENT, BLOCK_COMMENT),
    (TokenKind.STRING, SINGLE_QUOTED),
    (TokenKind.NUMBER, r"\b\d+\.?\d*\b"),
    (
        TokenKind.KEYWORD,
        _words(
            "SELECT FROM WHERE JOIN INNER LEFT RIGHT OUTER ON AND OR NOT IN IS NULL AS ORDER BY "
            "GROUP HAVING LIMIT OFFSET INSERT INTO VALUES UPDATE SET DELETE CREATE ALTER DROP TABLE "
            "INDEX VIEW DATABASE PRIMARY KEY FOREIGN REFERENCES UNIQUE DEFAULT CHECK CONSTRAINT "
            "BETWEEN LIKE DISTINCT COUNT SUM AVG MIN MAX CASE WHEN THEN ELSE END UNION ALL EXISTS "
            "TRUE FALSE".split(),
            ignore_case=True,
        ),
    ),
    (TokenKind.TYPE, r"\b[A-Z][a-zA-Z0-9_]*\b"),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

HTML_RULES = [
    (TokenKind.COMMENT, r"<!--[\s\S]*?-->"),
    (TokenKind.KEYWORD, r"(?i:<!doctype\b[^>]*>)"),
    (TokenKind.STRING, r'"[^"]*"'),
    (TokenKind.STRING, r"'[^']*'"),
    # tag names right after < or </
    (TokenKind.KEYWORD, r"(?:(?<=<)|(?<=</))[a-zA-Z][a-zA-Z0-9-]*"),
    # attribute names right before =
    (TokenKind.PROPERTY, r"\b[a-zA-Z][a-zA-Z0-9-]*(?=\s*=)"),
    (TokenKind.PUNCTUATION, r"[<>{}()\[\];:,/?!=]"),
]

CSS_RULES = [
    (TokenKind.COMMENT, BLOCK_COMMENT),
    (TokenKind.STRING, r'"[^"]*"'),
    (TokenKind.STRING, r"'[^']*'"),
    # hex colours
    (TokenKind.NUMBER, r"#[0-9a-fA-F]{3,8}\b"),
    # numbers with an optional unit
    (TokenKind.NUMBER, r"\b\d+(?:\.\d+)?(?:%|(?:px|em|rem|vh|vw|pt|cm|mm|in|deg|rad|ms|s|fr)\b)?"),
    (
        TokenKind.KEYWORD,
        _words(
            "important inherit initial unset none auto block inline flex grid absolute relative "
            "fixed sticky hidden visible solid dashed dotted normal bold italic".split()
        ),
    ),
    # class and id selectors
    (TokenKind.TYPE, r"[.#][a-zA-Z_][a-zA-Z0-9_-]*"),
    (TokenKind.PROPERTY, r"\b[a-zA-Z-]+(?=\s*:)"),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]

JSON_RULES = [
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.NUMBER, r"-?\b\d+\.?\d*(?:[eE][+-]?\d+)?\b"),
    (TokenKind.KEYWORD, _words(["true", "false", "null"])),
    (TokenKind.PUNCTUATION, r"[{}\[\]:,]"),
]

YAML_RULES = [
    (TokenKind.COMMENT, HASH_COMMENT),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.STRING, SINGLE_QUOTED),
    (TokenKind.NUMBER, r"\b-?\d+\.?\d*\b"),
    (TokenKind.KEYWORD, _words("true false null yes no on off".split())),
    # mapping keys
    (TokenKind.PROPERTY, r"[a-zA-Z_][a-zA-Z0-9_]*(?=\s*:)"),
    (TokenKind.PUNCTUATION, r"[{}\[\]:,>|&*-]"),
]

GENERIC_RULES = [
    (TokenKind.COMMENT, LINE_COMMENT),
    (TokenKind.COMMENT, BLOCK_COMMENT),
    (TokenKind.STRING, DOUBLE_QUOTED),
    (TokenKind.STRING, SINGLE_QUOTED),
    (TokenKind.NUMBER, r"\b\d+\.?\d*\b"),
    (TokenKind.KEYWORD, _words("if else for while return function class const let var true false null".split())),
    (TokenKind.TYPE, TYPE_NAME),
    (TokenKind.PUNCTUATION, PUNCTUATION),
]


GENERIC = Language("generic", (), GENERIC_RULES)

_DEFINITIONS = [
    Language("swift", ["swift"], SWIFT_RULES),
    Language("typescript", ["typescript", "ts", "javascript", "js", "jsx", "tsx"], TYPESCRIPT_RULES),
    Language("python", ["python", "py"], PYTHON_RULES),
    Language("go", ["go", "golang"], GO_RULES),
    Language("rust", ["rust", "rs"], RUST_RULES),
    Language("java", ["java"], JAVA_RULES),
    Language("kotlin", ["kotlin", "kt"], KOTLIN_RULES),
    Language("ruby", ["ruby", "rb"], RUBY_RULES),
    Language("shell", ["shell", "bash", "sh", "zsh"], SHELL_RULES),
    Language("sql", ["sql"], SQL_RULES),
    Language("html", ["html", "htm", "xml"], HTML_RULES),
    Language("css", ["css", "scss", "sass", "less"], CSS_RULES),
    Language("json", ["json"], JSON_RULES),
    Language("yaml", ["yaml", "yml"], YAML_RULES),
]

# alias -> compiled language
LANGUAGES: Mapping[str, Language] = MappingProxyType(
    {alias: lang for lang in _DEFINITIONS for alias in lang.aliases}
)


def language_for(name: Optional[str], languages: Mapping[str, Language] = LANGUAGES) -> Language:
    """Resolve a fence tag or alias; unknown or missing names get the generic table.

    Matching is case-insensitive on both sides, so custom tables may use
    mixed-case keys.
    """
    if not name:
        return GENERIC
    key = name.lower()
    lang = languages.get(key)
    if lang is None:
        lang = next((value for alias, value in languages.items() if alias.lower() == key), GENERIC)
    return lang


def supported_languages() -> list[str]:
    return [lang.name for lang in _DEFINITIONS]
