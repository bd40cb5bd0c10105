from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from .syntax_languages import LANGUAGES, Language, language_for
from .syntax_tokens import SyntaxToken, TokenKind

LOGGER = logging.getLogger(__name__)


def tokenize(
    code: str,
    language: Optional[str] = None,
    languages: Mapping[str, Language] = LANGUAGES,
) -> List[SyntaxToken]:
    """Split source code into highlighting tokens.

    Joining the token texts gives back ``code`` exactly. At every position the
    first rule of the language table that matches there wins; characters no
    rule claims come out as ``plain`` and neighbouring plain runs are merged.
    """
    if not code:
        return []
    lang = language_for(language, languages)
    LOGGER.debug("Tokenizing %d chars as %s", len(code), lang.name)
    return _merge_plain(_scan(code, lang))


def _scan(code: str, lang: Language) -> List[SyntaxToken]:
    tokens: List[SyntaxToken] = []
    pos = 0
    end = len(code)
    while pos < end:
        match = lang.pattern.search(code, pos)
        if match is None:
            tokens.append(SyntaxToken(code[pos:], TokenKind.PLAIN))
            break
        start = match.start()
        if start > pos:
            tokens.append(SyntaxToken(code[pos:start], TokenKind.PLAIN))
        if match.end() == start:
            # A rule matched nothing; take one character so the scan moves on.
            tokens.append(SyntaxToken(code[start], TokenKind.PLAIN))
            pos = start + 1
            continue
        tokens.append(SyntaxToken(match.group(), lang.kind_of(match)))
        pos = match.end()
    return tokens


def _merge_plain(tokens: List[SyntaxToken]) -> List[SyntaxToken]:
    merged: List[SyntaxToken] = []
    for token in tokens:
        if merged and token.kind is TokenKind.PLAIN and merged[-1].kind is TokenKind.PLAIN:
            merged[-1] = SyntaxToken(merged[-1].text + token.text, TokenKind.PLAIN)
        else:
            merged.append(token)
    return merged
