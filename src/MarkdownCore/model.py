from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .aside import AsideKind, CustomAsideKind


@dataclass(frozen=True)
class Block:
    """Base class for block-level nodes."""


@dataclass(frozen=True)
class InlineElement:
    """Base class for inline nodes."""


@dataclass(frozen=True)
class Document:
    """Parsed Markdown, built once and shared between render passes."""

    blocks: Tuple[Block, ...] = ()

    @classmethod
    def parse(cls, source: str) -> "Document":
        from .markdown_parser import parse_markdown

        return parse_markdown(source)


@dataclass(frozen=True)
class Paragraph(Block):
    inline: Tuple[InlineElement, ...]


@dataclass(frozen=True)
class Heading(Block):
    level: int
    inline: Tuple[InlineElement, ...]


@dataclass(frozen=True)
class CodeBlock(Block):
    language: str | None
    code: str


@dataclass(frozen=True)
class AsideBlock(Block):
    """A blockquote interpreted as a callout."""

    kind: Union[AsideKind, CustomAsideKind]
    blocks: Tuple[Block, ...]


@dataclass(frozen=True)
class ListItem:
    blocks: Tuple[Block, ...]
    # None for ordinary items, True/False for GFM task items.
    is_checked: Optional[bool] = None


@dataclass(frozen=True)
class UnorderedList(Block):
    items: Tuple[ListItem, ...]


@dataclass(frozen=True)
class OrderedList(Block):
    start: int
    items: Tuple[ListItem, ...]


@dataclass(frozen=True)
class ThematicBreak(Block):
    """Horizontal rule / thematic break."""


class TableAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    NONE = "none"


@dataclass(frozen=True)
class TableRow:
    # A cell is a (possibly empty) run of inline nodes.
    cells: Tuple[Tuple[InlineElement, ...], ...]


@dataclass(frozen=True)
class TableBlock(Block):
    header_row: TableRow
    body_rows: Tuple[TableRow, ...]
    column_alignments: Tuple[TableAlignment, ...]


@dataclass(frozen=True)
class DiagramBlock(Block):
    """Mermaid source lifted out of a fenced code block."""

    code: str


@dataclass(frozen=True)
class InlineText(InlineElement):
    text: str


@dataclass(frozen=True)
class InlineEmphasis(InlineElement):
    children: Tuple[InlineElement, ...]


@dataclass(frozen=True)
class InlineStrong(InlineElement):
    children: Tuple[InlineElement, ...]


@dataclass(frozen=True)
class InlineStrikethrough(InlineElement):
    children: Tuple[InlineElement, ...]


@dataclass(frozen=True)
class InlineCode(InlineElement):
    code: str


@dataclass(frozen=True)
class InlineLink(InlineElement):
    destination: str
    title: str | None
    children: Tuple[InlineElement, ...]


@dataclass(frozen=True)
class InlineImage(InlineElement):
    source: str
    alt: str
    title: str | None = None


@dataclass(frozen=True)
class SoftBreak(InlineElement):
    """Line ending inside a paragraph."""


@dataclass(frozen=True)
class HardBreak(InlineElement):
    """Explicit line break (trailing spaces or backslash)."""
