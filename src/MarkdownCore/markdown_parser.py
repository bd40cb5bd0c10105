from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

from .aside import AsideKind, classify_aside, split_aside_tag
from .model import (
    AsideBlock,
    Block,
    CodeBlock,
    DiagramBlock,
    Document,
    HardBreak,
    Heading,
    InlineCode,
    InlineElement,
    InlineEmphasis,
    InlineImage,
    InlineLink,
    InlineStrikethrough,
    InlineStrong,
    InlineText,
    ListItem,
    OrderedList,
    Paragraph,
    SoftBreak,
    TableAlignment,
    TableBlock,
    TableRow,
    ThematicBreak,
    UnorderedList,
)

LOGGER = logging.getLogger(__name__)

# Fenced blocks tagged with this language become DiagramBlock.
DIAGRAM_LANGUAGE = "mermaid"

MARKDOWN_PRESET = "commonmark"
MARKDOWN_RULES = ["table", "strikethrough"]

_TEXT_TYPES = {"text", "text_special"}
_TASK_ITEM = "task-list-item"
_TASK_CHECKBOX = "task-list-item-checkbox"

_INLINE_CONTAINERS = {
    "em_open": ("em_close", InlineEmphasis),
    "strong_open": ("strong_close", InlineStrong),
    "s_open": ("s_close", InlineStrikethrough),
}

_ALIGNMENTS = {
    "left": TableAlignment.LEFT,
    "center": TableAlignment.CENTER,
    "right": TableAlignment.RIGHT,
}


def parse_markdown(text: str) -> Document:
    """Parse Markdown into a Document.

    Never raises for string input: constructs without a model counterpart are
    dropped, as are paragraphs holding nothing but whitespace and breaks.
    """
    md = MarkdownIt(MARKDOWN_PRESET).use(tasklists_plugin).enable(MARKDOWN_RULES)
    tokens = md.parse(text)
    blocks, _ = _parse_blocks(tokens, 0, stop_types=set())
    return Document(blocks=tuple(blocks))


def _parse_blocks(tokens, index: int, stop_types: set[str]) -> tuple[list[Block], int]:
    blocks: List[Block] = []
    i = index
    while i < len(tokens):
        tok = tokens[i]
        if tok.type in stop_types:
            break
        if tok.type == "heading_open":
            level = int(tok.tag[1])
            inline = tokens[i + 1]
            blocks.append(Heading(level=level, inline=tuple(_parse_inline(inline.children or []))))
            i += 3
        elif tok.type == "paragraph_open":
            inline_elements = _parse_inline(tokens[i + 1].children or [])
            if not _is_blank(inline_elements):
                blocks.append(Paragraph(inline=tuple(inline_elements)))
            i += 3
        elif tok.type in ("bullet_list_open", "ordered_list_open"):
            ordered = tok.type == "ordered_list_open"
            close_type = "ordered_list_close" if ordered else "bullet_list_close"
            items, i = _parse_list_items(tokens, i + 1, close_type)
            if ordered:
                start = tok.attrGet("start")
                blocks.append(OrderedList(start=1 if start is None else int(start), items=tuple(items)))
            else:
                blocks.append(UnorderedList(items=tuple(items)))
        elif tok.type in ("fence", "code_block"):
            blocks.append(_code_block(tok))
            i += 1
        elif tok.type == "blockquote_open":
            quoted, i = _parse_blocks(tokens, i + 1, stop_types={"blockquote_close"})
            blocks.append(_aside_from_blocks(quoted))
            i += 1  # skip blockquote_close
        elif tok.type == "hr":
            blocks.append(ThematicBreak())
            i += 1
        elif tok.type == "table_open":
            table_block, i = _parse_table(tokens, i)
            blocks.append(table_block)
        else:
            LOGGER.debug("Skipping unsupported block token %s", tok.type)
            i += 1
    return blocks, i


def _parse_list_items(tokens, index: int, close_type: str) -> tuple[list[ListItem], int]:
    items: list[ListItem] = []
    i = index
    while i < len(tokens) and tokens[i].type != close_type:
        if tokens[i].type == "list_item_open":
            is_checked = _task_state(tokens, i)
            item_blocks, i = _parse_blocks(tokens, i + 1, stop_types={"list_item_close"})
            items.append(ListItem(blocks=tuple(item_blocks), is_checked=is_checked))
            i += 1  # skip list_item_close
        else:
            i += 1
    return items, i + 1


def _task_state(tokens, index: int) -> bool | None:
    """Read the checkbox the tasklists plugin put in front of the item text.

    Only items the plugin tagged count, so raw checkbox HTML typed by the
    author stays an ordinary item.
    """
    if _TASK_ITEM not in str(tokens[index].attrGet("class") or "").split():
        return None
    if index + 2 >= len(tokens) or tokens[index + 1].type != "paragraph_open":
        return None
    children = tokens[index + 2].children or []
    if not children or children[0].type != "html_inline" or _TASK_CHECKBOX not in children[0].content:
        return None
    checked = 'checked="checked"' in children[0].content
    # The plugin cuts "[x]" but leaves the space after it.
    if len(children) > 1 and children[1].type in _TEXT_TYPES:
        children[1].content = children[1].content.lstrip()
    return checked


def _code_block(tok) -> Block:
    info = tok.info.strip() if tok.type == "fence" else ""
    language = info.split(maxsplit=1)[0] if info else None
    if language is not None and language.lower() == DIAGRAM_LANGUAGE:
        return DiagramBlock(code=tok.content)
    return CodeBlock(language=language, code=tok.content)


def _aside_from_blocks(blocks: Sequence[Block]) -> AsideBlock:
    first = blocks[0] if blocks else None
    if isinstance(first, Paragraph) and first.inline and isinstance(first.inline[0], InlineText):
        split = split_aside_tag(first.inline[0].text)
        if split is not None:
            tag, rest = split
            inline = list(first.inline[1:])
            if rest:
                inline.insert(0, InlineText(rest))
            else:
                while inline and isinstance(inline[0], (SoftBreak, HardBreak)):
                    inline.pop(0)
            content = list(blocks[1:])
            if not _is_blank(inline):
                content.insert(0, Paragraph(inline=tuple(inline)))
            return AsideBlock(kind=classify_aside(tag), blocks=tuple(content))
    return AsideBlock(kind=AsideKind.NOTE, blocks=tuple(blocks))


def _parse_table(tokens, index: int) -> tuple[TableBlock, int]:
    header = TableRow(cells=())
    alignments: list[TableAlignment] = []
    rows: list[TableRow] = []
    i = index + 1
    while i < len(tokens):
        tok = tokens[i]
        if tok.type == "thead_open":
            i += 1
            cells = []
            while tokens[i].type != "thead_close":
                if tokens[i].type == "th_open":
                    alignments.append(_alignment(tokens[i]))
                    cells.append(tuple(_parse_inline(tokens[i + 1].children or [])))
                    i += 3  # skip th_open, inline, th_close
                else:
                    i += 1
            header = TableRow(cells=tuple(cells))
            i += 1
        elif tok.type == "tbody_open":
            i += 1
            while tokens[i].type != "tbody_close":
                if tokens[i].type == "tr_open":
                    row = []
                    i += 1
                    while tokens[i].type != "tr_close":
                        if tokens[i].type in {"td_open", "th_open"}:
                            row.append(tuple(_parse_inline(tokens[i + 1].children or [])))
                            i += 3
                        else:
                            i += 1
                    rows.append(TableRow(cells=tuple(row)))
                    i += 1  # skip tr_close
                else:
                    i += 1
            i += 1
        elif tok.type == "table_close":
            break
        else:
            i += 1
    table = TableBlock(header_row=header, body_rows=tuple(rows), column_alignments=tuple(alignments))
    return table, i + 1


def _alignment(tok) -> TableAlignment:
    style = str(tok.attrGet("style") or "")
    _, _, value = style.partition("text-align:")
    return _ALIGNMENTS.get(value.strip(), TableAlignment.NONE)


def _parse_inline(children: Iterable) -> List[InlineElement]:
    result, _ = _parse_inline_run(list(children), 0, closing_type=None)
    return result


def _parse_inline_run(tokens: Sequence, index: int, closing_type: str | None) -> tuple[list[InlineElement], int]:
    result: List[InlineElement] = []
    i = index
    while i < len(tokens):
        tok = tokens[i]
        if tok.type == closing_type:
            break
        if tok.type in _TEXT_TYPES:
            _append_text(result, tok.content)
            i += 1
        elif tok.type == "softbreak":
            result.append(SoftBreak())
            i += 1
        elif tok.type == "hardbreak":
            result.append(HardBreak())
            i += 1
        elif tok.type == "code_inline":
            result.append(InlineCode(tok.content))
            i += 1
        elif tok.type in _INLINE_CONTAINERS:
            close_type, node_type = _INLINE_CONTAINERS[tok.type]
            children, i = _parse_inline_run(tokens, i + 1, close_type)
            result.append(node_type(tuple(children)))
            i += 1
        elif tok.type == "link_open":
            children, i = _parse_inline_run(tokens, i + 1, "link_close")
            href = tok.attrGet("href") or ""
            result.append(InlineLink(destination=str(href), title=tok.attrGet("title"), children=tuple(children)))
            i += 1
        elif tok.type == "image":
            src = tok.attrGet("src") or ""
            alt = _inline_text_from_children(tok.children or [])
            result.append(InlineImage(source=str(src), alt=alt, title=tok.attrGet("title")))
            i += 1
        else:
            LOGGER.debug("Skipping unsupported inline token %s", tok.type)
            i += 1
    return result, i


def _append_text(result: List[InlineElement], text: str) -> None:
    if not text:
        return
    if result and isinstance(result[-1], InlineText):
        result[-1] = InlineText(result[-1].text + text)
    else:
        result.append(InlineText(text))


def _inline_text_from_children(children: Iterable) -> str:
    texts: list[str] = []
    for child in children:
        if child.type in _TEXT_TYPES or child.type == "code_inline":
            texts.append(child.content)
        elif child.type == "image":
            texts.append(_inline_text_from_children(child.children or []))
        elif child.type in ("softbreak", "hardbreak"):
            texts.append(" ")
    return "".join(texts)


def _is_blank(inline: Sequence[InlineElement]) -> bool:
    return all(
        isinstance(node, (SoftBreak, HardBreak)) or (isinstance(node, InlineText) and not node.text.strip())
        for node in inline
    )
