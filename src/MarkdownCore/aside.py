from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union


class AsideKind(str, Enum):
    """Known callout kinds; the value is the canonical tag spelling."""

    NOTE = "Note"
    TIP = "Tip"
    IMPORTANT = "Important"
    EXPERIMENT = "Experiment"
    WARNING = "Warning"
    ATTENTION = "Attention"
    AUTHOR = "Author"
    AUTHORS = "Authors"
    BUG = "Bug"
    COMPLEXITY = "Complexity"
    COPYRIGHT = "Copyright"
    DATE = "Date"
    INVARIANT = "Invariant"
    MUTATING_VARIANT = "MutatingVariant"
    NON_MUTATING_VARIANT = "NonMutatingVariant"
    POSTCONDITION = "Postcondition"
    PRECONDITION = "Precondition"
    REMARK = "Remark"
    REQUIRES = "Requires"
    SINCE = "Since"
    TODO = "ToDo"
    VERSION = "Version"
    THROWS = "Throws"
    SEE_ALSO = "SeeAlso"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES.get(self, self.value)


@dataclass(frozen=True)
class CustomAsideKind:
    """Tag that is not one of the known kinds, kept as written."""

    tag: str

    @property
    def display_name(self) -> str:
        return self.tag


_DISPLAY_NAMES = {
    AsideKind.MUTATING_VARIANT: "Mutating Variant",
    AsideKind.NON_MUTATING_VARIANT: "Non-Mutating Variant",
    AsideKind.TODO: "To Do",
    AsideKind.SEE_ALSO: "See Also",
}

_KINDS_BY_TAG = {kind.value.lower(): kind for kind in AsideKind}

_WHITESPACE_RE = re.compile(r"\s")


def classify_aside(tag: str) -> Union[AsideKind, CustomAsideKind]:
    """Map a callout tag to its kind, case-insensitively.

    The tag is used as given: no trimming happens here. Anything that is not
    a known kind becomes a ``CustomAsideKind`` holding the original text.
    """
    kind = _KINDS_BY_TAG.get(tag.lower())
    if kind is not None:
        return kind
    return CustomAsideKind(tag)


def split_aside_tag(text: str) -> tuple[str, str] | None:
    """Split ``"Tag: rest"`` into ``("Tag", "rest")``.

    Returns None when the text does not open with a single-word tag followed
    by a colon.
    """
    tag, sep, rest = text.partition(":")
    if not sep or not tag or _WHITESPACE_RE.search(tag):
        return None
    return tag, rest.lstrip()
