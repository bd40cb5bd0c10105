from __future__ import annotations

import dataclasses
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

from .model import CodeBlock
from .syntax_tokenizer import tokenize


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str], fmt: str) -> Path | None:
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / f"{input_path.stem}.{fmt}"
        return out_path
    return None


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def to_plain_data(node: Any, highlight: bool = False) -> Any:
    """Turn model nodes into dicts/lists/strings for dumping.

    Each dataclass becomes a mapping tagged with its class name under
    ``type``. With ``highlight`` every code block also carries its tokens.
    """
    if isinstance(node, Enum):
        return node.value
    if dataclasses.is_dataclass(node) and not isinstance(node, type):
        data: dict[str, Any] = {"type": type(node).__name__}
        for field in dataclasses.fields(node):
            data[field.name] = to_plain_data(getattr(node, field.name), highlight)
        if highlight and isinstance(node, CodeBlock):
            data["tokens"] = [to_plain_data(token) for token in tokenize(node.code, node.language)]
        return data
    if isinstance(node, (list, tuple)):
        return [to_plain_data(item, highlight) for item in node]
    return node


def dump_data(data: Any, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"
