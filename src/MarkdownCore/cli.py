from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import markdown_parser, syntax_tokenizer
from .utils import configure_logging, dump_data, read_text, resolve_output_path, to_plain_data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markdowncore",
        description="Dump the parsed Markdown document tree or the syntax tokens of a source file.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown (or source code with --language)")
    parser.add_argument("-o", "--output", type=str, help="Output file or directory (default: stdout)")
    parser.add_argument("--format", choices=["json", "yaml"], default="json", help="Dump format")
    parser.add_argument("--language", type=str, help="Treat input as source code in this language and dump tokens")
    parser.add_argument("--highlight", action="store_true", help="Attach syntax tokens to code blocks")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    output_path = resolve_output_path(input_path, args.output, args.format)

    logging.info("Reading %s", input_path)
    text = read_text(input_path)
    logging.debug("Input length: %d chars", len(text))

    if args.language:
        logging.info("Tokenizing as %s...", args.language)
        data = to_plain_data(syntax_tokenizer.tokenize(text, args.language))
    else:
        logging.info("Parsing markdown...")
        document = markdown_parser.parse_markdown(text)
        logging.debug("Parsed %d top-level blocks", len(document.blocks))
        data = to_plain_data(document, highlight=args.highlight)

    rendered = dump_data(data, args.format)
    if output_path is None:
        sys.stdout.write(rendered)
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered, encoding="utf-8")
    logging.info("Done. Saved to %s", output_path)


if __name__ == "__main__":
    main()
