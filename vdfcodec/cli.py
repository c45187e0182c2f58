"""CLI for checking and normalizing VDF files into canonical layout."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Sequence

from vdfcodec.api import CodecConfig, parse
from vdfcodec.errors import VDFError
from vdfcodec.formatter import VDFFormatter
from vdfcodec.logger import get_logger

DEFAULT_PATTERN = "*.vdf"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vdfcodec",
        description="Parse VDF (Valve KeyValues) files and rewrite them in canonical layout.",
    )
    parser.add_argument("input", help="Path to a VDF file or a directory of VDF files.")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory where normalized files should be written (default: print to stdout).",
    )
    parser.add_argument(
        "--pattern",
        default=DEFAULT_PATTERN,
        help=f"Glob used to pick files when the input is a directory (default: {DEFAULT_PATTERN}).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the parsed tree as JSON instead of VDF.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only report files that are not already in canonical layout; exit 1 if any are found.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log lexer and parser activity.")
    return parser.parse_args(argv)


def collect_inputs(path: Path, pattern: str = DEFAULT_PATTERN) -> list[Path]:
    if path.is_dir():
        files = sorted(p for p in path.glob(pattern) if p.is_file())
        if not files:
            raise FileNotFoundError(f"No files matching {pattern} found in directory: {path}")
        return files
    if path.is_file():
        return [path]
    raise FileNotFoundError(f"Input path does not exist: {path}")


def format_document(text: str, as_json: bool = False, config: CodecConfig | None = None) -> str:
    tree = parse(text, config=config)
    if as_json:
        return tree.model_dump_json(indent=2) + "\n"
    return VDFFormatter().format(tree) + "\n"


def generate(
    files: Iterable[Path],
    output_dir: Path | None,
    as_json: bool = False,
    check: bool = False,
    verbose: bool = False,
) -> int:
    logger = get_logger("vdfcodec.cli", verbose)
    config: CodecConfig = {
        "lexer_config": {"enable_logger": verbose},
        "parser_config": {"enable_logger": verbose},
    }
    status = 0
    if output_dir is not None and not check:
        output_dir.mkdir(parents=True, exist_ok=True)
    for source in files:
        try:
            text = source.read_text(encoding="utf-8")
            normalized = format_document(text, as_json=as_json and not check, config=config)
        except (VDFError, UnicodeDecodeError, OSError) as exc:
            print(f"{source}: {exc}", file=sys.stderr)
            status = 1
            continue
        if check:
            # a single trailing newline is tolerated on disk
            if text.rstrip("\n") + "\n" != normalized:
                print(f"{source}: not in canonical layout")
                status = 1
            continue
        if output_dir is None:
            sys.stdout.write(normalized)
            continue
        destination = output_dir / (source.stem + ".json" if as_json else source.name)
        destination.write_text(normalized, encoding="utf-8")
        logger.info(f"Wrote {destination}")
    return status


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        files = collect_inputs(Path(args.input), args.pattern)
    except FileNotFoundError as exc:
        print(exc, file=sys.stderr)
        return 1
    output_dir = Path(args.output_dir) if args.output_dir else None
    return generate(files, output_dir, as_json=args.json, check=args.check, verbose=args.verbose)


if __name__ == "__main__":
    sys.exit(main())
