"""
Command line interface for pdfmend.

Usage:
    pdfmend article.pdf -o article.xml
    pdfmend article.pdf -l words.txt.gz -g -v
    pdfmend article.pdf -b auto -p text,words
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pdfmend.config import EXTRACTION_MODES, ConversionConfig, RepairConfig
from pdfmend.convert import convert
from pdfmend.exceptions import PdfMendError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfmend",
        description="Convert a PDF to XML with repaired word segmentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Path to source PDF",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output XML path (default: stdout)",
    )
    parser.add_argument(
        "--lexicon",
        "-l",
        type=Path,
        help="Word list file (plain, .gz, .bz2 or .xz)",
    )
    parser.add_argument(
        "--builtin-lexicon",
        "-b",
        metavar="LANG",
        help='Add the built-in word list for LANG ("auto" to detect)',
    )
    parser.add_argument(
        "--passes",
        "-p",
        default=",".join(EXTRACTION_MODES),
        help=f"Comma-separated extraction passes (default: {','.join(EXTRACTION_MODES)})",
    )
    parser.add_argument(
        "--no-lowercase",
        "-L",
        action="store_true",
        help="Keep case distinctions in the vocabulary",
    )
    parser.add_argument(
        "--skip-merge",
        "-m",
        action="store_true",
        help="Do not re-segment; pass tokens through unchanged",
    )
    parser.add_argument(
        "--skip-dehyphenation",
        "-H",
        action="store_true",
        help="Do not rejoin hyphenated words",
    )
    parser.add_argument(
        "--character-split",
        "-c",
        action="store_true",
        help="Always segment at character level",
    )
    parser.add_argument(
        "--ligatures",
        "-g",
        action="store_true",
        help="Primary extraction drops ligatures; repair them",
    )
    parser.add_argument(
        "--never-split-paragraphs",
        "-x",
        action="store_true",
        help="Close paragraphs only at page and other non-paragraph boundaries",
    )
    parser.add_argument(
        "--no-paragraph-merge",
        action="store_true",
        help="Keep every extracted block as its own paragraph",
    )
    parser.add_argument(
        "--on-error",
        choices=["raise", "warn", "skip"],
        default="raise",
        help="What to do when extraction fails (default: raise)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Trace merge and split decisions on stderr",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ConversionConfig:
    """Build a ConversionConfig from parsed arguments."""
    repair = RepairConfig(
        lowercase_fold=not args.no_lowercase,
        lexicon_path=args.lexicon,
        builtin_lexicon=args.builtin_lexicon,
        skip_merge=args.skip_merge,
        skip_dehyphenation=args.skip_dehyphenation,
        force_character_split=args.character_split,
        repair_ligatures=args.ligatures,
        auto_merge_paragraphs=not args.no_paragraph_merge,
        never_split_paragraphs=args.never_split_paragraphs,
        verbose_trace=args.verbose,
    )
    passes = tuple(mode.strip() for mode in args.passes.split(",") if mode.strip())
    return ConversionConfig(passes=passes, on_extraction_error=args.on_error, repair=repair)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.verbose:
        trace = logging.getLogger("pdfmend.trace")
        trace.setLevel(logging.INFO)

    try:
        config = config_from_args(args)
        doc = convert(args.input, config)
    except (PdfMendError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for warning in doc.warnings:
        logger.warning(warning)

    if args.output:
        doc.save(args.output)
        print(f"Saved to: {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(doc.to_xml())

    return 0


if __name__ == "__main__":
    sys.exit(main())
