import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from tqdm import tqdm

from mdppet import __version__
from mdppet.config import OutputConfig, ScannerConfig
from mdppet.errors import MdppetError
from mdppet.exception_handler import ErrorHandler
from mdppet.orchestration import ConversionPipeline


logger = logging.getLogger("mdppet")

STDIO = "-"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mdppet",
        description="Convert a markdown snippet document into editor snippet JSON",
    )
    parser.add_argument(
        "src",
        help="Markdown file, directory of markdown files, or '-' for stdin",
    )
    parser.add_argument(
        "--output",
        "-o",
        dest="dest",
        default="out.json",
        help="Output file path, or '-' for stdout (default: out.json)",
    )
    layout = parser.add_mutually_exclusive_group()
    layout.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indentation of the JSON output (default: 2, or MDPPET_INDENT)",
    )
    layout.add_argument(
        "--compact",
        action="store_true",
        help="Write the JSON output on a single line",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Escape non-ASCII characters in the JSON output",
    )
    parser.add_argument(
        "--separator",
        default=None,
        help="Heading field separator (default: '/', or MDPPET_FIELD_SEPARATOR)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def _build_configs(args: argparse.Namespace) -> tuple[ScannerConfig, OutputConfig]:
    scanner_config = ScannerConfig.from_env()
    if args.separator is not None:
        scanner_config = ScannerConfig(
            heading_marker=scanner_config.heading_marker,
            field_separator=args.separator,
            fence_marker=scanner_config.fence_marker,
        )

    output_config = OutputConfig.from_env()
    if args.compact:
        output_config.indent = None
    elif args.indent is not None:
        output_config.indent = args.indent
    if args.ascii:
        output_config.ensure_ascii = True
    return scanner_config, output_config


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    error_handler = ErrorHandler(args.log_level)

    if args.src != STDIO and not os.path.exists(args.src):
        print(f"Error: Path does not exist: {args.src}", file=sys.stderr)
        sys.exit(1)

    try:
        scanner_config, output_config = _build_configs(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    pipeline = ConversionPipeline(
        scanner_config=scanner_config,
        output_config=output_config,
    )

    try:
        output_text = pipeline.run(args.src)
    except KeyboardInterrupt:
        print("\n⚠️ Conversion interrupted", file=sys.stderr)
        sys.exit(1)
    except MdppetError as exc:
        error_handler.collect_conversion_error(exc)
        print(error_handler.format_error_report(), file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as exc:
        error_handler.collect_file_error(exc, args.src, "read")
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        logger.exception("Fatal error during snippet conversion")
        print("\n❌ Fatal error occurred. See log for details.", file=sys.stderr)
        sys.exit(1)

    stats = pipeline.last_run_stats or {}
    if stats.get("total_files", 0) == 0:
        print("❌ No markdown files found", file=sys.stderr)
        sys.exit(1)

    if args.dest == STDIO:
        print(output_text)
        return

    try:
        pipeline.write(output_text, args.dest)
    except OSError as exc:
        error_handler.collect_file_error(exc, args.dest, "write")
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    tqdm.write(f"{args.src} -> {args.dest}")
    logger.debug("Converted %d snippets", stats.get("total_snippets", 0))


if __name__ == "__main__":
    main()
