"""Command-line interface for readme-builder."""

import argparse
import logging
import sys
from pathlib import Path

from .config import load_settings
from .constants import EXIT_DIFF_DETECTED, EXIT_ERROR, EXIT_SUCCESS
from .errors import MissingFragmentsError, ReadmeBuilderError
from .scaffold import init_templates
from .writer import ReadmeWriter, WriteMode

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument.

    Raises:
        argparse.ArgumentTypeError: If the value is not a positive integer.
    """
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"'{value}' must be at least 1")
    return number


def parse_arguments(argv=None):
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="readme-builder",
        description="Generate a README from ordered readme_* template fragments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  readme-builder --cli ./bin/mytool
  readme-builder --cli-name mytool --templates docs/templates --output README.md
  readme-builder --cli ./bin/mytool --check
  readme-builder --cli ./bin/mytool --dry-run
  readme-builder --init --cli-name mytool --templates docs/templates
        """,
    )

    parser.add_argument("--config", type=Path, help="YAML config file (default: .readme-builder.yaml if present)")
    parser.add_argument("-t", "--templates", dest="template_dir", type=Path, help="Directory with readme_* fragments")
    parser.add_argument("--cli", dest="cli_path", type=Path, help="Path to the CLI binary being documented")
    parser.add_argument("--cli-name", help="CLI name (default: binary file name); used to find the binary on PATH")
    parser.add_argument("--version-string", help="Use this version instead of asking the binary")
    parser.add_argument("--tagline", help="Value for {{TAGLINE}}")
    parser.add_argument("--quote", help="Value for {{QUOTE}}")
    parser.add_argument("--quote-author", help="Value for {{QUOTE_AUTHOR}}")
    parser.add_argument("--brew-link", help="Value for {{BREW_LINK}}")
    parser.add_argument("--emoji", help="Value for {{EMOJI}}")
    parser.add_argument("--tree-root", type=Path, help="Directory to list in the tree block (default: .)")
    parser.add_argument("--tree-depth", type=positive_int, help="Maximum depth of the tree block")
    parser.add_argument("-o", "--output", type=Path, help="Output path for the README (default: README.md)")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--check",
        action="store_true",
        help="Only check whether the README is up to date; exit 1 if it is not",
    )
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not write the README; print the normalized directory tree to stderr",
    )
    mode.add_argument(
        "--init",
        action="store_true",
        help="Create starter readme_* fragments in the template directory and exit",
    )

    parser.add_argument("--overwrite", action="store_true", help="With --init, replace existing fragments")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    """Configure logging based on verbose flag."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )


def main(argv=None) -> int:
    """Main entry point for the command."""
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    overrides = {
        "cli_name": args.cli_name,
        "tagline": args.tagline,
        "quote": args.quote,
        "quote_author": args.quote_author,
        "brew_link": args.brew_link,
        "emoji": args.emoji,
        "template_dir": args.template_dir,
        "output": args.output,
        "tree_root": args.tree_root,
        "tree_depth": args.tree_depth,
    }

    try:
        settings = load_settings(args.config, overrides)

        if args.init:
            cli_name = settings.cli_name or (args.cli_path.name if args.cli_path else "")
            written = init_templates(settings.template_dir, cli_name, overwrite=args.overwrite)
            logger.info(f"Wrote {len(written)} fragment(s) to {settings.template_dir}")
            return EXIT_SUCCESS

        if args.check:
            mode = WriteMode.CHECK
        elif args.dry_run:
            mode = WriteMode.DRY_RUN
        else:
            mode = WriteMode.WRITE

        writer = ReadmeWriter(settings, cli_path=args.cli_path, version=args.version_string)
        has_diff = writer.generate(mode)
    except MissingFragmentsError as e:
        logger.error(str(e))
        return EXIT_ERROR
    except ReadmeBuilderError as e:
        logger.error(f"Error: {e}")
        return EXIT_ERROR

    if has_diff:
        logger.error(f"README is out of date, run without --check to regenerate {settings.output}")
        return EXIT_DIFF_DETECTED
    return EXIT_SUCCESS


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
