#!/usr/bin/env python3
"""
Bar Schedule Check - CLI Entry Point

Compares a required bar schedule (Page 1 PDF) against a bar tally
(Page 2+ PDF) and reports bar marks whose quantity or diameter disagree.

Usage:
    # Two PDFs
    python main.py ./schedule/page1.pdf ./schedule/page2.pdf

    # Section and layout drawings (halve the tally)
    python main.py page1.pdf page2.pdf --section-and-layout

    # Ignore known differences
    python main.py page1.pdf page2.pdf --ignore CL1 --ignore A3

    # Already extracted text
    python main.py --required-text page1.txt --tally-text page2.txt

    # Show workflow visualization
    python main.py --show-graph
"""

import argparse
import logging
import sys
from pathlib import Path
from datetime import datetime

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from version import __version__, APP_NAME
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bar Schedule Check - Compare required bar quantities against the bar tally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s page1.pdf page2.pdf
  %(prog)s page1.pdf page2.pdf --section-and-layout
  %(prog)s page1.pdf page2.pdf --policy double_required --section-view CL1
  %(prog)s --required-text page1.txt --tally-text page2.txt --ignore A3
  %(prog)s --show-graph
        """
    )

    parser.add_argument(
        "required_pdf",
        nargs="?",
        help="Page 1 PDF with the required bar schedule"
    )

    parser.add_argument(
        "tally_pdf",
        nargs="?",
        help="Page 2+ PDF with the bar tally"
    )

    parser.add_argument(
        "--required-text",
        default=None,
        help="Plain-text file with already extracted Page 1 text (replaces required_pdf)"
    )

    parser.add_argument(
        "--tally-text",
        default=None,
        help="Plain-text file with already extracted Page 2+ text (replaces tally_pdf)"
    )

    parser.add_argument(
        "--section-and-layout", "-s",
        action="store_true",
        default=None,
        help="Pages show both section and layout (halve the tally, or double required under double_required)"
    )

    parser.add_argument(
        "--policy", "-p",
        choices=["halve_tally", "double_required"],
        default=None,
        help="How the section-and-layout flag adjusts the comparison (default: halve_tally)"
    )

    parser.add_argument(
        "--ignore", "-i",
        action="append",
        default=[],
        metavar="MARK",
        help="Bar mark to leave out of the mismatch report (repeatable)"
    )

    parser.add_argument(
        "--section-view",
        action="append",
        default=[],
        metavar="MARK",
        help="Double the required quantity for a bar mark under the double_required policy (repeatable)"
    )

    parser.add_argument(
        "--config", "-c",
        default=None,
        help="YAML config file (default: ./config/bar_check.yaml or ~/.barcheck/config.yaml)"
    )

    parser.add_argument(
        "--show-graph",
        action="store_true",
        help="Show workflow graph visualization and exit"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose/debug logging"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def _resolve_input(pdf_arg, text_arg, label):
    """Return (path, is_text) for one side, or None if the file is missing."""
    chosen = text_arg or pdf_arg
    path = Path(chosen).resolve()
    if not path.exists():
        logger.error(f"{label} input does not exist: {path}")
        return None
    return path, bool(text_arg)


def _read_text_input(path, label):
    """Read a plain-text input, degrading to "" when it cannot be decoded."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"{label} text could not be read, using empty text: {e}")
        return ""


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Show graph visualization
    if args.show_graph:
        from agent import get_workflow_visualization
        print(get_workflow_visualization())
        return 0

    # Validate required arguments
    if not (args.required_pdf or args.required_text) or not (args.tally_pdf or args.tally_text):
        parser.error("a required-list and a tally input are required (PDF paths or --required-text/--tally-text)")

    from tools.config import load_config, ConfigError

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    # CLI flags override config
    if args.section_and_layout is not None:
        config.section_and_layout = args.section_and_layout
    if args.policy:
        from tools.reconciler import AdjustmentPolicy
        config.adjustment_policy = AdjustmentPolicy.from_value(args.policy)
    config.ignore_marks = list(dict.fromkeys(config.ignore_marks + args.ignore))
    config.section_view_marks = list(dict.fromkeys(config.section_view_marks + args.section_view))

    required = _resolve_input(args.required_pdf, args.required_text, "Required-list")
    tally = _resolve_input(args.tally_pdf, args.tally_text, "Tally")
    if required is None or tally is None:
        return 1

    # Print banner
    print("\n" + "=" * 60)
    print(f"  {APP_NAME} v{__version__}")
    print("  Required bar schedule vs bar tally")
    print("=" * 60)
    print(f"  Required: {required[0]}")
    print(f"  Tally:    {tally[0]}")
    print(f"  Section and layout: {'Yes' if config.section_and_layout else 'No'}")
    print(f"  Policy:   {config.adjustment_policy.value}")
    if config.source:
        print(f"  Config:   {config.source}")
    print("=" * 60 + "\n")

    try:
        from agent import ComparisonSession

        start_time = datetime.now()

        session = ComparisonSession.from_config(config)

        for (path, is_text), loader, setter_key, label in (
            (required, session.load_required_pdf, "required_text", "Required-list"),
            (tally, session.load_tally_pdf, "tally_text", "Tally"),
        ):
            if is_text:
                session.set_texts(**{setter_key: _read_text_input(path, label)})
            else:
                doc = loader(str(path))
                for err in doc.errors:
                    logger.warning(err)

        results = session.compare()
        duration = (datetime.now() - start_time).total_seconds()

        print(results.format_table())

        summary = results.summary()
        print("\n" + "=" * 60)
        print("  COMPARISON COMPLETE")
        print("=" * 60)
        print(f"  Bar Marks:            {summary['total_marks']}")
        print(f"  Quantity Mismatches:  {summary['quantity_mismatches']}")
        print(f"  Diameter Mismatches:  {summary['diameter_mismatches']}")
        print(f"  Missing From Tally:   {summary['missing_from_tally']}")
        print(f"  Ignored:              {summary['ignored']}")
        print(f"  Duration:             {duration:.1f} seconds")
        print("=" * 60)

        print("\n  Mismatched Bar Marks:")
        print(session.mismatch_report())
        print()
        return 0

    except ImportError as e:
        logger.error(f"Missing dependency: {e}")
        logger.error("Run: pip install -e .")
        return 1
    except Exception as e:
        logger.exception(f"Comparison failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
