# main.py

"""Entry point for the listing editor TUI."""

import argparse
import logging

from listing_editor.config.logging_config import setup_logging

logger = logging.getLogger("listing_editor.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="listing-editor",
        description="Edit an existing marketplace listing.",
        epilog=(
            "Remote endpoint and key are read from SUPABASE_URL and "
            "SUPABASE_KEY (or a .env file)."
        ),
    )
    parser.add_argument(
        "product_id",
        help="Id of the product to edit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress messages on stderr, not only warnings.",
    )
    return parser


def main() -> None:
    """Launch the edit screen for the given product."""
    args = _build_parser().parse_args()
    log_file = setup_logging(console_level="INFO" if args.verbose else None)
    logger.info("listing_editor starting, log file: %s", log_file)

    from listing_editor.ui.app import ListingEditorApp

    try:
        app = ListingEditorApp(args.product_id)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("listing_editor shutting down")


if __name__ == "__main__":
    main()
