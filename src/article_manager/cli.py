#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK
"""
Command-line interface for Article Manager
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import argcomplete

from ._version import __version__
from .articles import ArticleStore, seed_demo_data
from .config import Config
from .menu import MenuDispatcher

logger = logging.getLogger(__name__)


def setup_logging(level: str, verbose: bool = False) -> None:
    """Send log records to stderr so they never mix with the menu output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def config_command(config: Config) -> int:
    """Show the merged configuration."""
    if config.path:
        print(f"# Configuration loaded from: {config.path}")
    else:
        print("# No configuration file found, showing defaults")
    print()
    print(json.dumps(config.data, indent=2))
    return 0


def run_command(demo_data: bool) -> int:
    """Run an interactive article session on stdin/stdout."""
    store = ArticleStore()
    if demo_data:
        seed_demo_data(store)
    logger.info("Starting article menu with %d articles", len(store))
    return MenuDispatcher(store).run()


def build_parser() -> argparse.ArgumentParser:
    parser_cli = argparse.ArgumentParser(
        prog="article-manager",
        description="Article Manager - Create, list, update, search and delete articles interactively",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start with the three demo articles
  article-manager

  # Start with an empty store
  article-manager --no-demo

  # Show current configuration
  article-manager --show-config
        """
    )
    parser_cli.add_argument(
        '--version', '-V',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser_cli.add_argument('--config', '-c', type=Path, help='Explicit config file (default: standard locations)')
    demo_group = parser_cli.add_mutually_exclusive_group()
    demo_group.add_argument('--demo', dest='demo', action='store_true', default=None,
                            help='Seed the demo articles (default: from config)')
    demo_group.add_argument('--no-demo', dest='demo', action='store_false',
                            help='Start with an empty store')
    parser_cli.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging on stderr')
    parser_cli.add_argument('--show-config', action='store_true', help='Show merged configuration and exit')
    return parser_cli


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser_cli = build_parser()

    # Enable shell tab completion
    argcomplete.autocomplete(parser_cli)

    args = parser_cli.parse_args(argv)

    config = Config(args.config)
    setup_logging(config.log_level, args.verbose)

    if args.show_config:
        return config_command(config)

    demo_data = args.demo if args.demo is not None else config.demo_data
    return run_command(demo_data)


if __name__ == '__main__':
    sys.exit(main())
