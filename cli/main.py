#!/usr/bin/env python
"""
Launcher - Interactive CLI

Usage:
    python -m cli.main
    python -m cli.main --no-browser
    python -m cli.main -q "g python asyncio"   # match once and exit
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables FIRST (before importing project modules)
load_dotenv('.env')

from cli.repl import REPLRunner

# Configure logging
log_dir = Path(__file__).parent.parent / "log"
log_dir.mkdir(exist_ok=True)

root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)

# File handler - everything from INFO up
file_handler = logging.FileHandler(
    log_dir / "cli.log",
    encoding='utf-8'
)
file_handler.setLevel(logging.INFO)
file_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
file_handler.setFormatter(file_formatter)

# Console handler - WARNING and up only, keeps REPL output clean
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.WARNING)
console_formatter = logging.Formatter('%(levelname)s: %(message)s')
console_handler.setFormatter(console_formatter)

root_logger.addHandler(file_handler)
root_logger.addHandler(console_handler)


def parse_args():
    parser = argparse.ArgumentParser(
        description='Launcher - Interactive CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        '--no-browser',
        action='store_true',
        help='record opened URLs instead of launching a browser'
    )
    parser.add_argument(
        '-q', '--query',
        type=str,
        default=None,
        help='match a single query, print the ranking and exit'
    )
    return parser.parse_args()


async def match_once(repl: REPLRunner, query: str):
    await repl.manager.load_all()
    try:
        repl.match_once(query)
    finally:
        await repl.manager.unload_all()


def main():
    try:
        args = parse_args()
        repl = REPLRunner(open_browser=not args.no_browser)
        if args.query is not None:
            asyncio.run(match_once(repl, args.query))
        else:
            asyncio.run(repl.run())
    except KeyboardInterrupt:
        print("\n\033[33minterrupted\033[0m")
        sys.exit(0)


if __name__ == "__main__":
    main()
