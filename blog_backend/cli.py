"""The blog command-line tool."""

from __future__ import annotations

import argparse


def main(argv: list[str] | None = None) -> int:
    """Print the usage; the tool has no subcommands."""
    parser = argparse.ArgumentParser(prog="blog-cli")
    parser.parse_args(argv)
    parser.print_help()
    return 0