"""Entry point for `python -m calrecur` command."""

import sys

from calrecur.cli import main_entry


def main() -> None:
    """Main function for console script entry point."""
    sys.exit(main_entry())


if __name__ == "__main__":
    main()
