"""Application entry point."""

from __future__ import annotations

import sys


def main() -> None:
    """Launch the Chessreel application."""
    from chessreel.ui.bootstrap import run_application

    sys.exit(run_application())


if __name__ == "__main__":
    main()
