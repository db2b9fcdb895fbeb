"""Module entrypoint for running sentsort as ``python -m sentsort``."""

from __future__ import annotations

from sentsort.cli import main


if __name__ == "__main__":
    main()
