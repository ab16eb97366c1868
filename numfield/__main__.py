"""Module entrypoint for running numfield as ``python -m numfield``."""

from __future__ import annotations

from numfield.cli import main


if __name__ == "__main__":
    main()
