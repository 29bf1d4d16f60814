"""Module entrypoint for running confscan as ``python -m confscan``."""

from __future__ import annotations

from confscan.cli import main


if __name__ == "__main__":
    main()
