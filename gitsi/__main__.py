"""Module entrypoint for ``python -m gitsi``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and runtime setup happen in ``gitsi.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
