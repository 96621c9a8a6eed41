"""Entry point for ``python -m dirsize``."""

from __future__ import annotations

from dirsize.app.cli import main

if __name__ == "__main__":
    main()
