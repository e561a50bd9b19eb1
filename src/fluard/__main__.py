"""Allow ``python -m fluard ADDRESS`` to behave like the ``fluard`` script."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
