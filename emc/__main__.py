"""Entry point for ``python -m emc``."""
from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
