"""Allow running jump with ``python -m jump``."""

from .cli import main

if __name__ == "__main__":
    main()
