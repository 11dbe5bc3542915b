"""Module entrypoint for ``python -m fee``.

All argument parsing and runtime setup happen in ``fee.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
