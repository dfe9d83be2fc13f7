"""Module entrypoint for ``python -m lazypager``.

All argument parsing and runtime setup happen in ``lazypager.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
