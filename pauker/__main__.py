"""Module entrypoint for ``python -m pauker``.

All argument parsing and dispatch happen in ``pauker.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
