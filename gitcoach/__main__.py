"""Module entrypoint for ``python -m gitcoach``."""

from .cli import main


if __name__ == "__main__":
    main()
