"""Module entrypoint for ``python -m lazyrecent``."""

from .cli import main


if __name__ == "__main__":
    main()
