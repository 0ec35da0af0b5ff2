"""Module entrypoint for ``python -m ghgateway``."""

from ghgateway.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
