"""Entry point for `python -m accentforge`."""

import sys


def main() -> None:
    from accentforge.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
