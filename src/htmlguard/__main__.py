"""Entry point for `python -m htmlguard` and `htmlguard` CLI."""

from htmlguard.cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
