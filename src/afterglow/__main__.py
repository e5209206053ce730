"""Main entry point for afterglow."""

from afterglow.cli import cli


if __name__ == "__main__":
    cli()
