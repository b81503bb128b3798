"""Entry point for running voicematch as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the voicematch CLI application."""
    app()


if __name__ == "__main__":
    main()
