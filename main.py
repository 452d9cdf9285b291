"""Main entry point for quiz-session CLI."""

from quiz_session.cli.app import app


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
