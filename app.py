"""Main entry point for the application: ``flask --app app shuttlebook ...``."""

from shuttlebook import create_app

app = create_app()
