# letter_wizard/__main__.py
"""Entry point for `python -m letter_wizard`."""

from letter_wizard.cli import app

if __name__ == "__main__":
    app()
