# letter_wizard/__init__.py
"""Schema-driven validation and generation wizard for UAE legal letters."""

__version__ = "0.1.0"
