# letter_wizard/schemas/__init__.py
"""Per-document-type field schemas and the registry that serves them."""
