# letter_wizard/config/__init__.py
"""Configuration system for letter-wizard."""

from .loader import get_config_path, load_config
from .schema import (
    GenerationConfig,
    LetterWizardConfig,
    OutputConfig,
    StorageConfig,
)

__all__ = [
    "LetterWizardConfig",
    "GenerationConfig",
    "StorageConfig",
    "OutputConfig",
    "load_config",
    "get_config_path",
]
