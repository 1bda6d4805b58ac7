# letter_wizard/config/loader.py
"""
Configuration loading with auto-creation of defaults.

Uses platformdirs for cross-platform config directory management.
"""

import logging
from pathlib import Path

import yaml
from platformdirs import user_config_path

from .schema import LetterWizardConfig

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """Get path to config file, ensuring config directory exists."""
    config_dir = user_config_path("letter-wizard", ensure_exists=True)
    return config_dir / "config.yaml"


def load_config(config_path: Path | None = None) -> LetterWizardConfig:
    """
    Load configuration from YAML file.

    If the config file doesn't exist, creates it with defaults.

    Args:
        config_path: Explicit file to use (default: platform config dir)

    Returns:
        Validated configuration model
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        default_config = LetterWizardConfig()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w") as f:
            yaml.safe_dump(
                default_config.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

        logger.info(f"Created default config at {config_path}")
        return default_config

    with config_path.open("r") as f:
        config_data = yaml.safe_load(f) or {}

    config = LetterWizardConfig(**config_data)
    logger.info(f"Loaded config from {config_path}")
    return config
