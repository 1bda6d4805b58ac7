# letter_wizard/config/schema.py
"""
Pydantic configuration models for letter-wizard.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from typing import Literal

from platformdirs import user_data_path
from pydantic import BaseModel, ConfigDict, Field


def _default_db_path() -> str:
    return str(user_data_path("letter-wizard") / "artifacts.db")


class GenerationConfig(BaseModel):
    """Generation service configuration."""

    model_config = ConfigDict(extra="ignore")

    endpoint: str = Field(
        default="http://localhost:54321/functions/v1/generate-legal-letter",
        description="URL of the document generation function",
    )
    api_key: str | None = Field(
        default=None, description="Bearer token for the generation service"
    )
    timeout: float = Field(
        default=120.0, gt=0, description="Request timeout in seconds"
    )
    login_path: str = Field(
        default="/auth", description="Where unauthenticated users are redirected"
    )


class StorageConfig(BaseModel):
    """Artifact storage configuration."""

    model_config = ConfigDict(extra="ignore")

    db_path: str = Field(
        default_factory=_default_db_path,
        description="SQLite database for generated documents",
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    model_config = ConfigDict(extra="ignore")

    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Logging verbosity level"
    )


class LetterWizardConfig(BaseModel):
    """Root configuration for letter-wizard."""

    model_config = ConfigDict(extra="ignore")

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
