"""Configuration management using Pydantic settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data Directories
    data_dir: Path = Field(
        default=Path(".grantscore"),
        description="Root data directory",
    )
    db_path: Optional[Path] = Field(
        default=None,
        description="SQLite database holding templates and drafts",
    )

    # Ollama Configuration
    ollama_host: str = Field(
        default="http://localhost:11434",
        description="Ollama API host URL",
    )
    llm_model: str = Field(
        default="qwen2.5:7b-instruct",
        description="LLM model used for field auto-completion",
    )
    llm_temperature: float = Field(
        default=0.3,
        description="Sampling temperature for field auto-completion",
    )
    llm_max_tokens: int = Field(
        default=500,
        description="Maximum tokens generated per completed field",
    )
    llm_timeout: int = Field(
        default=120,
        description="Timeout in seconds for a single generation request",
    )

    # Auto-completion Parameters
    auto_apply_confidence: float = Field(
        default=0.7,
        description="Completions above this confidence are written into the draft",
    )
    default_completion_confidence: float = Field(
        default=0.5,
        description="Confidence assigned to free-text (non-JSON) completions",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Write the log file as JSON lines",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Log file path",
    )

    def __init__(self, **kwargs):
        """Initialize config and set dependent paths."""
        super().__init__(**kwargs)

        if self.db_path is None:
            self.db_path = self.data_dir / "grantscore.db"
        if self.log_file is None:
            self.log_file = self.data_dir / "grantscore.log"

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if self.db_path:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global config instance."""
    global _config
    if _config is None:
        _config = Config()
        _config.ensure_directories()
    return _config


def set_config(config: Config) -> None:
    """Replace the global config instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset global config (mainly for testing)."""
    global _config
    _config = None
