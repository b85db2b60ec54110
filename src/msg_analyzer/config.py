"""Configuration management via environment variables.

Reads from .env file (via pydantic-settings) with sensible defaults.
All values can be overridden via environment variables.

Optional:
    COMPRESSION_LEVEL    — zlib level used for the size signal (0-9)
    PARSE_ATTRIBUTES     — include XML attributes as "@name" keys in the tree
    MASK_SENSITIVE_DATA  — redact payloads returned by the web/MCP surfaces
    MAX_INPUT_CHARS      — per-field input limit enforced by the web app
    DIFF_TIMEOUT         — seconds before the diff settles for a non-minimal script (0 = never)
    PORT                 — Server port
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Size signal
    compression_level: int = Field(default=6, ge=0, le=9)

    # Structural decoder
    parse_attributes: bool = True

    # Diff engine
    diff_timeout: float = Field(default=0.0, ge=0)

    # Presentation surfaces
    mask_sensitive_data: bool = True
    max_input_chars: int = Field(default=200_000, gt=0)

    # Web app
    port: int = 3050
    log_level: str = "info"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().strip('"').strip("'").strip().lower()
        return v

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_config: Settings | None = None


def get_config() -> Settings:
    """Get or create the shared Settings singleton."""
    global _config
    if _config is None:
        _config = Settings()
    return _config
