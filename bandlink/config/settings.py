"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from TWO sources (in priority
# order):
#
#   1. **Environment variables** (e.g. RATE_LIMIT_MS=1500)
#      (highest priority, always wins)
#   2. **.env file** with key=value lines in the working directory
#
# The mapping is automatic: field name `rate_limit_ms` maps to env var
# `RATE_LIMIT_MS`.  Defaults apply when neither source sets a field.
#
# The resolution core never sees Settings.  It receives the frozen
# PipelineConfig built by Settings.pipeline_config(), so nothing in the
# pipeline reads process-wide state.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineConfig(BaseModel):
    """Tuning knobs for one resolution run, in seconds."""

    model_config = ConfigDict(frozen=True)

    rate_limit_interval: float = Field(default=1.0, ge=0.0)
    max_attempts: int = Field(default=5, ge=1)
    initial_delay: float = Field(default=1.0, ge=0.0)
    backoff_multiplier: float = Field(default=2.0, ge=1.0)
    call_timeout: float | None = Field(default=None, gt=0.0)


class Settings(BaseSettings):
    """bandlink application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Record I/O ===
    input_csv: str = "input.csv"
    output_csv: str = "output.csv"

    # === Pacing & retries ===
    rate_limit_ms: int = Field(default=1000, ge=0)  # between album-level operations
    max_retries: int = Field(default=5, ge=1)
    backoff_factor: float = Field(default=2.0, ge=1.0)
    initial_backoff_ms: int = Field(default=1000, ge=0)
    # Unset = a hung catalog call blocks the run, as in a plain batch job.
    call_timeout_seconds: float | None = None

    # === Catalog service ===
    catalog_base_url: str = "https://bandcamp.com"
    user_agent: str = "bandlink/0.1.0"
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def pipeline_config(self) -> PipelineConfig:
        """Convert the millisecond env-facing values into a PipelineConfig."""
        return PipelineConfig(
            rate_limit_interval=self.rate_limit_ms / 1000.0,
            max_attempts=self.max_retries,
            initial_delay=self.initial_backoff_ms / 1000.0,
            backoff_multiplier=self.backoff_factor,
            call_timeout=self.call_timeout_seconds,
        )
