"""Configuration module: exports Settings and the derived PipelineConfig."""

from bandlink.config.settings import PipelineConfig, Settings

__all__ = ["PipelineConfig", "Settings"]
