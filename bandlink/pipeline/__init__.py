"""Pipeline orchestration components for the link-resolution run."""

from bandlink.pipeline.orchestrator import LinkResolutionPipeline
from bandlink.pipeline.progress_tracker import ProgressTracker
from bandlink.pipeline.rate_limiter import RateLimiter

__all__ = [
    "LinkResolutionPipeline",
    "ProgressTracker",
    "RateLimiter",
]
