"""Concurrent prober for publicly browsable .git/ directory listings."""

from .config import ScanConfig
from .pool import ScanSummary, run_scan
from .sinks import FileSink, PlaywrightRenderer, ScreenshotRecord, ScreenshotSink
from .verify import verify_domain

__all__ = [
    "FileSink",
    "PlaywrightRenderer",
    "ScanConfig",
    "ScanSummary",
    "ScreenshotRecord",
    "ScreenshotSink",
    "run_scan",
    "verify_domain",
]

__version__ = "1.0.0"
