from dataclasses import dataclass

MAX_CONCURRENCY = 2       # keep it small, targets are third-party servers
REQUEST_DELAY = 3         # seconds a worker waits after each domain
REQUEST_TIMEOUT = 15      # seconds per HTTP probe
SCREENSHOT_TIMEOUT = 20   # seconds per page capture
BATCH_SIZE = 10
NETWORK_PAUSE = 1         # seconds between batches

OUTPUT_FILE = "git_exposed.txt"
SCREENSHOT_DIR = "screens"
REPORT_HTML = "report.html"
REPORT_XLSX = "results.xlsx"

VIEWPORT = {"width": 800, "height": 600}
GIT_INDEX_TITLE = "<title>Index of /.git</title>"
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120.0 Safari/537.36"


@dataclass(frozen=True)
class ScanConfig:
    """Tunables for one scan. Times are in seconds."""

    max_concurrency: int = MAX_CONCURRENCY
    request_delay: float = REQUEST_DELAY
    request_timeout: float = REQUEST_TIMEOUT
    screenshot_timeout: float = SCREENSHOT_TIMEOUT
    batch_size: int = BATCH_SIZE
    network_pause: float = NETWORK_PAUSE

    def __post_init__(self):
        if self.max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {self.max_concurrency}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")
        if self.request_delay < 0 or self.network_pause < 0:
            raise ValueError("request_delay and network_pause cannot be negative")
        if self.request_timeout <= 0 or self.screenshot_timeout <= 0:
            raise ValueError("timeouts must be positive")
