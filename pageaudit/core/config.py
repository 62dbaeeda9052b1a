"""Runtime settings, read from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path

APP_NAME = "PageAudit"
APP_VERSION = "1.0.0"

PACKAGE_DIR = Path(__file__).resolve().parent.parent
PUBLIC_DIR = PACKAGE_DIR / "public"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


@dataclass
class Settings:
    host: str = "127.0.0.1"
    port: int = 4000
    data_dir: Path = field(default_factory=Path.cwd)
    public_dir: Path = PUBLIC_DIR
    headless: bool = True
    verbose: int = 1

    # Navigation timeouts, in milliseconds
    audit_timeout: int = 60000
    probe_timeout: int = 15000
    scrape_timeout: int = 45000
    screenshot_timeout: int = 45000
    pdf_timeout: int = 60000

    viewport: dict = field(default_factory=lambda: {"width": 1366, "height": 768})
    launch_args: list = field(default_factory=lambda: [
        "--no-sandbox", "--disable-setuid-sandbox"])

    @property
    def screenshots_dir(self) -> Path:
        return Path(self.data_dir) / "screenshots"

    @property
    def reports_dir(self) -> Path:
        return Path(self.data_dir) / "reports"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("PAGEAUDIT_HOST", "127.0.0.1"),
            port=int(os.getenv("PAGEAUDIT_PORT", "4000")),
            data_dir=Path(os.getenv("PAGEAUDIT_DATA_DIR") or Path.cwd()),
            headless=_env_bool("PAGEAUDIT_HEADLESS", True),
            verbose=int(os.getenv("PAGEAUDIT_VERBOSE", "1")),
        )
