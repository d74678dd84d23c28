import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_NAVIGATION_TIMEOUT_MS = 30_000


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


class ScraperConfig(BaseModel):
    """Browser settings for a scrape call."""
    browser_executable_path: Optional[str] = None
    navigation_timeout_ms: int = Field(DEFAULT_NAVIGATION_TIMEOUT_MS, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    headless: bool = True

    @classmethod
    def from_env(cls) -> "ScraperConfig":
        """Build config from environment variables (and .env, via python-dotenv).

        Raises:
            ValueError: If SCRAPER_NAVIGATION_TIMEOUT_MS is not an integer.
        """
        timeout_raw = os.environ.get("SCRAPER_NAVIGATION_TIMEOUT_MS")
        timeout = DEFAULT_NAVIGATION_TIMEOUT_MS
        if timeout_raw:
            try:
                timeout = int(timeout_raw)
            except ValueError:
                raise ValueError(
                    f"SCRAPER_NAVIGATION_TIMEOUT_MS must be an integer, got {timeout_raw!r}"
                )

        return cls(
            browser_executable_path=(
                os.environ.get("BROWSER_EXECUTABLE_PATH") or os.environ.get("CHROME_BIN") or None
            ),
            navigation_timeout_ms=timeout,
            user_agent=os.environ.get("SCRAPER_USER_AGENT") or DEFAULT_USER_AGENT,
            headless=_env_bool("SCRAPER_HEADLESS", True),
        )
