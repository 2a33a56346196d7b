import logging
import random

import httpx

logger = logging.getLogger(__name__)

USER_AGENTS = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:109.0) Gecko/20100101 Firefox/121.0",
)

ACCEPT_HTML = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,"
    "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
)
ACCEPT_LANGUAGE = "pt-BR,pt;q=0.9,en;q=0.8"
_ACCEPT_SIMPLE = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

BROWSER_HEADERS = {
    "Accept": ACCEPT_HTML,
    "Accept-Language": ACCEPT_LANGUAGE,
    "Accept-Encoding": "gzip, deflate",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "max-age=0",
    "sec-ch-ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"macOS"',
}


def is_json_response(resp: httpx.Response) -> bool:
    return "application/json" in resp.headers.get("content-type", "")


class PageFetcher:
    """GETs pages with rotated browser-like headers.

    A non-2xx answer is retried with progressively smaller header sets
    (full, simple, user-agent only) before the URL is given up on.
    Transport errors give up immediately. Never raises.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        timeout: float = 15.0,
        max_body_bytes: int = 5 * 1024 * 1024,
        rng: random.Random | None = None,
    ):
        self._client = client
        self._timeout = timeout
        self._max_body = max_body_bytes
        self._rng = rng or random.Random()

    def user_agent(self) -> str:
        return self._rng.choice(USER_AGENTS)

    def rotating_headers(self) -> dict[str, str]:
        return {**BROWSER_HEADERS, "User-Agent": self.user_agent()}

    def header_levels(self) -> list[dict[str, str]]:
        return [
            self.rotating_headers(),
            {"User-Agent": self.user_agent(), "Accept": _ACCEPT_SIMPLE},
            {"User-Agent": self.user_agent()},
        ]

    def api_headers(self, origin: str) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent(),
            "Accept": "application/json",
            "Accept-Language": ACCEPT_LANGUAGE,
            "Referer": origin.rstrip("/") + "/",
            "Origin": origin.rstrip("/"),
        }

    async def fetch(
        self, url: str, *, headers: dict[str, str] | None = None, degrade: bool = True
    ) -> httpx.Response | None:
        """Return the first 2xx response for ``url``, or None."""
        levels = [headers] if headers is not None else self.header_levels()
        if not degrade:
            levels = levels[:1]

        for level, hdrs in enumerate(levels):
            try:
                resp = await self._client.get(
                    url, headers=hdrs, follow_redirects=True, timeout=self._timeout
                )
            except httpx.HTTPError as exc:
                logger.debug("Fetch failed for %s: %s", url, exc)
                return None

            if resp.is_success:
                if len(resp.content) > self._max_body:
                    logger.debug("Skipping oversized response %s (%d bytes)", url, len(resp.content))
                    return None
                return resp
            logger.debug("HTTP %s for %s (header level %d)", resp.status_code, url, level)
        return None
