from __future__ import annotations

import logging

import httpx

from receitas.common.config import Settings
from receitas.common.deadline import Deadline
from receitas.common.errors import (
    InvalidInput,
    UpstreamBadContentType,
    UpstreamError,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from receitas.common.url import origin_of, validate_source_url

log = logging.getLogger(__name__)

ACCEPT = "image/avif,image/webp,image/*;q=0.8,*/*;q=0.5"


def is_image_content_type(content_type: str | None) -> bool:
    return bool(content_type) and content_type.strip().lower().startswith("image/")


class ImageFetcher:
    def __init__(self, client: httpx.Client, settings: Settings):
        self.client = client
        self.settings = settings

    def headers_for(self, url: str) -> dict[str, str]:
        # some CDNs refuse hotlinking without a browser-ish header set
        return {
            "User-Agent": self.settings.image_user_agent,
            "Accept": ACCEPT,
            "Referer": origin_of(url),
        }

    def fetch(self, url: str, deadline: Deadline) -> bytes:
        """Download one image; the whole exchange, redirects included, shares ``deadline``."""
        return deadline.run(lambda: self._fetch(url, deadline))

    def _fetch(self, url: str, deadline: Deadline) -> bytes:
        headers = self.headers_for(url)
        target = url
        try:
            for _ in range(self.settings.image_max_redirects + 1):
                deadline.check()
                with self.client.stream(
                    "GET",
                    target,
                    headers=headers,
                    timeout=httpx.Timeout(deadline.remaining()),
                    follow_redirects=False,
                ) as resp:
                    deadline.check()
                    if resp.is_redirect:
                        target = self._redirect_target(resp)
                        continue
                    self._check_response(resp)
                    return self._read_body(resp, deadline)
        except httpx.TimeoutException:
            raise UpstreamTimeout("Upstream timeout") from None
        except httpx.TransportError as e:
            log.warning("image_upstream_unreachable", extra={"url": url, "error": str(e)})
            raise UpstreamUnavailable("Upstream unavailable") from e

        raise UpstreamError("Upstream redirected too many times")

    def _redirect_target(self, resp: httpx.Response) -> str:
        location = resp.headers.get("location", "")
        try:
            return validate_source_url(str(resp.url.join(location)))
        except InvalidInput:
            raise UpstreamError(f"Upstream error {resp.status_code}", upstream_status=resp.status_code) from None

    def _check_response(self, resp: httpx.Response) -> None:
        if not resp.is_success:
            raise UpstreamError(f"Upstream error {resp.status_code}", upstream_status=resp.status_code)
        if not is_image_content_type(resp.headers.get("content-type")):
            raise UpstreamBadContentType("Upstream returned non-image content-type", upstream_status=resp.status_code)

    def _read_body(self, resp: httpx.Response, deadline: Deadline) -> bytes:
        buf = bytearray()
        for chunk in resp.iter_bytes():
            # leaving the stream's with-block closes the connection mid-body
            deadline.check()
            buf.extend(chunk)
            if len(buf) > self.settings.max_image_bytes:
                raise UpstreamError("Upstream image too large", upstream_status=resp.status_code)
        deadline.check()
        return bytes(buf)
