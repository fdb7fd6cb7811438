import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .config import USER_AGENT

logger = logging.getLogger(__name__)


@dataclass
class ProbeResult:
    status_code: Optional[int] = None
    body: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


def make_client(config, transport=None):
    # ignore broken TLS, self-signed hosts count too
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.request_timeout),
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
        verify=False,
        transport=transport,
    )


async def _fetch(client, url, read_body):
    async with client.stream("GET", url) as r:
        if not read_body:
            return ProbeResult(status_code=r.status_code)
        try:
            body = await r.aread()
        except httpx.HTTPError as e:
            return ProbeResult(status_code=r.status_code, error=f"could not read response body: {e!r}")
        return ProbeResult(status_code=r.status_code, body=body)


async def probe(client, url, timeout, read_body=False):
    """Single GET against url. Never raises for network trouble.

    The timeout covers the whole exchange including the body read, on top
    of the per-phase timeouts configured on the client.
    """
    try:
        return await asyncio.wait_for(_fetch(client, url, read_body), timeout)
    except asyncio.TimeoutError:
        logger.debug("probe of %s exceeded %ss", url, timeout)
        return ProbeResult(error=f"timed out after {timeout}s")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug("probe of %s failed: %r", url, e)
        return ProbeResult(error=repr(e))
