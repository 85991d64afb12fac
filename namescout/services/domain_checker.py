"""
NameScout - Domain Availability Checker
Resolves <name>.<tld> through a DNS-over-HTTPS JSON resolver.
NXDOMAIN is read as "available"; anything that resolves is "taken".
"""
import asyncio
import logging
import re
from typing import Optional

import httpx

from namescout.schemas.domains import DomainResult

logger = logging.getLogger("namescout.domains")

# ── Popular suffixes with indicative first-year prices (USD) ──
POPULAR_TLDS: dict[str, float] = {
    "com": 12.99,
    "net": 14.99,
    "org": 13.99,
    "io": 39.99,
    "co": 29.99,
    "ai": 89.99,
    "app": 14.99,
    "dev": 12.99,
    "xyz": 1.99,
    "online": 3.99,
}

DNS_STATUS_NXDOMAIN = 3

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9-]")


def clean_domain_name(name: str) -> str:
    """Lower-case and drop everything that cannot appear in a label."""
    return _INVALID_NAME_CHARS.sub("", name.lower())


class DomainChecker:
    """Checks domain availability; network failures yield ``available=None``."""

    def __init__(
        self,
        resolver_url: str = "https://dns.google/resolve",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.resolver_url = resolver_url
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _resolve(self, client: httpx.AsyncClient, name: str, tld: str) -> Optional[bool]:
        try:
            response = await client.get(
                self.resolver_url,
                params={"name": f"{name}.{tld}", "type": "A"},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("DNS lookup for %s.%s failed: %s", name, tld, exc)
            return None

        if not isinstance(data, dict) or "Status" not in data:
            logger.warning("Unexpected resolver payload for %s.%s", name, tld)
            return None
        return data["Status"] == DNS_STATUS_NXDOMAIN

    async def check(self, name: str, tld: str) -> DomainResult:
        """Availability of a single ``name.tld``."""
        async with self._client() as client:
            available = await self._resolve(client, name, tld)
        return DomainResult(
            domain=f"{name}.{tld}",
            tld=tld,
            available=available,
            price=POPULAR_TLDS.get(tld),
        )

    async def check_popular(self, name: str) -> list[DomainResult]:
        """Availability across every suffix in :data:`POPULAR_TLDS`, checked concurrently."""
        async with self._client() as client:
            outcomes = await asyncio.gather(
                *(self._resolve(client, name, tld) for tld in POPULAR_TLDS)
            )

        return [
            DomainResult(domain=f"{name}.{tld}", tld=tld, available=available, price=price)
            for (tld, price), available in zip(POPULAR_TLDS.items(), outcomes)
        ]
