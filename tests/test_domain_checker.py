"""Tests for the DNS-over-HTTPS domain checker."""

import httpx
import pytest

from namescout.services.domain_checker import POPULAR_TLDS, DomainChecker, clean_domain_name


def _resolver(statuses):
    """MockTransport answering with a DNS Status per queried name."""

    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.params["name"]
        status = statuses.get(name)
        if status is None:
            raise httpx.ConnectTimeout("timed out", request=request)
        if status == "garbage":
            return httpx.Response(200, text="<html>oops</html>")
        return httpx.Response(200, json={"Status": status})

    return httpx.MockTransport(handler)


def test_clean_domain_name():
    assert clean_domain_name("My Brand_Name!") == "mybrandname"
    assert clean_domain_name("e-Shop2") == "e-shop2"


@pytest.mark.asyncio
async def test_nxdomain_is_available():
    checker = DomainChecker(transport=_resolver({"acme.io": 3}))

    result = await checker.check("acme", "io")

    assert result.domain == "acme.io"
    assert result.available is True
    assert result.price == 39.99


@pytest.mark.asyncio
async def test_resolving_name_is_taken_and_unlisted_tld_has_no_price():
    checker = DomainChecker(transport=_resolver({"acme.store": 0}))

    result = await checker.check("acme", "store")

    assert result.available is False
    assert result.price is None


@pytest.mark.asyncio
async def test_failures_are_unknown():
    checker = DomainChecker(transport=_resolver({"acme.dev": "garbage"}))

    assert (await checker.check("acme", "dev")).available is None
    assert (await checker.check("acme", "app")).available is None


@pytest.mark.asyncio
async def test_check_popular_covers_every_tld_in_order():
    statuses = {f"acme.{tld}": 3 for tld in POPULAR_TLDS}
    statuses["acme.com"] = 0
    checker = DomainChecker(transport=_resolver(statuses))

    results = await checker.check_popular("acme")

    assert [r.tld for r in results] == list(POPULAR_TLDS)
    assert results[0].available is False
    assert all(r.available for r in results[1:])
