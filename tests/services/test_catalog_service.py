"""Tests for instrument catalog parsing and ingestion."""

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from moneycookie.core.exceptions import ExternalAPIError
from moneycookie.models.instrument import Instrument
from moneycookie.repositories.instrument import InstrumentRepository
from moneycookie.services import catalog_service

CATALOG_PAYLOAD = {
    "block1": [
        {"short_code": "005930", "codeName": "Samsung Electronics", "marketEngName": "KOSPI"},
        {"short_code": "035720", "codeName": "Kakao", "marketEngName": "kospi"},
        {"short_code": "293490", "codeName": "Kakao Games", "marketEngName": "KOSDAQ"},
    ]
}


def test_parse_catalog() -> None:
    """Test that rows become catalog items with upper-cased markets."""
    items = catalog_service.parse_catalog(CATALOG_PAYLOAD)

    assert [item.short_code for item in items] == ["005930", "035720", "293490"]
    assert items[0].name == "Samsung Electronics"
    assert items[1].market == "KOSPI"
    assert items[2].market == "KOSDAQ"


def test_parse_catalog_skips_malformed_and_duplicate_rows() -> None:
    """Test that bad rows are dropped and the first duplicate wins."""
    payload = {
        "block1": [
            {"short_code": "005930", "codeName": "Samsung Electronics", "marketEngName": "KOSPI"},
            {"codeName": "No code"},
            {"short_code": "", "codeName": "Blank code"},
            {"short_code": "005930", "codeName": "Samsung Again", "marketEngName": "KOSPI"},
            {"short_code": "000000", "codeName": "No market"},
        ]
    }

    items = catalog_service.parse_catalog(payload)

    assert [item.short_code for item in items] == ["005930", "000000"]
    assert items[0].name == "Samsung Electronics"
    assert items[1].market is None


def test_parse_catalog_without_rows() -> None:
    """Test that a payload without the row array is an upstream failure."""
    with pytest.raises(ExternalAPIError):
        catalog_service.parse_catalog({"error": "maintenance"})


@pytest.mark.integration
async def test_sync_catalog_creates_and_updates(test_db: AsyncSession) -> None:
    """Test upserting listings by short code."""
    test_db.add(Instrument(short_code="005930", name="Samsung Elec", market="KOSPI"))
    await test_db.commit()

    result = await catalog_service.sync_catalog(test_db, CATALOG_PAYLOAD)

    assert result == {"fetched": 3, "created": 2, "updated": 1}
    repo = InstrumentRepository(Instrument, test_db)
    samsung = await repo.get_by_short_code("005930")
    assert samsung.name == "Samsung Electronics"
    assert len(await repo.search()) == 3

    again = await catalog_service.sync_catalog(test_db, CATALOG_PAYLOAD)
    assert again == {"fetched": 3, "created": 0, "updated": 0}


@pytest.mark.integration
async def test_sync_catalog_fetches_when_no_payload(test_db: AsyncSession, mocker) -> None:
    """Test that the feed is downloaded when no payload is given."""
    fetch = mocker.patch(
        "moneycookie.services.catalog_service.fetch_catalog",
        return_value=CATALOG_PAYLOAD,
    )

    result = await catalog_service.sync_catalog(test_db)

    fetch.assert_awaited_once()
    assert result["created"] == 3


async def test_fetch_catalog_posts_form(mocker) -> None:
    """Test the feed request and JSON decoding."""
    captured: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, json=CATALOG_PAYLOAD)

    _patch_transport(mocker, httpx.MockTransport(handler))

    payload = await catalog_service.fetch_catalog()

    assert payload == CATALOG_PAYLOAD
    request = captured["request"]
    assert request.method == "POST"
    assert b"bld=dbms%2Fcomm%2Ffinder%2Ffinder_stkisu" in request.content


async def test_fetch_catalog_http_error(mocker) -> None:
    """Test that an upstream error status becomes ExternalAPIError."""
    _patch_transport(mocker, httpx.MockTransport(lambda request: httpx.Response(502)))

    with pytest.raises(ExternalAPIError):
        await catalog_service.fetch_catalog()


async def test_fetch_catalog_invalid_json(mocker) -> None:
    """Test that a non-JSON body becomes ExternalAPIError."""
    _patch_transport(
        mocker, httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
    )

    with pytest.raises(ExternalAPIError):
        await catalog_service.fetch_catalog()


def _patch_transport(mocker, transport: httpx.MockTransport) -> None:
    real_client = httpx.AsyncClient

    def client_factory(*args, **kwargs) -> httpx.AsyncClient:
        return real_client(*args, transport=transport, **kwargs)

    mocker.patch("moneycookie.services.catalog_service.httpx.AsyncClient", side_effect=client_factory)
