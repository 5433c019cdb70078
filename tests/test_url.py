import pytest

from qlm.coordinator import QuickLoadMore
from qlm.fetch import build_url

SERVICE_URL = "/api/v1/products.json"


@pytest.mark.parametrize(
    "parameters, expected",
    [
        ({}, SERVICE_URL + "?"),
        ({"start": 0}, SERVICE_URL + "?start=0"),
        ({"start": 0, "count": 25}, SERVICE_URL + "?start=0&count=25"),
        (
            {"start": 0, "offset": 25, "tags": ["cool", "awesome", "rockin"]},
            SERVICE_URL + "?start=0&offset=25&tags=cool&tags=awesome&tags=rockin",
        ),
        ({"tags": []}, SERVICE_URL + "?"),
        ({"available": True, "sale": False}, SERVICE_URL + "?available=true&sale=false"),
    ],
    ids=["empty", "single", "two", "list_repeats_key", "empty_list", "booleans"],
)
def test_build_url(parameters: dict, expected: str) -> None:
    assert build_url(SERVICE_URL, parameters) == expected


def test_build_url_concatenates_mappings_in_order() -> None:
    url = build_url(SERVICE_URL, {"q": "oil", "tags": ["a", "b"]}, {"start": 10, "count": 5})

    assert url == SERVICE_URL + "?q=oil&tags=a&tags=b&start=10&count=5"


def test_build_url_without_mappings() -> None:
    assert build_url(SERVICE_URL) == SERVICE_URL + "?"


@pytest.mark.asyncio
async def test_loader_exposes_url_builder() -> None:
    async with QuickLoadMore(SERVICE_URL) as qlm:
        assert qlm.build_url({}) == SERVICE_URL + "?"
        assert qlm.build_url({"start": 0, "count": 25}) == SERVICE_URL + "?start=0&count=25"
