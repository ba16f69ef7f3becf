import math

import pytest

from nps_mcp.nps_api.client import PageUnavailableError
from nps_mcp.nps_api.paginator import build_page_params, fetch_all_pages, iter_pages


def test_build_page_params_omits_unused_filters():
    assert build_page_params(0, 50) == {"start": 0, "limit": 50}
    assert build_page_params(50, 50, parkCode="yose", stateCode=None) == {
        "start": 50,
        "limit": 50,
        "parkCode": "yose",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("total", [1, 30, 49, 51, 99, 120, 474])
async def test_fetch_count_when_total_is_not_a_multiple(stub_client_factory, total):
    client = stub_client_factory(total)
    records = await fetch_all_pages(client, "parks")
    assert len(records) == total
    assert len(client.calls) == math.ceil(total / 50)


@pytest.mark.asyncio
@pytest.mark.parametrize("total", [50, 100, 500])
async def test_exact_multiple_requests_one_trailing_empty_page(stub_client_factory, total):
    client = stub_client_factory(total)
    records = await fetch_all_pages(client, "parks")
    assert len(records) == total
    assert len(client.calls) == total // 50 + 1
    assert client.calls[-1]["start"] == total


@pytest.mark.asyncio
async def test_zero_total_issues_single_request(stub_client_factory):
    client = stub_client_factory(0)
    assert await fetch_all_pages(client, "parks") == []
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_offsets_ascend_and_order_is_preserved(stub_client_factory):
    client = stub_client_factory(120, total_as_str=True)
    records = await fetch_all_pages(client, "parks", stateCode="CA")
    assert [call["start"] for call in client.calls] == [0, 50, 100]
    assert all(call == {"endpoint": "parks", "start": call["start"], "limit": 50, "stateCode": "CA"} for call in client.calls)
    assert [record["parkCode"] for record in records] == [f"p{i:03d}" for i in range(120)]


@pytest.mark.asyncio
async def test_page_size_override(stub_client_factory):
    client = stub_client_factory(25)
    await fetch_all_pages(client, "parks", page_size=10)
    assert [call["limit"] for call in client.calls] == [10, 10, 10]


@pytest.mark.asyncio
async def test_missing_page_aborts_and_discards_accumulated(stub_client_factory):
    client = stub_client_factory(120, fail_at=100)
    with pytest.raises(PageUnavailableError):
        await fetch_all_pages(client, "parks")
    assert len(client.calls) == 3


@pytest.mark.asyncio
async def test_iter_pages_is_lazy(stub_client_factory):
    client = stub_client_factory(120)
    pages = iter_pages(client, "parks")
    first = await pages.__anext__()
    assert len(first) == 50
    assert len(client.calls) == 1
    await pages.aclose()


@pytest.mark.asyncio
async def test_page_without_total_faults():
    class NoTotalClient:
        config = None

        async def fetch_data(self, endpoint, params=None):
            return {"data": []}

    with pytest.raises(KeyError):
        await fetch_all_pages(NoTotalClient(), "parks", page_size=50)
