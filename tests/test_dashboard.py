"""Dashboard summary."""

from stash.client.dashboard import load_dashboard
from stash.client.gateway import GatewayClient
from tests.conftest import CLIENT_TOKEN, FakeGateway, link, resume, snippet


async def test_counts_and_recent_items(fake_gateway: FakeGateway, gateway_client: GatewayClient) -> None:
    fake_gateway.links = [link(f"l{i}", f"Link {i}", "https://example.com") for i in range(7)]
    fake_gateway.snippets = [snippet(f"s{i}", f"Snippet {i}", "x") for i in range(4)]
    fake_gateway.resumes = [resume("r1", "General")]

    summary = await load_dashboard(gateway_client, CLIENT_TOKEN)

    assert (summary.links_count, summary.snippets_count, summary.resumes_count) == (7, 4, 1)
    assert [item.id for item in summary.recent_links] == [f"l{i}" for i in range(5)]
    assert [item.id for item in summary.recent_snippets] == ["s0", "s1", "s2"]
    assert [item.id for item in summary.recent_resumes] == ["r1"]


async def test_failed_collection_counts_as_empty(
    fake_gateway: FakeGateway, gateway_client: GatewayClient
) -> None:
    fake_gateway.failing.add("/resumes")
    fake_gateway.links = [link("l1", "Link", "https://example.com")]

    summary = await load_dashboard(gateway_client, CLIENT_TOKEN)

    assert summary.links_count == 1
    assert summary.resumes_count == 0
    assert summary.recent_resumes == []
