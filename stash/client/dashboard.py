"""Dashboard overview: item counts and the most recent entries of each kind."""

import asyncio
from dataclasses import dataclass, field

from stash.client.aggregator import settle
from stash.client.gateway import GatewayClient
from stash.client.models import LinkRecord, ResumeRecord, SnippetRecord

RECENT_LINKS = 5
RECENT_SNIPPETS = 3
RECENT_RESUMES = 3


@dataclass
class DashboardSummary:
    links_count: int = 0
    snippets_count: int = 0
    resumes_count: int = 0
    recent_links: list[LinkRecord] = field(default_factory=list)
    recent_snippets: list[SnippetRecord] = field(default_factory=list)
    recent_resumes: list[ResumeRecord] = field(default_factory=list)


async def load_dashboard(client: GatewayClient, token: str) -> DashboardSummary:
    """Fetch all three collections at once; a failed one counts as empty."""
    links, snippets, resumes = await asyncio.gather(
        settle("links", client.list_links(token)),
        settle("snippets", client.list_snippets(token)),
        settle("resumes", client.list_resumes(token)),
    )
    return DashboardSummary(
        links_count=len(links),
        snippets_count=len(snippets),
        resumes_count=len(resumes),
        recent_links=links[:RECENT_LINKS],
        recent_snippets=snippets[:RECENT_SNIPPETS],
        recent_resumes=resumes[:RECENT_RESUMES],
    )
