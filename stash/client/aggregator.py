"""
Unified search across links, snippets and resumes.

One query fans out to three gateway calls at once. Each call is settled on
its own: a failing group becomes an empty list and never takes the other two
down with it. Results are merged in a fixed order (links, snippets, resumes),
each group capped and kept in server order.
"""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import TypeVar

from stash.client.gateway import GatewayClient, GatewayError
from stash.client.models import LinkRecord, ResumeRecord, SearchResult, SnippetRecord
from stash.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def settle(group: str, call: Awaitable[list[T]]) -> list[T]:
    """Await one group's fetch, turning any gateway failure into no results."""
    try:
        return await call
    except GatewayError as e:
        logger.warning(f"Search group '{group}' degraded to empty: {e}")
        return []


def link_matches(link: LinkRecord, query: str) -> bool:
    needle = query.lower()
    return needle in link.label.lower() or needle in link.url.lower()


def resume_matches(resume: ResumeRecord, query: str) -> bool:
    needle = query.lower()
    if needle in resume.label.lower():
        return True
    return bool(resume.role_type) and needle in resume.role_type.lower()


class SearchAggregator:
    """Runs one unified search and returns the merged result list."""

    def __init__(self, client: GatewayClient, group_limit: int | None = None):
        self.client = client
        self.group_limit = group_limit or settings.search_group_limit

    async def search(self, query: str, token: str) -> list[SearchResult]:
        links, snippets, resumes = await asyncio.gather(
            settle("links", self.client.list_links(token)),
            settle("snippets", self.client.list_snippets(token, search=query)),
            settle("resumes", self.client.list_resumes(token)),
        )
        return self.merge(query, links, snippets, resumes)

    def merge(
        self,
        query: str,
        links: Sequence[LinkRecord],
        snippets: Sequence[SnippetRecord],
        resumes: Sequence[ResumeRecord],
    ) -> list[SearchResult]:
        """Filter, cap and concatenate the three groups.

        Snippets arrive already filtered by the server.
        """
        limit = self.group_limit
        matched_links = [link for link in links if link_matches(link, query)][:limit]
        matched_resumes = [r for r in resumes if resume_matches(r, query)][:limit]

        results = [SearchResult.from_link(link) for link in matched_links]
        results.extend(SearchResult.from_snippet(s) for s in snippets[:limit])
        results.extend(SearchResult.from_resume(r) for r in matched_resumes)
        return results
