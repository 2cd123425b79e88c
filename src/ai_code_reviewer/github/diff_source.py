"""
Diff Source

Obtains the unified diff of a pull request, assembling it from per-file
patches when GitHub refuses to render the full diff in one response.
"""

import asyncio
import logging
from typing import Dict, List

from .client import GitHubClient, GitHubAPIError


logger = logging.getLogger(__name__)


def synthesize_file_diff(file_data: Dict) -> str:
    """Minimal git diff section for one entry of the PR files listing."""
    filename = file_data['filename']
    return f"diff --git a/{filename} b/{filename}\n{file_data['patch']}\n"


class DiffSource:
    """Fetches PR diffs with a large-diff fallback."""

    def __init__(
        self,
        client: GitHubClient,
        batch_size: int = 10,
        batch_delay: float = 1.0,
        page_size: int = 100,
    ):
        """
        Args:
            client: GitHub API client
            batch_size: Files assembled per batch in the fallback path
            batch_delay: Pause in seconds between fallback batches
            page_size: Page size used when listing PR files
        """
        self.client = client
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.page_size = page_size

    async def fetch_diff(self, owner: str, repo: str, pr_number: int) -> str:
        """
        Fetch the unified diff for a pull request.

        Returns:
            Diff text, possibly empty

        Raises:
            GitHubAPIError: for any failure other than an oversized diff
        """
        try:
            return await asyncio.to_thread(self.client.get_pull_request_diff, owner, repo, pr_number)
        except GitHubAPIError as e:
            if not e.is_not_acceptable:
                raise
            logger.warning("Diff too large, fetching files individually...")

        return await self.fetch_individual_file_diffs(owner, repo, pr_number)

    async def fetch_individual_file_diffs(self, owner: str, repo: str, pr_number: int) -> str:
        """Concatenate per-file patches in listing order, pausing between batches."""
        files: List[Dict] = await asyncio.to_thread(
            self.client.get_pull_request_files, owner, repo, pr_number, self.page_size
        )

        sections = []
        for start in range(0, len(files), self.batch_size):
            for file_data in files[start:start + self.batch_size]:
                # binary files carry no patch
                if file_data.get('patch'):
                    sections.append(synthesize_file_diff(file_data))

            if start + self.batch_size < len(files):
                await asyncio.sleep(self.batch_delay)

        logger.info(f"Assembled diff from {len(sections)} of {len(files)} files")
        return ''.join(sections)
