"""
Main AI Reviewer API

Main interface that orchestrates the complete review process
from PR diff collection to the aggregated analysis result.
"""

import logging
import asyncio
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import AppConfig
from .github.client import GitHubClient
from .github.diff_source import DiffSource
from .github.parser import DiffParser
from .llm.client import CompletionClient
from .llm.generator import ReviewGenerator
from .models.github import PullRequestInfo
from .models.pr_diff import DiffFile
from .models.review import AnalysisResult, ReviewComment
from .review.filter import FileFilter


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewRequest:
    """Request for PR review generation."""
    owner: str
    repository: str
    pr_number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repository}"


class AIReviewerAPI:
    """
    Main AI Reviewer API interface.

    Orchestrates the complete review process:
    1. Fetch PR metadata and the unified diff
    2. Parse the diff and drop excluded files
    3. Generate LLM reviews file by file
    4. Aggregate comments and per-file errors
    """

    def __init__(
        self,
        config: AppConfig,
        github_client: Optional[GitHubClient] = None,
        completion_client: Optional[CompletionClient] = None,
    ):
        """
        Initialize AI Reviewer API.

        Args:
            config: Validated application configuration
            github_client: GitHub client (built from config if omitted)
            completion_client: Completion client (built from config if omitted)
        """
        self.config = config
        self._owned_github_client = github_client is None
        self._owned_completion_client = completion_client is None

        logger.info("Initializing AI Reviewer API components...")

        # GitHub integration
        self.github_client = github_client or GitHubClient(
            config.github.token,
            base_url=config.github.api_base_url,
            timeout=config.github.timeout_seconds,
        )
        self.diff_source = DiffSource(
            self.github_client,
            batch_size=config.review.fallback_batch_size,
            batch_delay=config.review.fallback_batch_delay,
            page_size=config.review.files_page_size,
        )
        self.diff_parser = DiffParser()
        self.file_filter = FileFilter()

        # LLM
        self.review_generator = ReviewGenerator(
            completion_client or CompletionClient.from_config(config.llm),
            max_tokens=config.llm.max_tokens,
        )

    async def __aenter__(self) -> "AIReviewerAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the clients this instance created; injected clients are left open."""
        if self._owned_completion_client:
            await self.review_generator.completion_client.aclose()
        if self._owned_github_client:
            self.github_client.close()

    async def analyze_pr(self, request: ReviewRequest) -> AnalysisResult:
        """
        Review every non-excluded file of a pull request.

        Args:
            request: ReviewRequest with PR information

        Returns:
            AnalysisResult; never raises for pipeline failures
        """
        total_files = 0
        comments: List[ReviewComment] = []
        errors: List[str] = []

        try:
            # Step 1: PR metadata
            pr_data = await asyncio.to_thread(
                self.github_client.get_pull_request,
                request.owner, request.repository, request.pr_number
            )
            pr_info = PullRequestInfo.from_api(pr_data)
            logger.info(f"📋 Analyzing PR #{request.pr_number}: {pr_info.title}")

            # Step 2: diff
            diff = await self.diff_source.fetch_diff(
                request.owner, request.repository, request.pr_number
            )
            if not diff or not diff.strip():
                logger.info("Empty diff, nothing to review")
                return self._build_result(request, True, total_files, comments, errors)

            # Step 3: parse and filter
            files = self.file_filter.filter_files(self.diff_parser.parse(diff))
            total_files = len(files)
            logger.info(f"📁 Found {total_files} files to analyze")

            # Step 4: per-file review
            for file_comments, error in await self._review_files(files, pr_info):
                comments.extend(file_comments)
                if error:
                    errors.append(error)

            return self._build_result(request, True, total_files, comments, errors)

        except Exception as e:
            logger.error(f"❌ Analysis failed: {e}")
            errors.append(str(e))
            return self._build_result(request, False, total_files, comments, errors)

    async def _review_files(
        self,
        files: List[DiffFile],
        pr_info: PullRequestInfo
    ) -> List[Tuple[List[ReviewComment], Optional[str]]]:
        """Review files under the concurrency cap; results keep file order."""
        semaphore = asyncio.Semaphore(self.config.review.max_concurrency)

        async def review_one(diff_file: DiffFile) -> Tuple[List[ReviewComment], Optional[str]]:
            async with semaphore:
                try:
                    file_comments = await self.review_generator.review_file(
                        diff_file, pr_info.title, pr_info.description
                    )
                except Exception as e:
                    error_msg = f"Error analyzing {diff_file.path}: {e}"
                    logger.error(f"❌ {error_msg}")
                    return [], error_msg
            return file_comments, None

        return await asyncio.gather(*(review_one(f) for f in files))

    @staticmethod
    def _build_result(
        request: ReviewRequest,
        success: bool,
        total_files: int,
        comments: List[ReviewComment],
        errors: List[str]
    ) -> AnalysisResult:
        return AnalysisResult(
            success=success,
            pr_number=request.pr_number,
            repository=request.full_name,
            total_files_analyzed=total_files,
            comments=tuple(comments),
            errors=tuple(errors),
        )
