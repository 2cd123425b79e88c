"""
Review Generator

Generates line-anchored review comments for a single diff file using
the completion endpoint.
"""

import logging
from typing import List, Optional

from ..models.pr_diff import DiffFile
from ..models.review import ReviewComment, UnparsedResponse
from ..review.analyzer import DiffAnalyzer
from .client import CompletionClient
from .prompts import PromptBuilder
from .response import parse_review_response


logger = logging.getLogger(__name__)


class ReviewGenerator:
    """
    Generates code reviews using an LLM.

    One completion call per file; no retries. Replies that cannot be
    parsed count as "no issues found" for that file.
    """

    def __init__(
        self,
        completion_client: CompletionClient,
        max_tokens: int = 1000,
        prompt_builder: Optional[PromptBuilder] = None,
        diff_analyzer: Optional[DiffAnalyzer] = None,
    ):
        """
        Initialize review generator.

        Args:
            completion_client: Client for the completion endpoint
            max_tokens: Output token cap per completion
            prompt_builder: Prompt builder (default template if omitted)
            diff_analyzer: Reviewability checks and hunk flattening
        """
        self.completion_client = completion_client
        self.max_tokens = max_tokens
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.diff_analyzer = diff_analyzer or DiffAnalyzer()

    async def review_file(
        self,
        diff_file: DiffFile,
        pr_title: str,
        pr_description: str
    ) -> List[ReviewComment]:
        """
        Generate review comments for one file.

        Args:
            diff_file: File to review
            pr_title: Pull request title
            pr_description: Pull request description

        Returns:
            Comments in the order the model reported them

        Raises:
            CompletionError: when the completion endpoint fails
        """
        if not self.diff_analyzer.is_reviewable(diff_file):
            return []

        code = self.diff_analyzer.flatten(diff_file)
        prompt = self.prompt_builder.build_review_prompt(code, pr_title, pr_description)

        logger.debug(f"Requesting review for {diff_file.path}")
        content = await self.completion_client.complete(prompt, max_tokens=self.max_tokens)

        outcome = parse_review_response(content)
        if isinstance(outcome, UnparsedResponse):
            logger.debug(f"Unparsable review response for {diff_file.path}: {outcome.reason}")
            return []

        # line numbers are passed through as reported by the model
        return [
            ReviewComment(
                file_path=diff_file.path,
                line_number=entry.line_number,
                comment=entry.review_comment,
            )
            for entry in outcome.entries
        ]
