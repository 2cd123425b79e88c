"""
Console Report Formatter

Formats analysis results and GitHub lookups as plain text for the CLI.
"""

import logging
from datetime import datetime
from typing import Dict, List

from ..models.github import BranchInfo, PullRequestInfo, RepositoryInfo
from ..models.review import AnalysisResult


logger = logging.getLogger(__name__)


class ReportFormatter:
    """
    Renders pipeline output for terminal display.

    Every method returns a string; printing is left to the caller.
    """

    def __init__(self, description_limit: int = 200):
        """
        Args:
            description_limit: Characters of PR description shown by `pr:info`
        """
        self.description_limit = description_limit

    def format_analysis_result(self, result: AnalysisResult) -> str:
        """
        Format an AnalysisResult.

        Successful results list counts and an enumerated `[file:line]`
        issue list, followed by any per-file errors. Failed results list
        the error messages.
        """
        if not result.success:
            lines = ["❌ Analysis failed"]
            if result.errors:
                lines.append("Errors:")
                lines.extend(f"  • {error}" for error in result.errors)
            return '\n'.join(lines)

        lines = [
            "",
            "✅ Analysis Complete!",
            f"  Repository: {result.repository}",
            f"  PR Number: #{result.pr_number}",
            f"  Files Analyzed: {result.total_files_analyzed}",
            f"  Issues Found: {result.total_comments}",
        ]

        if result.comments:
            lines.append("")
            lines.append("📌 Issues:")
            for index, comment in enumerate(result.comments, start=1):
                lines.append(f"  {index}. [{comment.location}]")
                lines.append(f"     {comment.comment}")
                lines.append("")

        if result.errors:
            lines.append("⚠️  Files that could not be reviewed:")
            lines.extend(f"  • {error}" for error in result.errors)

        return '\n'.join(lines)

    def format_pull_request(self, pr_info: PullRequestInfo) -> str:
        lines = [
            "",
            "📝 Pull Request Information:",
            f"  Number: #{pr_info.number}",
            f"  Title: {pr_info.title}",
            f"  Author: {pr_info.author}",
            f"  State: {pr_info.state}",
            f"  Created: {self._format_timestamp(pr_info.created_at)}",
            f"  Updated: {self._format_timestamp(pr_info.updated_at)}",
            f"  Additions: {pr_info.additions}",
            f"  Deletions: {pr_info.deletions}",
            f"  Changed Files: {pr_info.changed_files}",
            f"  URL: {pr_info.html_url}",
        ]

        if pr_info.description:
            description = pr_info.description[:self.description_limit]
            if len(pr_info.description) > self.description_limit:
                description += '...'
            lines.append("")
            lines.append("  Description:")
            lines.append(f"    {description}")

        return '\n'.join(lines)

    def format_repository(self, info: RepositoryInfo) -> str:
        return '\n'.join([
            "",
            "📦 Repository Information:",
            f"  Owner: {info.owner}",
            f"  Name: {info.name}",
            f"  Description: {info.description or 'N/A'}",
            f"  URL: {info.url}",
            f"  Stars: ⭐ {info.stars}",
            f"  Language: {info.language or 'N/A'}",
            f"  Private: {'🔒 Yes' if info.private else '🔓 No'}",
            f"  Default Branch: {info.default_branch}",
        ])

    def format_branches(self, branches: List[BranchInfo]) -> str:
        lines = ["", f"📚 Branches ({len(branches)}):"]
        for branch in branches:
            protection = ' 🔒 (protected)' if branch.protected else ''
            lines.append(f"  • {branch.name}{protection}")
        return '\n'.join(lines)

    def format_credentials_summary(self, summary: Dict[str, object]) -> str:
        def status(key: str) -> str:
            return '✅ Set' if summary.get(key) else '❌ Not set'

        return '\n'.join([
            "",
            "📋 Current Configuration:",
            f"  GitHub Token: {status('github_token')}",
            f"  OpenRouter API Key: {status('openrouter_api_key')}",
            f"  OpenAI API Key: {status('openai_api_key')}",
            f"  Last Updated: {summary.get('last_updated') or 'Never'}",
        ])

    @staticmethod
    def _format_timestamp(value: str) -> str:
        if not value:
            return 'N/A'
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00')).strftime('%Y-%m-%d %H:%M:%S')
        except ValueError:
            logger.debug(f"Unrecognized timestamp: {value}")
            return value
