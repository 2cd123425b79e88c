"""
Data Models

AI Code Reviewer 시스템의 핵심 데이터 모델들
"""

from .pr_diff import ChangeKind, Change, Hunk, DiffFile
from .review import (
    ReviewComment,
    ReviewEntry,
    ReviewPayload,
    ParsedReviews,
    UnparsedResponse,
    ReviewParseOutcome,
    AnalysisResult,
)
from .github import RepositoryInfo, BranchInfo, PullRequestInfo

__all__ = [
    "ChangeKind",
    "Change",
    "Hunk",
    "DiffFile",
    "ReviewComment",
    "ReviewEntry",
    "ReviewPayload",
    "ParsedReviews",
    "UnparsedResponse",
    "ReviewParseOutcome",
    "AnalysisResult",
    "RepositoryInfo",
    "BranchInfo",
    "PullRequestInfo",
]
