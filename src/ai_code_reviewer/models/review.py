"""
Review Data Models

코드 리뷰 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ReviewComment:
    """개별 리뷰 코멘트"""
    file_path: str
    line_number: int
    comment: str

    @property
    def location(self) -> str:
        """`file:line` 형식의 위치 문자열"""
        return f"{self.file_path}:{self.line_number}"

    def to_dict(self) -> Dict[str, Any]:
        return {'file': self.file_path, 'line': self.line_number, 'comment': self.comment}


class ReviewEntry(BaseModel):
    """Single entry of the model's `reviews` list."""
    model_config = ConfigDict(populate_by_name=True)

    line_number: int = Field(alias="lineNumber")
    review_comment: str = Field(alias="reviewComment")


class ReviewPayload(BaseModel):
    """
    Structured completion response: `{"reviews": [...]}`.

    Only the envelope is checked here; entries are validated one by one
    so a malformed entry does not discard its well-formed siblings.
    """
    reviews: List[Any]


@dataclass(frozen=True)
class ParsedReviews:
    """The model answered with a review list (possibly empty).

    `skipped` counts entries dropped for lacking a line number or comment.
    """
    entries: Tuple[ReviewEntry, ...] = ()
    skipped: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class UnparsedResponse:
    """The model answered with something that is not a review list."""
    raw: str
    reason: str


ReviewParseOutcome = Union[ParsedReviews, UnparsedResponse]


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of reviewing one pull request.

    Comments are ordered by file processing order, then by the order the
    model reported them. `success` is False only for pipeline-level failures;
    per-file failures appear in `errors` of a successful result.
    """
    success: bool
    pr_number: int
    repository: str
    total_files_analyzed: int = 0
    comments: Tuple[ReviewComment, ...] = ()
    errors: Tuple[str, ...] = field(default=())

    @property
    def total_comments(self) -> int:
        return len(self.comments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'prNumber': self.pr_number,
            'repository': self.repository,
            'totalFilesAnalyzed': self.total_files_analyzed,
            'totalComments': self.total_comments,
            'comments': [c.to_dict() for c in self.comments],
            'errors': list(self.errors),
        }
