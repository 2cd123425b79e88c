"""
PR Diff Data Models

Pull Request diff 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ChangeKind(Enum):
    """Kind of a single diff line."""
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"

    @property
    def marker(self) -> str:
        """One-character unified diff marker."""
        return _MARKERS[self]


_MARKERS = {
    ChangeKind.ADDED: "+",
    ChangeKind.REMOVED: "-",
    ChangeKind.CONTEXT: " ",
}


@dataclass(frozen=True)
class Change:
    """hunk 안의 개별 라인"""
    kind: ChangeKind
    line_number: Optional[int]
    text: str

    @property
    def marked_text(self) -> str:
        return f"{self.kind.marker}{self.text}"


@dataclass
class Hunk:
    """PR diff의 개별 청크"""
    changes: List[Change] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.changes)

    @property
    def added_lines(self) -> List[Change]:
        return [c for c in self.changes if c.kind is ChangeKind.ADDED]

    @property
    def removed_lines(self) -> List[Change]:
        return [c for c in self.changes if c.kind is ChangeKind.REMOVED]


@dataclass
class DiffFile:
    """파일 변경사항"""
    path: str
    hunks: List[Hunk] = field(default_factory=list)
    is_deleted: bool = False
    is_binary: bool = False

    def __post_init__(self):
        """데이터 검증"""
        if not self.path:
            raise ValueError("DiffFile path cannot be empty")

    @property
    def has_hunks(self) -> bool:
        return len(self.hunks) > 0

    @property
    def additions(self) -> int:
        return sum(len(h.added_lines) for h in self.hunks)

    @property
    def deletions(self) -> int:
        return sum(len(h.removed_lines) for h in self.hunks)
