"""
GitHub Data Models

GitHub API 응답을 감싸는 데이터 모델들
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class RepositoryInfo:
    """저장소 정보"""
    owner: str
    name: str
    description: Optional[str]
    url: str
    stars: int
    language: Optional[str]
    private: bool
    default_branch: str

    @classmethod
    def from_api(cls, data: Dict) -> "RepositoryInfo":
        return cls(
            owner=data['owner']['login'],
            name=data['name'],
            description=data.get('description') or None,
            url=data['html_url'],
            stars=data.get('stargazers_count', 0),
            language=data.get('language') or None,
            private=data.get('private', False),
            default_branch=data.get('default_branch', 'main'),
        )


@dataclass(frozen=True)
class BranchInfo:
    """브랜치 정보"""
    name: str
    protected: bool

    @classmethod
    def from_api(cls, data: Dict) -> "BranchInfo":
        return cls(name=data['name'], protected=bool(data.get('protected', False)))


@dataclass(frozen=True)
class PullRequestInfo:
    """Pull Request 메타데이터"""
    number: int
    title: str
    description: str
    state: str
    created_at: str
    updated_at: str
    author: str
    additions: int
    deletions: int
    changed_files: int
    html_url: str

    @classmethod
    def from_api(cls, data: Dict) -> "PullRequestInfo":
        user = data.get('user') or {}
        return cls(
            number=data['number'],
            title=data.get('title') or '',
            description=data.get('body') or '',
            state=data.get('state', ''),
            created_at=data.get('created_at', ''),
            updated_at=data.get('updated_at', ''),
            author=user.get('login') or 'Unknown',
            additions=data.get('additions', 0),
            deletions=data.get('deletions', 0),
            changed_files=data.get('changed_files', 0),
            html_url=data.get('html_url', ''),
        )
