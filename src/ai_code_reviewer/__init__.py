"""
AI Code Reviewer

GitHub Pull Request diff를 파일 단위로 LLM에 보내 리뷰 코멘트를 생성하는 도구
"""

__version__ = "1.0.0"

from .api import AIReviewerAPI, ReviewRequest

__all__ = ["AIReviewerAPI", "ReviewRequest", "__version__"]
