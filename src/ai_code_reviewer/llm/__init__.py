"""
LLM Review Engine

This module provides prompt construction, the completion client,
response recovery and per-file review generation.
"""

from .prompts import PromptBuilder
from .client import CompletionClient, CompletionError
from .response import parse_review_response
from .generator import ReviewGenerator

__all__ = [
    'PromptBuilder',
    'CompletionClient',
    'CompletionError',
    'parse_review_response',
    'ReviewGenerator',
]
