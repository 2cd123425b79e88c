"""
Review Preparation

This module provides file exclusion filtering and diff flattening
for LLM review generation.
"""

from .analyzer import DiffAnalyzer
from .filter import FileFilter, DEFAULT_EXCLUDE_PATTERNS

__all__ = ['DiffAnalyzer', 'FileFilter', 'DEFAULT_EXCLUDE_PATTERNS']
