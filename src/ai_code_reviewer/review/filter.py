"""
File Filter

Removes dependency, build, lock and minified files from a diff
before they reach the model.
"""

import logging
from typing import Iterable, List, Sequence

from wcmatch import glob

from ..models.pr_diff import DiffFile


logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATTERNS = (
    '**/node_modules/**',
    '**/.git/**',
    '**/dist/**',
    '**/build/**',
    '**/*.lock',
    '**/*.min.js',
    '**/coverage/**',
)


class FileFilter:
    """
    Glob-based exclusion filter.

    `**` spans any number of directories and `*` stays within one path
    segment. A pattern must match the whole path, so a directory named
    `a.lock` does not exclude the files below it.
    """

    def __init__(self, patterns: Sequence[str] = DEFAULT_EXCLUDE_PATTERNS):
        self.patterns = tuple(patterns)

    def is_excluded(self, path: str) -> bool:
        """True if any exclusion pattern matches the path."""
        return glob.globmatch(path, self.patterns, flags=glob.GLOBSTAR)

    def filter_files(self, files: Iterable[DiffFile]) -> List[DiffFile]:
        """Keep files whose path is not excluded, preserving diff order."""
        kept = []
        for diff_file in files:
            if self.is_excluded(diff_file.path):
                logger.debug(f"Excluding {diff_file.path}")
                continue
            kept.append(diff_file)
        return kept
