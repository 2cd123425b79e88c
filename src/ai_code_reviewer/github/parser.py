"""
PR Diff Parser

Parses unified diff text into the DiffFile/Hunk/Change model and
resolves repository identifiers given on the command line.
"""

import re
import logging
from typing import List, Optional, Tuple

from unidiff import PatchSet, PatchedFile
from unidiff.errors import UnidiffParseError

from ..models.pr_diff import Change, ChangeKind, DiffFile, Hunk


logger = logging.getLogger(__name__)

DEV_NULL = '/dev/null'


class DiffParseError(ValueError):
    """Unified diff text could not be parsed."""


class InvalidRepositoryError(ValueError):
    """Repository identifier is not `owner/repo` or a GitHub URL."""


def parse_repository_url(repo_url: str) -> Tuple[str, str]:
    """
    Split a repository identifier into owner and name.

    Accepts `owner/repo`, `https://github.com/owner/repo` and either form
    with a trailing `.git`.

    Raises:
        InvalidRepositoryError: if owner or name cannot be determined
    """
    clean = re.sub(r'\.git$', '', (repo_url or '').strip()).rstrip('/')

    if 'github.com' in clean:
        parts = clean.split('/')
        if len(parts) >= 3:
            owner, repo = parts[-2], parts[-1]
            if owner and repo and 'github.com' not in owner:
                return owner, repo
    else:
        parts = clean.split('/')
        if len(parts) == 2 and all(parts):
            return parts[0], parts[1]

    raise InvalidRepositoryError(f"Invalid repository URL format: {repo_url}")


class DiffParser:
    """
    Parser for unified diff text.

    Delegates the diff grammar to unidiff and converts its patch objects
    into DiffFile objects in diff order.
    """

    def parse(self, diff_text: str) -> List[DiffFile]:
        """
        Parse unified diff text.

        Args:
            diff_text: Raw unified diff

        Returns:
            DiffFile objects in the order they appear in the diff

        Raises:
            DiffParseError: when the text is not a valid unified diff
        """
        try:
            patch_set = PatchSet(diff_text)
        except UnidiffParseError as e:
            raise DiffParseError(f"Failed to parse diff: {e}") from e

        files = [self._convert_file(patched_file) for patched_file in patch_set]
        logger.debug(f"Parsed {len(files)} files from diff")
        return files

    def _convert_file(self, patched_file: PatchedFile) -> DiffFile:
        hunks = []
        for unidiff_hunk in patched_file:
            changes = []
            for line in unidiff_hunk:
                change = self._convert_line(line)
                if change is not None:
                    changes.append(change)
            hunks.append(Hunk(changes=changes))

        return DiffFile(
            path=self._resolve_path(patched_file),
            hunks=hunks,
            is_deleted=patched_file.is_removed_file,
            is_binary=patched_file.is_binary_file,
        )

    @staticmethod
    def _convert_line(line) -> Optional[Change]:
        if line.is_added:
            return Change(ChangeKind.ADDED, line.target_line_no, line.value)
        if line.is_removed:
            return Change(ChangeKind.REMOVED, line.source_line_no, line.value)
        if line.is_context:
            return Change(ChangeKind.CONTEXT, line.target_line_no, line.value)
        # "\ No newline at end of file" markers
        return None

    @staticmethod
    def _resolve_path(patched_file: PatchedFile) -> str:
        """Post-change path, or the pre-change path for deleted files."""
        target = patched_file.target_file or ''
        source = patched_file.source_file or ''

        path = target if target and target != DEV_NULL else source
        if path.startswith(('a/', 'b/')):
            path = path[2:]
        return path or 'unknown'
