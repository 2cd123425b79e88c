"""
Diff Analyzer

Decides which diff files are worth sending to the model and flattens
their hunks into the code block embedded in review prompts.
"""

import logging

from ..models.pr_diff import DiffFile, Hunk


logger = logging.getLogger(__name__)

LOCK_FILE_MARKER = '.lock'


class DiffAnalyzer:
    """Prepares DiffFile objects for review."""

    def is_reviewable(self, diff_file: DiffFile) -> bool:
        """
        Check whether a file should be sent to the model.

        Files without hunks (binary files, pure renames, mode changes) and
        lock files that slipped past the filter are skipped.
        """
        if not diff_file.has_hunks:
            logger.debug(f"Skipping {diff_file.path}: no hunks")
            return False

        if LOCK_FILE_MARKER in diff_file.path:
            logger.debug(f"Skipping {diff_file.path}: lock file")
            return False

        return True

    def flatten_hunk(self, hunk: Hunk) -> str:
        # change text keeps its own line terminator
        return ''.join(change.marked_text for change in hunk.changes)

    def flatten(self, diff_file: DiffFile) -> str:
        """
        Render all hunks of a file as one text block.

        Each change becomes its marker followed by its text; hunks are
        separated by a newline.

        Args:
            diff_file: File to render

        Returns:
            Flattened code block
        """
        return '\n'.join(self.flatten_hunk(hunk) for hunk in diff_file.hunks)
