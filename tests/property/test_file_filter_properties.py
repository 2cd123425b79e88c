"""
Property-based tests for file exclusion.

Property: a file is excluded exactly when it lives under a dependency,
VCS, build or coverage directory, or is a lock or minified file; kept
files retain diff order.
"""

from hypothesis import given, strategies as st

from ai_code_reviewer.models.pr_diff import DiffFile
from ai_code_reviewer.review.filter import FileFilter


EXCLUDED_DIRS = ('node_modules', '.git', 'dist', 'build', 'coverage')
EXCLUDED_SUFFIXES = ('.lock', '.min.js')

segment = st.text(alphabet='abcdefghijklmnopqrstuvwxyz', min_size=1, max_size=8)
directory = st.one_of(st.sampled_from(EXCLUDED_DIRS), segment)
extension = st.sampled_from(['.py', '.ts', '.js', '.md', '.lock', '.min.js'])


@st.composite
def repo_paths(draw):
    dirs = draw(st.lists(directory, max_size=4))
    filename = draw(segment) + draw(extension)
    return '/'.join(dirs + [filename])


def expected_excluded(path):
    *dirs, filename = path.split('/')
    return any(d in EXCLUDED_DIRS for d in dirs) or filename.endswith(EXCLUDED_SUFFIXES)


class TestFileFilterProperties:
    """Property tests for FileFilter."""

    @given(path=repo_paths())
    def test_exclusion_matches_directory_and_suffix_rules(self, path):
        """
        Property: default patterns exclude by directory or suffix only.

        Given: A repository-relative path
        When: The default filter checks it
        Then: It is excluded iff a parent directory or the suffix is excluded
        """
        assert FileFilter().is_excluded(path) == expected_excluded(path)

    @given(paths=st.lists(repo_paths(), max_size=20))
    def test_filter_keeps_order_of_non_excluded_files(self, paths):
        """
        Property: filtering is an order-preserving subsequence.

        Given: Files in diff order
        When: They are filtered
        Then: The survivors are exactly the non-excluded files, in order
        """
        file_filter = FileFilter()
        files = [DiffFile(path=p) for p in paths]

        kept = file_filter.filter_files(files)

        assert [f.path for f in kept] == [p for p in paths if not expected_excluded(p)]
        assert not any(file_filter.is_excluded(f.path) for f in kept)

    @given(path=repo_paths(), patterns=st.lists(st.sampled_from([
        '**/node_modules/**', '**/dist/**', '**/*.lock', '**/*.min.js',
    ]), min_size=1, max_size=4))
    def test_any_single_pattern_match_excludes(self, path, patterns):
        """
        Property: a combined filter excludes iff one of its patterns does.
        """
        combined = FileFilter(patterns).is_excluded(path)
        individually = any(FileFilter([p]).is_excluded(path) for p in patterns)

        assert combined == individually

    @given(
        dirname=segment.map(lambda s: s + '.lock') | segment.map(lambda s: s + '.min.js'),
        rest=st.lists(segment.filter(lambda s: s not in EXCLUDED_DIRS), min_size=1, max_size=3),
    )
    def test_suffix_patterns_do_not_exclude_directory_contents(self, dirname, rest):
        """
        Property: `*.lock` and `*.min.js` match file names, not directories.

        Given: A source file below a directory whose name ends in .lock or .min.js
        When: The default filter checks it
        Then: It is kept
        """
        path = '/'.join([dirname] + rest) + '.py'

        assert not FileFilter().is_excluded(path)
