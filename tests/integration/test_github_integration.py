"""
Integration tests for the GitHub layer.

Runs GitHubClient, DiffSource and DiffParser together against a mocked
HTTP session.
"""

import time

import pytest
from unittest.mock import AsyncMock, Mock, patch

from ai_code_reviewer.github.client import DIFF_MEDIA_TYPE, GitHubAPIError, GitHubClient
from ai_code_reviewer.github.diff_source import DiffSource
from ai_code_reviewer.github.parser import DiffParser
from ai_code_reviewer.models.pr_diff import ChangeKind


RATE_HEADERS = {
    "X-RateLimit-Remaining": "4999",
    "X-RateLimit-Reset": str(int(time.time()) + 3600),
}

UNIFIED_DIFF = "\n".join([
    "diff --git a/src/app.py b/src/app.py",
    "index 1111111..2222222 100644",
    "--- a/src/app.py",
    "+++ b/src/app.py",
    "@@ -1,3 +1,4 @@",
    " import os",
    "+import sys",
    " ",
    " def main():",
    "diff --git a/old.txt b/old.txt",
    "deleted file mode 100644",
    "index 3333333..0000000",
    "--- a/old.txt",
    "+++ /dev/null",
    "@@ -1,2 +0,0 @@",
    "-first",
    "-second",
    "",
])


def make_response(status_code=200, json_data=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = json_data if json_data is not None else {}
    response.text = text
    response.content = b"{}" if json_data is not None else text.encode()
    response.headers = dict(RATE_HEADERS)
    return response


class TestDiffRetrievalFlow:
    """Diff retrieval and parsing through the real client."""

    def setup_method(self):
        self.client = GitHubClient("ghp_test_token")
        self.source = DiffSource(self.client)
        self.parser = DiffParser()

    @pytest.mark.asyncio
    @patch('requests.Session.request')
    async def test_unified_diff_is_parsed(self, mock_request):
        mock_request.return_value = make_response(text=UNIFIED_DIFF)

        diff = await self.source.fetch_diff("octo", "repo", 9)
        files = self.parser.parse(diff)

        args, kwargs = mock_request.call_args
        assert args == ("GET", "https://api.github.com/repos/octo/repo/pulls/9")
        assert kwargs["headers"] == {"Accept": DIFF_MEDIA_TYPE}

        assert [f.path for f in files] == ["src/app.py", "old.txt"]
        app, old = files
        assert app.additions == 1
        added = [c for c in app.hunks[0].changes if c.kind is ChangeKind.ADDED]
        assert added[0].line_number == 2
        assert old.is_deleted
        assert [c.line_number for c in old.hunks[0].changes] == [1, 2]

    @pytest.mark.asyncio
    @patch('requests.Session.request')
    async def test_not_acceptable_falls_back_to_file_listing(self, mock_request):
        listing = [
            {"filename": f"src/mod_{i}.py", "patch": f"@@ -1 +1 @@\n-a = {i}\n+a = {i + 1}"}
            for i in range(12)
        ]
        mock_request.side_effect = [
            make_response(406, json_data={"message": "Sorry, the diff exceeded the maximum number of files"}),
            make_response(json_data=listing),
        ]

        with patch("ai_code_reviewer.github.diff_source.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            diff = await self.source.fetch_diff("octo", "repo", 9)

        files = self.parser.parse(diff)

        assert [f.path for f in files] == [f"src/mod_{i}.py" for i in range(12)]
        assert all(f.additions == 1 and f.deletions == 1 for f in files)
        mock_sleep.assert_awaited_once_with(1.0)

        files_call = mock_request.call_args_list[1]
        assert files_call[0][1] == "https://api.github.com/repos/octo/repo/pulls/9/files"
        assert files_call[1]["params"] == {"page": 1, "per_page": 100}

    @pytest.mark.asyncio
    @patch('requests.Session.request')
    async def test_file_listing_is_paged(self, mock_request):
        source = DiffSource(self.client, page_size=2)
        first_page = [
            {"filename": "a.py", "patch": "@@ -1 +1 @@\n-a\n+b"},
            {"filename": "b.py", "patch": "@@ -1 +1 @@\n-c\n+d"},
        ]
        second_page = [{"filename": "c.py", "patch": "@@ -1 +1 @@\n-e\n+f"}]
        mock_request.side_effect = [
            make_response(json_data=first_page),
            make_response(json_data=second_page),
        ]

        diff = await source.fetch_individual_file_diffs("octo", "repo", 9)

        assert [f.path for f in self.parser.parse(diff)] == ["a.py", "b.py", "c.py"]
        assert mock_request.call_count == 2

    @pytest.mark.asyncio
    @patch('requests.Session.request')
    async def test_other_status_codes_do_not_fall_back(self, mock_request):
        mock_request.return_value = make_response(500, json_data={"message": "Server Error"})

        with pytest.raises(GitHubAPIError) as exc_info:
            await self.source.fetch_diff("octo", "repo", 9)

        assert exc_info.value.status_code == 500
        assert mock_request.call_count == 1
