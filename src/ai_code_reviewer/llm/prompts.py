"""
Prompt Builder

Builds the per-file review prompt sent to the completion endpoint.
"""

import logging


logger = logging.getLogger(__name__)


REVIEW_PROMPT_TEMPLATE = """Review the following code changes and provide specific, actionable feedback.
PR Title: {title}
PR Description: {description}

Code:
```
{code}
```

Respond with a JSON object containing an array of reviews:
{{
  "reviews": [
    {{
      "lineNumber": <line_number>,
      "reviewComment": "<feedback>"
    }}
  ]
}}

Only include reviews for actual issues found. If no issues, respond with {{"reviews": []}}."""


class PromptBuilder:
    """
    Builds review prompts.

    The prompt carries the PR title and description as context and asks
    for a JSON answer of the shape
    `{"reviews": [{"lineNumber": int, "reviewComment": str}]}`, with an
    explicit empty list when nothing is wrong.
    """

    def __init__(self, template: str = REVIEW_PROMPT_TEMPLATE):
        self.template = template

    def build_review_prompt(self, code: str, pr_title: str, pr_description: str) -> str:
        """
        Build the review prompt for one file.

        Args:
            code: Flattened hunk text of the file
            pr_title: Pull request title
            pr_description: Pull request description (may be empty)

        Returns:
            Complete prompt string
        """
        return self.template.format(
            title=pr_title,
            description=pr_description,
            code=code,
        )
