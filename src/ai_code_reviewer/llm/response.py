"""
Response Recovery

Turns raw model output into a review list, tolerating code fences and
prose around the JSON object.
"""

import re
import logging

from pydantic import ValidationError

from ..models.review import (
    ParsedReviews,
    ReviewEntry,
    ReviewParseOutcome,
    ReviewPayload,
    UnparsedResponse,
)


logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r'```json\n?')
_FENCE = re.compile(r'```\n?')


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers and surrounding whitespace."""
    text = _JSON_FENCE.sub('', text)
    text = _FENCE.sub('', text)
    return text.strip()


def extract_json_object(text: str) -> str:
    """Slice from the first `{` to the last `}` when both exist in that order."""
    first = text.find('{')
    last = text.rfind('}')
    if first != -1 and last != -1 and last > first:
        return text[first:last + 1]
    return text


def parse_review_response(raw: str) -> ReviewParseOutcome:
    """
    Parse a completion reply into review entries.

    Args:
        raw: Reply text as returned by the model

    Returns:
        ParsedReviews with the well-formed entries when the reply holds a
        `reviews` list, otherwise UnparsedResponse describing why it was
        rejected
    """
    candidate = extract_json_object(strip_code_fences(raw or '{}'))

    try:
        payload = ReviewPayload.model_validate_json(candidate)
    except ValidationError as e:
        return UnparsedResponse(raw=raw, reason=f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}")

    entries = []
    skipped = 0
    for item in payload.reviews:
        try:
            entries.append(ReviewEntry.model_validate(item))
        except ValidationError as e:
            skipped += 1
            logger.debug(f"Dropping malformed review entry {item!r}: {e.errors()[0]['msg']}")

    return ParsedReviews(entries=tuple(entries), skipped=skipped)
