"""Extracts the JSON object embedded in free-text model output.

Models wrap JSON in prose or code fences. The parser takes everything from
the first '{' to the last '}' and validates it. Failures come back as a
value, not an exception, so callers handle them apart from transport errors.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from skillbridge.domain.errors import ParseError

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 200


@dataclass
class ParseResult:
    payload: Optional[Dict[str, Any]] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.payload is not None


def _fail(reason: str, text: str) -> ParseResult:
    logger.warning(f"Could not parse AI response: {reason}")
    return ParseResult(error=ParseError(reason, raw_excerpt=text[:EXCERPT_LENGTH]))


def parse_json_payload(text: Optional[str], required_fields: Iterable[str] = ()) -> ParseResult:
    """Parses the embedded JSON object out of model output.

    Args:
        text: Raw completion text.
        required_fields: Top-level keys that must be present (and not null).

    Returns:
        ParseResult with `payload` on success or `error` on failure.
    """
    if not text:
        return _fail("Empty response", "")

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return _fail("No JSON object found in response", text)

    try:
        payload = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        return _fail(f"Malformed JSON: {e.msg}", text)

    if not isinstance(payload, dict):
        return _fail("JSON payload is not an object", text)

    missing = [name for name in required_fields if payload.get(name) is None]
    if missing:
        return _fail(f"Missing required fields: {', '.join(missing)}", text)

    return ParseResult(payload=payload)
