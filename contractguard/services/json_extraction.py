"""
Recover a JSON object from free-form model output.

Models often wrap the requested JSON in prose or code fences. Rather than
slicing from the first ``{`` to the last ``}``, each opening brace is matched
structurally (string literals and escapes are honoured) and the first
balanced slice that parses as a JSON object is returned.
"""

import json
from typing import Any, Dict, Iterator, Optional

from ..errors import ParseError


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Index just past the ``}`` matching the ``{`` at ``start``, or None."""
    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1

    return None


def iter_json_candidates(text: str) -> Iterator[str]:
    """Yield every balanced ``{...}`` slice of ``text`` in order of its start."""
    start = text.find("{")
    while start != -1:
        end = _balanced_end(text, start)
        if end is not None:
            yield text[start:end]
        start = text.find("{", start + 1)


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Return the first JSON object embedded in ``text``.

    Raises:
        ParseError: If no balanced slice parses to a JSON object
    """
    found_candidate = False

    for candidate in iter_json_candidates(text):
        found_candidate = True
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    if not found_candidate:
        raise ParseError("No JSON found in response")
    raise ParseError("No parseable JSON object found in response")
