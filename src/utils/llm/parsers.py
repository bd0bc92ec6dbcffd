"""
Parsing helpers for language model output.
"""
import json
import re
from typing import Any, Dict

from src.services.exceptions import ResponseParseError

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


def extract_json(text: str) -> Dict[str, Any]:
    """
    Extract the JSON object embedded in a model response.

    Models often wrap JSON in prose or markdown fences. The block from the
    first ``{`` to the last ``}`` is parsed.

    Args:
        text: Raw model output

    Returns:
        Parsed JSON object

    Raises:
        ResponseParseError: If no block is found or it is not a valid object

    Example:
        >>> extract_json('Here you go: ```json {"a": 1} ```')
        {'a': 1}
    """
    match = _JSON_BLOCK.search(text or "")
    if not match:
        raise ResponseParseError("No JSON object found in model response")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Invalid JSON in model response: {e}") from e
    if not isinstance(data, dict):
        raise ResponseParseError("Model response JSON is not an object")
    return data
