"""
Helpers for pulling JSON out of free-form model responses.

Models often wrap JSON in markdown fences or add a sentence before it,
so the payload is located first and then parsed strictly.
"""
import json
import re
from typing import Any, Dict, List

_FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


class LLMResponseFormatError(ValueError):
    """The model response did not contain the expected JSON payload."""


def _locate(text: str, open_char: str, close_char: str) -> str:
    if not text or not text.strip():
        raise LLMResponseFormatError("Empty model response")

    fenced = _FENCED_BLOCK_RE.search(text)
    if fenced and open_char in fenced.group(1):
        text = fenced.group(1)

    start = text.find(open_char)
    end = text.rfind(close_char)
    if start == -1 or end == -1 or end < start:
        raise LLMResponseFormatError(
            f"No JSON {'object' if open_char == '{' else 'array'} found in model response"
        )
    return text[start:end + 1]


def _loads(payload: str) -> Any:
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise LLMResponseFormatError(f"Invalid JSON in model response: {e}") from e


def extract_json_object(text: str) -> Dict[str, Any]:
    """Return the JSON object embedded in ``text``.

    Raises:
        LLMResponseFormatError: no object present, or it does not parse
    """
    data = _loads(_locate(text, "{", "}"))
    if not isinstance(data, dict):
        raise LLMResponseFormatError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def extract_json_array(text: str) -> List[Any]:
    """Return the JSON array embedded in ``text``.

    Raises:
        LLMResponseFormatError: no array present, or it does not parse
    """
    data = _loads(_locate(text, "[", "]"))
    if not isinstance(data, list):
        raise LLMResponseFormatError(f"Expected a JSON array, got {type(data).__name__}")
    return data
