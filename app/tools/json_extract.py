"""Recover a result array from an agent's free-form reply.

Accepted shapes, tried in order:

1. a bare JSON array
2. an object with a ``results`` array
3. an object whose first array-valued field holds the results

String content may wrap the JSON in a markdown code fence, optionally tagged
``json``; the fence is stripped before parsing.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Iterable, Union

RESULT_MESSAGE_TYPES = ("DONE", "result", "assistant")

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\[[\s\S]*\]|\{[\s\S]*\})\s*```")
_BARE_JSON = re.compile(r"(\[[\s\S]*\]|\{[\s\S]*\})")


@dataclass(frozen=True, slots=True)
class Parsed:
    items: list[Any]
    shape: str


@dataclass(frozen=True, slots=True)
class NotFound:
    reason: str


ExtractResult = Union[Parsed, NotFound]


def _from_value(value: Any) -> ExtractResult:
    if isinstance(value, list):
        return Parsed(items=value, shape="array")
    if isinstance(value, dict):
        results = value.get("results")
        if isinstance(results, list):
            return Parsed(items=results, shape="results")
        for key, field_value in value.items():
            if isinstance(field_value, list):
                return Parsed(items=field_value, shape=f"field:{key}")
        return NotFound("object has no array-valued field")
    return NotFound(f"unsupported content type {type(value).__name__}")


def _from_text(text: str) -> ExtractResult:
    match = _FENCED_JSON.search(text) or _BARE_JSON.search(text)
    candidate = match.group(1) if match else text.strip()
    try:
        value = json.loads(candidate)
    except json.JSONDecodeError as e:
        return NotFound(f"invalid JSON: {e.msg}")
    return _from_value(value)


def extract_results(content: Any) -> ExtractResult:
    if isinstance(content, str):
        return _from_text(content)
    return _from_value(content)


def extract_from_messages(messages: Iterable[dict[str, Any]]) -> ExtractResult:
    """Return the first result array found in the transcript's result messages."""
    reasons: list[str] = []
    for message in messages:
        if message.get("type") not in RESULT_MESSAGE_TYPES:
            continue
        outcome = extract_results(message.get("content"))
        if isinstance(outcome, Parsed):
            return outcome
        reasons.append(f"{message.get('type')}: {outcome.reason}")
    if not reasons:
        return NotFound("no result messages in transcript")
    return NotFound("; ".join(reasons))
