"""
messages/sanitizer.py

Extraction of guest-facing text from raw chat-log entries.

Agent memory stores every turn, including tool traces, internal
reasoning and PMS lookups encoded as JSON.  :func:`clean_message_content`
returns the human-readable text of a message, or ``""`` when the entry is
internal noise that should not be shown.

Rules run in a fixed order:

1. Trace prefixes ("Calling <Tool> with input:", "Think:", ...) reject.
2. JSON arrays/objects are parsed; tool payloads reject, reply fields are
   extracted.  Invalid JSON falls through as plain text.
3. Substring signatures of tool output reject.
4. Anything else is returned unchanged.

The function never raises and is idempotent.
"""

from __future__ import annotations

import json
import re
from typing import Any

_TRACE_PREFIXES = ("Analyze guest input:", "Think:", "Thinking:")
_CALLING_TOOL_RE = re.compile(r"^Calling\s+.+?\s+with input:")

TOOL_DATA_KEYS = frozenset(
    {"row_number", "Codice", "Riferimento", "Arrivo", "Partenza", "Camere", "Ospiti"}
)
_OBJECT_REJECT_KEYS = TOOL_DATA_KEYS | {"tool_calls"}
_REPLY_KEYS = ("response", "message", "text")

_RAW_SIGNATURES = ('"tool_calls"', '"row_number"')
_ESCALATION_SIGNATURE = "escalate yes"


def clean_message_content(content: Any) -> str:
    """Return the user-facing text of *content*, or ``""`` for internal entries."""
    if content is None:
        return ""
    if not isinstance(content, str):
        content = json.dumps(content, default=str)

    trimmed = content.strip()
    if _is_trace(trimmed):
        return ""

    if _looks_like_json(trimmed):
        try:
            payload = json.loads(trimmed)
        except (json.JSONDecodeError, RecursionError):
            # too deeply nested to decode: treated as plain text
            pass
        else:
            if isinstance(payload, (list, dict)):
                return _from_payload(payload)

    if _is_tool_output(trimmed):
        return ""
    return content


def _is_trace(trimmed: str) -> bool:
    return trimmed.startswith(_TRACE_PREFIXES) or bool(_CALLING_TOOL_RE.match(trimmed))


def _from_payload(payload: list[Any] | dict[str, Any]) -> str:
    try:
        if isinstance(payload, list):
            return _from_array(payload)
        return _from_object(payload)
    except RecursionError:
        # nested reply wrappers deeper than the interpreter allows are dropped
        return ""


def _looks_like_json(trimmed: str) -> bool:
    return (trimmed.startswith("{") and trimmed.endswith("}")) or (
        trimmed.startswith("[") and trimmed.endswith("]")
    )


def _is_tool_output(trimmed: str) -> bool:
    lowered = trimmed.lower()
    # Think-tool trace: "Time: ... Plan: ..."
    if lowered.startswith("time: ") and "plan:" in lowered:
        return True
    if any(signature in trimmed for signature in _RAW_SIGNATURES):
        return True
    return _ESCALATION_SIGNATURE in lowered


def _has_tool_keys(item: Any, keys: frozenset[str]) -> bool:
    return isinstance(item, dict) and not keys.isdisjoint(item)


def _from_array(items: list[Any]) -> str:
    if any(_has_tool_keys(item, TOOL_DATA_KEYS) for item in items):
        return ""
    if items and isinstance(items[0], dict) and "response" in items[0]:
        return _as_text(items[0]["response"])
    if all(isinstance(item, str) for item in items):
        return clean_message_content(" ".join(items))
    return ""


def _from_object(payload: dict[str, Any]) -> str:
    if _has_tool_keys(payload, _OBJECT_REJECT_KEYS):
        return ""
    for key in _REPLY_KEYS:
        value = payload.get(key)
        if value is not None and value != "":
            return _as_text(value)
    if payload.get("content") is not None:
        return clean_message_content(payload["content"])
    return ""


def _as_text(value: Any) -> str:
    # Extracted replies are sanitized again so the result is a fixed point.
    if value is None:
        return ""
    return clean_message_content(value if isinstance(value, str) else json.dumps(value, default=str))
