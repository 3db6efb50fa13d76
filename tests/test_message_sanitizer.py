"""
tests/test_message_sanitizer.py

Guest-facing text extraction from raw chat-log entries.
"""

from __future__ import annotations

import json

import pytest

from messages.sanitizer import clean_message_content


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------


class TestPlainText:
    def test_plain_text_unchanged(self) -> None:
        assert clean_message_content("Hello, how can I help?") == "Hello, how can I help?"

    def test_surrounding_whitespace_preserved(self) -> None:
        assert clean_message_content("  Ciao!\n") == "  Ciao!\n"

    def test_none_and_empty(self) -> None:
        assert clean_message_content(None) == ""
        assert clean_message_content("") == ""

    def test_invalid_json_lookalike_is_plain_text(self) -> None:
        text = "{ see you at 10 }"
        assert clean_message_content(text) == text


# ---------------------------------------------------------------------------
# Trace prefixes
# ---------------------------------------------------------------------------


class TestTracePrefixes:
    @pytest.mark.parametrize(
        "content",
        [
            "Calling Think with input: foo",
            "Calling get_booking with input: {\"code\": \"X\"}",
            "  Calling Escalation Tool with input: bar",
            "Analyze guest input: late checkout request",
            "Think: the guest wants towels",
            "Thinking: check availability",
        ],
    )
    def test_rejected(self, content: str) -> None:
        assert clean_message_content(content) == ""

    def test_prefix_must_lead(self) -> None:
        text = "I was Thinking: maybe a late checkout?"
        assert clean_message_content(text) == text


# ---------------------------------------------------------------------------
# JSON objects
# ---------------------------------------------------------------------------


class TestJsonObjects:
    def test_response_extracted(self) -> None:
        assert clean_message_content('{"response":"Hello guest"}') == "Hello guest"

    def test_reply_key_priority(self) -> None:
        payload = {"text": "third", "message": "second", "response": "first"}
        assert clean_message_content(json.dumps(payload)) == "first"
        del payload["response"]
        assert clean_message_content(json.dumps(payload)) == "second"
        del payload["message"]
        assert clean_message_content(json.dumps(payload)) == "third"

    def test_empty_reply_falls_through(self) -> None:
        assert clean_message_content('{"response": "", "message": "fallback"}') == "fallback"

    def test_nested_content_sanitized(self) -> None:
        assert clean_message_content('{"content": "Welcome!"}') == "Welcome!"
        assert clean_message_content('{"content": "Think: internal"}') == ""

    @pytest.mark.parametrize(
        "payload",
        [
            {"row_number": 1, "Codice": "X"},
            {"Arrivo": "2026-03-01", "Partenza": "2026-03-04"},
            {"tool_calls": [], "response": "hidden"},
            {"Ospiti": 2},
        ],
    )
    def test_tool_payload_rejected(self, payload: dict) -> None:
        assert clean_message_content(json.dumps(payload)) == ""

    def test_object_without_reply_rejected(self) -> None:
        assert clean_message_content('{"foo": "bar"}') == ""

    def test_non_string_reply_is_encoded(self) -> None:
        assert clean_message_content('{"response": 42}') == "42"


# ---------------------------------------------------------------------------
# JSON arrays
# ---------------------------------------------------------------------------


class TestJsonArrays:
    def test_first_response_extracted(self) -> None:
        raw = json.dumps([{"response": "Your room is ready"}, {"response": "ignored"}])
        assert clean_message_content(raw) == "Your room is ready"

    def test_booking_rows_rejected(self) -> None:
        raw = json.dumps([{"response": "x"}, {"row_number": 2, "Camere": 1}])
        assert clean_message_content(raw) == ""

    def test_string_items_joined(self) -> None:
        assert clean_message_content('["Hello", "there"]') == "Hello there"

    def test_mixed_items_rejected(self) -> None:
        assert clean_message_content('["Hello", 3]') == ""
        assert clean_message_content("[]") == ""

    def test_joined_strings_are_resanitized(self) -> None:
        assert clean_message_content('["Think:", "private"]') == ""


# ---------------------------------------------------------------------------
# Raw signatures
# ---------------------------------------------------------------------------


class TestRawSignatures:
    def test_think_tool_trace(self) -> None:
        assert clean_message_content("Time: 10:00\nPlan: call the guest") == ""

    def test_time_without_plan_kept(self) -> None:
        assert clean_message_content("Time: 10:00 works for us") == "Time: 10:00 works for us"

    @pytest.mark.parametrize(
        "content",
        [
            'payload "tool_calls" leaked',
            'partial {"row_number": 4',
            "Should I escalate? Escalate YES",
        ],
    )
    def test_rejected(self, content: str) -> None:
        assert clean_message_content(content) == ""


# ---------------------------------------------------------------------------
# Idempotence
# ---------------------------------------------------------------------------

CORPUS = [
    "Hello, how can I help?",
    "  padded  ",
    "",
    "Think: x",
    '{"response":"Hello guest"}',
    '{"response": "[\\"a\\", \\"b\\"]"}',
    '{"message": {"text": "nested"}}',
    '{"content": {"response": "deep"}}',
    '[{"response": "{\\"text\\": \\"inner\\"}"}]',
    '["one", "two"]',
    "[not json]",
    "{also not json}",
    '{"row_number": 1}',
    "Time: now plan: later",
    "ESCALATE yes please",
    '"quoted"',
    "Calling X with input: y",
]


@pytest.mark.parametrize("content", CORPUS)
def test_cleaning_is_idempotent(content: str) -> None:
    once = clean_message_content(content)
    assert clean_message_content(once) == once


def test_never_raises_on_structured_input() -> None:
    assert clean_message_content({"response": "dict input"}) == "dict input"
    assert clean_message_content(["a", "b"]) == "a b"
    assert clean_message_content(12) == "12"


def test_deeply_nested_brackets_are_plain_text() -> None:
    deep = "[" * 50_000 + "]" * 50_000
    assert clean_message_content(deep) == deep
    assert clean_message_content(clean_message_content(deep)) == deep


@pytest.mark.parametrize("depth", [400, 5_000])
def test_deeply_nested_content_wrappers_never_raise(depth: int) -> None:
    raw = '{"content": ' * depth + '"hi"' + "}" * depth
    once = clean_message_content(raw)
    assert once in ("hi", "", raw)
    assert clean_message_content(once) == once
