"""Tests for completion parsing and recovery."""

from datetime import datetime, timezone

import pytest

from extraction_service import (
    ExtractionError,
    completion_text,
    extract,
    find_word,
    locate_structured_span,
    parse_attempt,
)
from models import FieldSourceEnum, ParseTierEnum

SAUDADE = (
    '{"word":"saudade","pronunciation":"sah-oo-DAH-jee","origin":"Portuguese",'
    '"definition":"A deep emotional state of nostalgic longing."}'
)


class TestStructuredSpan:
    """Tests for the greedy brace span locator."""

    def test_first_to_last_brace(self):
        text = 'Here: {"a": 1} and also {"b": 2} done'
        assert locate_structured_span(text) == '{"a": 1} and also {"b": 2}'

    def test_spans_newlines(self):
        assert locate_structured_span('x {\n"word": "y"\n} z') == '{\n"word": "y"\n}'

    def test_no_span(self):
        assert locate_structured_span("no braces here") is None
        assert locate_structured_span("} backwards {") is None


class TestExtract:
    """Tests for extract()."""

    def test_well_formed_payload(self):
        before = datetime.now(timezone.utc)
        result = extract(SAUDADE)

        assert result.word == "saudade"
        assert result.pronunciation == "sah-oo-DAH-jee"
        assert result.origin == "Portuguese"
        assert result.definition == "A deep emotional state of nostalgic longing."
        assert result.query is None
        assert result.timestamp >= before

    def test_payload_inside_chatter(self):
        result = extract(f"Of course! Here is your word:\n{SAUDADE}\nEnjoy.")
        assert result.word == "saudade"

    def test_structured_defaults(self):
        result = extract('{"word": "hygge", "definition": "Cosy contentment."}')
        assert result.pronunciation == ""
        assert result.origin == "Unknown origin"

    def test_structured_null_origin_defaults(self):
        result = extract('{"word": "hygge", "origin": null, "definition": "Cosy contentment."}')
        assert result.origin == "Unknown origin"

    def test_malformed_span_falls_back(self):
        # Trailing comma makes the span invalid JSON
        text = '{"word": "hiraeth", "origin": "Welsh", "definition": "Homesickness for a home you cannot return to.",}'
        result = extract(text)

        assert result.word == "hiraeth"
        assert result.origin == "Welsh"
        assert result.definition == "Homesickness for a home you cannot return to."
        assert result.pronunciation == ""

    def test_fallback_origin_defaults_to_unknown(self):
        text = '{"word": "sehnsucht", "definition": "An intense yearning" oops}'
        result = extract(text)
        assert result.word == "sehnsucht"
        assert result.origin == "Unknown"
        assert result.definition == "An intense yearning"

    def test_truncated_without_span(self):
        text = 'Sure! Here is the word: "word": "mono no aware", "definition": "the bittersweet awareness of impermanence'
        result = extract(text)

        assert result.word == "mono no aware"
        assert result.definition == "the bittersweet awareness of impermanence"
        assert result.origin == "Unknown"
        assert result.pronunciation == ""

    def test_fallback_missing_definition_uses_generic_sentence(self):
        result = extract('{"word": "komorebi", broken')
        assert result.word == "komorebi"
        assert result.definition == "A beautiful word that captures your feeling."

    def test_fallback_first_match_wins(self):
        text = '{"word": "first", "word": "second", "definition": "x" trailing'
        assert extract(text).word == "first"

    def test_refusal_fails(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract("I cannot help with that.")
        assert exc_info.value.reason == "no structured span found"

    def test_malformed_span_without_word_fails(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract('{"definition": "orphaned", }')
        assert exc_info.value.reason == "no word field recoverable"

    def test_hollow_structured_parse_does_not_fall_back(self):
        # Valid JSON with an empty definition is rejected, even though the
        # surrounding text would satisfy the fallback patterns
        with pytest.raises(ExtractionError) as exc_info:
            extract('{"word": "ennui", "definition": ""}')
        assert exc_info.value.reason == "invalid response format"

    def test_empty_fallback_definition_rejected(self):
        with pytest.raises(ExtractionError):
            extract('{"word": "ennui", "definition": "", broken')

    def test_deeply_nested_span_falls_back(self):
        # The JSON decoder overflows the recursion limit on this span
        text = '"word": "x", "definition": "y" {"a": ' + "[" * 200000 + "}"
        result = extract(text)
        assert result.word == "x"
        assert result.definition == "y"

        attempt = parse_attempt(text)
        assert attempt.tier == ParseTierEnum.RECOVERED

    def test_empty_input_fails(self):
        with pytest.raises(ExtractionError):
            extract("")

    def test_idempotent_except_timestamp(self):
        first = extract(SAUDADE)
        second = extract(SAUDADE)
        assert first.model_dump(exclude={"timestamp"}) == second.model_dump(exclude={"timestamp"})

    def test_result_is_immutable(self):
        result = extract(SAUDADE)
        with pytest.raises(Exception):
            result.word = "other"


class TestParseAttempt:
    """Tests for the tagged parse attempt."""

    def test_structured_provenance(self):
        attempt = parse_attempt(SAUDADE)
        assert attempt.tier == ParseTierEnum.STRUCTURED
        assert set(attempt.provenance.values()) == {FieldSourceEnum.STRUCTURED}

    def test_recovered_provenance(self):
        attempt = parse_attempt('"word": "waldeinsamkeit", "origin": "German"')
        assert attempt.tier == ParseTierEnum.RECOVERED
        assert attempt.provenance["word"] == FieldSourceEnum.PATTERN
        assert attempt.provenance["origin"] == FieldSourceEnum.PATTERN
        assert attempt.provenance["pronunciation"] == FieldSourceEnum.DEFAULT
        assert attempt.provenance["definition"] == FieldSourceEnum.DEFAULT

    def test_non_string_values_stringified(self):
        attempt = parse_attempt('{"word": 42, "definition": "the answer"}')
        assert attempt.fields["word"] == "42"


class TestCompletionText:
    """Tests for relay reply unwrapping."""

    def test_chat_completion(self):
        payload = {"choices": [{"message": {"role": "assistant", "content": SAUDADE}}]}
        assert completion_text(payload) == SAUDADE

    def test_generated_text(self):
        assert completion_text([{"generated_text": "hello"}]) == "hello"

    def test_bedrock_output(self):
        payload = {"output": {"message": {"content": [{"text": "hello"}]}}}
        assert completion_text(payload) == "hello"

    def test_plain_string(self):
        assert completion_text("hello") == "hello"

    def test_unknown_shape(self):
        assert completion_text({"error": "rate limited"}) == ""
        assert completion_text(None) == ""
        assert completion_text({"choices": []}) == ""


class TestFindWord:
    """Tests for find_word()."""

    def test_attaches_query(self):
        payload = {"choices": [{"message": {"content": SAUDADE}}]}
        result = find_word(payload, "missing a place")
        assert result.word == "saudade"
        assert result.query == "missing a place"

    def test_unknown_shape_fails_as_no_span(self):
        with pytest.raises(ExtractionError) as exc_info:
            find_word({"error": "boom"}, "anything")
        assert exc_info.value.reason == "no structured span found"
