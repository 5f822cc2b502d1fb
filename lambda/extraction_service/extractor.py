import json
import re
from datetime import datetime, timezone

from models import WordResult, ParseAttempt, ParseTierEnum, FieldSourceEnum
from utils import logging

FIELDS = ("word", "pronunciation", "origin", "definition")

# First "{" through the last "}" - deliberately not a balanced-brace scan
SPAN_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

FIELD_PATTERNS = {
    "word": re.compile(r'"word"\s*:\s*"([^"]+)"'),
    "pronunciation": re.compile(r'"pronunciation"\s*:\s*"([^"]+)"'),
    "origin": re.compile(r'"origin"\s*:\s*"([^"]+)"'),
    # Tolerates a reply truncated inside the definition string
    "definition": re.compile(r'"definition"\s*:\s*"([^"]*?)(?:"|\Z)'),
}

RECOVERY_DEFAULTS = {
    "pronunciation": "",
    "origin": "Unknown",
    "definition": "A beautiful word that captures your feeling.",
}

UNKNOWN_ORIGIN = "Unknown origin"


class ExtractionError(ValueError):
    """Raised when no usable word can be recovered from a completion."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def completion_text(payload) -> str:
    """
    Pull the completion text out of a relay reply.

    Understands the chat completion shape (``choices[0].message.content``),
    the text-generation shape (``[{"generated_text": ...}]``), the Bedrock
    shape (``output.message.content[0].text``) and a bare string. Anything
    else yields an empty string.
    """
    if isinstance(payload, str):
        return payload

    if isinstance(payload, dict):
        choices = payload.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            message = choices[0].get("message")
            if isinstance(message, dict) and isinstance(message.get("content"), str):
                return message["content"]

        output = payload.get("output")
        message = output.get("message") if isinstance(output, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if isinstance(content, list) and content and isinstance(content[0], dict):
            text = content[0].get("text")
            if isinstance(text, str):
                return text

    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        text = payload[0].get("generated_text")
        if isinstance(text, str):
            return text

    return ""


def locate_structured_span(raw_text: str) -> str | None:
    match = SPAN_PATTERN.search(raw_text)
    return match.group(0) if match else None


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def parse_structured(span: str) -> ParseAttempt:
    # Raises json.JSONDecodeError / ValueError on malformed spans
    parsed = json.loads(span)
    if not isinstance(parsed, dict):
        raise ValueError("Structured span is not an object")

    return ParseAttempt(
        tier=ParseTierEnum.STRUCTURED,
        fields={name: _as_text(parsed.get(name)) for name in FIELDS},
        provenance={name: FieldSourceEnum.STRUCTURED for name in FIELDS},
    )


def recover_fields(raw_text: str) -> ParseAttempt | None:
    """Per-field pattern recovery over the whole text. First match wins."""
    fields = {}
    provenance = {}
    for name in FIELDS:
        match = FIELD_PATTERNS[name].search(raw_text)
        if match:
            fields[name] = match.group(1)
            provenance[name] = FieldSourceEnum.PATTERN
        elif name in RECOVERY_DEFAULTS:
            fields[name] = RECOVERY_DEFAULTS[name]
            provenance[name] = FieldSourceEnum.DEFAULT

    if "word" not in fields:
        return None

    return ParseAttempt(tier=ParseTierEnum.RECOVERED, fields=fields, provenance=provenance)


def parse_attempt(raw_text: str) -> ParseAttempt:
    span = locate_structured_span(raw_text)

    if span is not None:
        try:
            return parse_structured(span)
        except (ValueError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError; deep nesting overflows the decoder
            logging.info(f"Structured parse failed, attempting field recovery: {str(e)}")
    else:
        logging.info("No structured span in completion, attempting field recovery")

    attempt = recover_fields(raw_text)
    if attempt is None:
        raise ExtractionError("no structured span found" if span is None else "no word field recoverable")
    return attempt


def extract(raw_text: str) -> WordResult:
    attempt = parse_attempt(raw_text or "")
    fields = attempt.fields
    logging.info(f"Extraction via {attempt.tier.value}: "
                 + ", ".join(f"{name}={source.value}" for name, source in attempt.provenance.items()))

    word = fields.get("word", "")
    definition = fields.get("definition", "")
    if not word or not definition:
        logging.warning(f"Rejecting extraction with empty word or definition: {fields}")
        raise ExtractionError("invalid response format")

    return WordResult(
        word=word,
        pronunciation=fields.get("pronunciation") or "",
        origin=fields.get("origin") or UNKNOWN_ORIGIN,
        definition=definition,
        timestamp=datetime.now(timezone.utc),
    )


def find_word(payload, query: str = None) -> WordResult:
    text = completion_text(payload)
    logging.debug(f"Completion text: {text}")
    result = extract(text)
    if query is not None:
        result = result.model_copy(update={"query": query})
    return result
