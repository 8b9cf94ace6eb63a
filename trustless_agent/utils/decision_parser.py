"""
Best-effort recovery of a Decision from raw model output.

Model replies are supposed to be a single JSON object but regularly arrive
wrapped in prose, truncated, or with unescaped newlines inside strings. Each
parser here is a pure ``str -> Decision | None`` function; callers try them in
order and take the first hit. Nothing in this module raises for malformed
text.
"""

import json
import logging
import re
from collections.abc import Callable, Iterable
from typing import Any

from trustless_agent.schemas.decision import Decision

logger = logging.getLogger(__name__)

DecisionParser = Callable[[str], Decision | None]

STRING_FIELDS = ("complexity", "reason", "analysis")

# A string value runs lazily until a closing quote that is followed by the
# next `", "` pair, a closing brace, or the end of the text.
_STRING_VALUE = r'"{key}"\s*:\s*"([\s\S]*?)"(?=\s*,\s*"|\s*\}}|\s*\Z)'
_PAYMENT_REQUIRED = re.compile(r'"payment_required"\s*:\s*(true|false)', re.IGNORECASE)
_AMOUNT_USDC = re.compile(r'"amount_usdc"\s*:\s*([0-9]+(?:\.[0-9]+)?)', re.IGNORECASE)
_STRING_PATTERNS = {key: re.compile(_STRING_VALUE.format(key=key)) for key in STRING_FIELDS}

# Trailing characters that usually mean the model stopped mid-token
_TRUNCATION_TAIL = ('"', ":", "_", ",")


def _to_decision(data: Any) -> Decision | None:
    if not isinstance(data, dict):
        return None
    return Decision.model_validate(data)


def parse_strict(raw: str) -> Decision | None:
    """Parse the whole text as one JSON object."""
    try:
        data = json.loads(raw)
    except (RecursionError, TypeError, ValueError):
        return None
    return _to_decision(data)


def extract_loose(raw: str) -> Decision | None:
    """Parse the slice between the first ``{`` and the last ``}``."""
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return parse_strict(raw[start:end + 1])


def scrape_fields(raw: str) -> Decision | None:
    """
    Pull each expected key out of malformed JSON independently.

    Args:
        raw: Raw model output

    Returns:
        Decision with whatever fields were found, or None if none were
    """
    found: dict[str, Any] = {}

    for key, pattern in _STRING_PATTERNS.items():
        match = pattern.search(raw)
        if match:
            value = match.group(1).replace("\r", "").strip()
            if value:
                found[key] = value

    payment_match = _PAYMENT_REQUIRED.search(raw)
    if payment_match:
        found["payment_required"] = payment_match.group(1).lower() == "true"

    amount_match = _AMOUNT_USDC.search(raw)
    if amount_match:
        found["amount_usdc"] = float(amount_match.group(1))

    if not found:
        return None

    logger.debug(f"Scraped fields from malformed output: {sorted(found)}")
    return Decision(**found)


DEFAULT_PARSERS: tuple[DecisionParser, ...] = (parse_strict, extract_loose)


def parse_decision(raw: str, parsers: Iterable[DecisionParser] = DEFAULT_PARSERS) -> Decision | None:
    """Return the result of the first parser that recovers a Decision."""
    for parser in parsers:
        decision = parser(raw)
        if decision is not None:
            return decision
    return None


def looks_truncated(raw: str) -> bool:
    """
    Heuristic for output cut off mid-object.

    True when there is an opening brace but no closing brace anywhere, or when
    the trimmed text opens an object and ends on a quote, colon, underscore or
    comma instead of ``}``.
    """
    if "{" in raw and "}" not in raw:
        return True

    trimmed = raw.strip()
    return (
        trimmed.startswith("{")
        and trimmed.endswith(_TRUNCATION_TAIL)
        and not trimmed.endswith("}")
    )
