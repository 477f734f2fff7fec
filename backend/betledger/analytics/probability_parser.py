from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

PROBABILITY_MARKER = "ESTIMATED PROBABILITY:"
DEFAULT_PROBABILITY = 0.50

_NON_NUMERIC = re.compile(r"[^0-9.]")
_NON_TOKEN = re.compile(r"[^0-9.%]")
_NUMBER = re.compile(r"\d+\.?\d*")


def _to_float(raw: str) -> float | None:
    try:
        return float(raw)
    except ValueError:
        return None


def extract_probability(text: str | None) -> float:
    """Pull a win probability out of free-form model output.

    Looks for an ``ESTIMATED PROBABILITY: NN%`` line first, then for any
    percentage or bare number in (0, 100], and falls back to 0.50.
    """
    if not text:
        return DEFAULT_PROBABILITY

    for line in text.splitlines():
        if PROBABILITY_MARKER in line.upper():
            value = _to_float(_NON_NUMERIC.sub("", line))
            if value is not None and 0 < value <= 100:
                return value / 100.0

    for token in _NON_TOKEN.sub(" ", text).split():
        if "%" in token or _NUMBER.fullmatch(token):
            value = _to_float(token.replace("%", ""))
            if value is not None and 0 < value <= 100:
                return value / 100.0

    logger.warning("No probability found in model response; defaulting to %.2f", DEFAULT_PROBABILITY)
    return DEFAULT_PROBABILITY
