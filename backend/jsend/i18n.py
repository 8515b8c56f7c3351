from __future__ import annotations

from collections.abc import Mapping
import re


def translate(message: str, values: Mapping[str, object] | None = None) -> str:
    """Replace each literal token (e.g. ``":error"``) in one pass, longest token first."""
    if not values:
        return message
    tokens = sorted((str(token) for token in values if token), key=len, reverse=True)
    if not tokens:
        return message
    lookup = {str(token): str(value) for token, value in values.items()}
    pattern = re.compile("|".join(re.escape(token) for token in tokens))
    return pattern.sub(lambda match: lookup[match.group(0)], message)
