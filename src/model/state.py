"""Theme state: a flat mapping from property name to value.

The persisted form is a JSON object of string pairs. Anything else found in
storage (malformed JSON, arrays, nested values) reads back as empty state.
"""

from __future__ import annotations

import json
import logging

log = logging.getLogger(__name__)

State = dict[str, str]


def merge_states(*states: State | None) -> State:
    """Merge states left to right; later values overwrite earlier ones."""
    merged: State = {}
    for state in states:
        if state:
            merged.update(state)
    return merged


def state_to_json(state: State) -> str:
    """Serialize state to the persisted text form."""
    return json.dumps(state, separators=(",", ":"))


def state_from_json(text: str | None) -> State:
    """Parse persisted text into state, keeping only string-to-string pairs."""
    if text is None or not text.strip():
        return {}
    try:
        parsed = json.loads(text)
    except ValueError:
        log.debug(f"Ignoring malformed state text: {text!r}")
        return {}
    if not isinstance(parsed, dict):
        log.debug(f"Ignoring non-object state text: {text!r}")
        return {}
    return {key: value for key, value in parsed.items() if isinstance(value, str)}
