"""Normalization for list-valued columns (technologies, gallery_images, tags).

Writes accept a real list, a JSON array string or a comma-separated string;
the column always stores a JSON array of trimmed, non-empty strings.
"""

import json


def normalize_string_list(value) -> list[str]:
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        items = list(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        items = None
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
            if isinstance(parsed, list):
                items = parsed
        if items is None:
            items = text.split(",")
    else:
        raise ValueError("must be a list of strings or a comma-separated string")

    normalized = []
    for item in items:
        if item is None:
            continue
        if not isinstance(item, (str, int, float)) or isinstance(item, bool):
            raise ValueError("list items must be strings")
        cleaned = str(item).strip()
        if cleaned:
            normalized.append(cleaned)
    return normalized


def dump_string_list(values: list[str] | None) -> str:
    return json.dumps(list(values or []))


def load_string_list(raw) -> list[str]:
    """Deserialize a stored list column; anything unreadable becomes []."""
    if raw is None:
        return []
    if isinstance(raw, list):
        return [str(item) for item in raw]
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(parsed, list):
        return []
    return [str(item) for item in parsed if item is not None]
