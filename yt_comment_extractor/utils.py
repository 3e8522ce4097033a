# yt_comment_extractor/utils.py


def _deep_get(dictionary, keys, default=None):
    """
    Safely retrieves a value from a nested structure using a dot-separated path.

    Integer path segments index into lists, e.g. `"items.0.snippet"`.
    Returns `default` as soon as a segment cannot be resolved.
    """
    if dictionary is None:
        return default
    current = dictionary
    for key in keys.split("."):
        if isinstance(current, dict):
            if key not in current:
                return default
            current = current[key]
        elif isinstance(current, list):
            try:
                current = current[int(key)]
            except (ValueError, IndexError):
                return default
        else:
            return default
    return current


def _as_str(value) -> str:
    """Returns `value` if it is a string, otherwise an empty string."""
    return value if isinstance(value, str) else ""
