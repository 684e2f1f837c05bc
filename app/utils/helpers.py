from typing import Any


def as_text(value: Any) -> str:
    """Render a scalar the way it appears in a JSON payload (12.0 -> "12")."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
