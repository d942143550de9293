"""JSON serialization utilities."""
import json


def json_dump(payload: object) -> str:
    """Serialize object to compact JSON string."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def json_pretty(payload: object) -> str:
    """Serialize object to pretty JSON string."""
    return json.dumps(payload, ensure_ascii=False, indent=2)


def json_load(data: str) -> object:
    """Deserialize JSON string to object."""
    return json.loads(data)


def json_load_object(data: str | None) -> dict[str, object] | None:
    """Deserialize JSON text that must hold an object; None otherwise."""
    if not data:
        return None
    try:
        parsed = json.loads(data)
    except (json.JSONDecodeError, TypeError):
        return None
    return parsed if isinstance(parsed, dict) else None
