from typing import Any, Optional


def coerce_int(value: Any, default: int) -> int:
    """
    Lenient integer parsing for form-style input.
    "4", 4.0 and 4 all give 4; anything unparseable, empty, or zero gives `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(float(str(value).strip()))
    except (TypeError, ValueError):
        return default
    return parsed or default


def optional_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError):
        return None


def parse_bool_filter(value: Optional[str]) -> Optional[bool]:
    """Query-string tri-state: "true"/"false" filter, "all" or empty means no filter."""
    if value is None:
        return None
    value = value.strip().lower()
    if value in ("", "all"):
        return None
    return value == "true"


def empty_str_to_none(v: Any) -> Any:
    if v == "":
        return None
    return v
