# silver_talent/services/validation.py
import re
from typing import Any, Dict, List, Optional

from fastapi import HTTPException


def clean(value: Any) -> Optional[str]:
    """Strip strings; blank becomes None"""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_fields(fields: Dict[str, Any], message: str = "Missing required fields.") -> Dict[str, str]:
    """Raise 400 listing every missing/blank field, else return the stripped values"""
    errors = {name: f"{name} is required." for name, value in fields.items() if clean(value) is None}
    if errors:
        first = next(iter(errors))
        detail_message = f"Missing required field: {first}" if len(errors) == 1 else message
        raise HTTPException(status_code=400, detail={"message": detail_message, "errors": errors})
    return {name: clean(value) for name, value in fields.items()}


def split_list(value: Any, separator: str = ",") -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(separator)
    return [str(item).strip() for item in items if str(item).strip()]


def split_paragraphs(value: Any) -> List[str]:
    """Raw post body -> paragraphs, split on blank lines"""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(p).strip() for p in value if str(p).strip()]
    return [p.strip() for p in re.split(r"\r?\n[ \t]*\r?\n", str(value)) if p.strip()]


def as_bool(value: Any) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def matches(pattern: str, value: Optional[str]) -> bool:
    return bool(value) and re.match(pattern, value) is not None
