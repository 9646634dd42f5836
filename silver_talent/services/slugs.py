# silver_talent/services/slugs.py
import re
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"[\s_]+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9-]+")
_HYPHENS_RE = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """
    Lowercase, turn whitespace runs into a single hyphen and drop anything
    outside [a-z0-9-]. Underscores count as whitespace ("snake_case" ->
    "snake-case") so every slug stays within [a-z0-9-]. Runs of hyphens
    collapse to one and the result never starts or ends with a hyphen.
    May return "" (e.g. for "!!!").
    """
    slug = _WHITESPACE_RE.sub("-", (text or "").strip().lower())
    slug = _DISALLOWED_RE.sub("", slug)
    slug = _HYPHENS_RE.sub("-", slug)
    return slug.strip("-")


def resolve_unique_slug(collection, name: str, exclude_id: Any = None, fallback: str = "item") -> str:
    """
    Return slugify(name), or the first of `<base>-1`, `<base>-2`, ... not used
    by another document of the collection. `exclude_id` is the document being
    saved, so re-saving it under its own slug does not count as a collision.

    The probe is not race free; the unique index on `slug` is the guarantee.
    """
    base = slugify(name) or fallback
    candidate = base
    count = 1
    while collection.find_one({"slug": candidate, "_id": {"$ne": exclude_id}}, {"_id": 1}):
        candidate = f"{base}-{count}"
        count += 1
    if candidate != base:
        logger.info(f"Slug '{base}' taken in {collection.name}, using '{candidate}'")
    return candidate


def assign_slug(collection, doc: Dict, source_field: str, previous: Optional[Dict] = None,
                fallback: str = "item") -> Dict:
    """
    Set doc["slug"] before a save. The slug is only (re)computed when the
    source field changed compared to `previous` or no slug is set yet.
    """
    current_slug = doc.get("slug") or (previous or {}).get("slug")
    changed = previous is None or previous.get(source_field) != doc.get(source_field)
    if changed or not current_slug:
        doc["slug"] = resolve_unique_slug(
            collection, doc.get(source_field, ""), exclude_id=doc.get("_id"), fallback=fallback
        )
    else:
        doc["slug"] = current_slug
    return doc
