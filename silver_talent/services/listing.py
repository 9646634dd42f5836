# silver_talent/services/listing.py
import math
import re
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from silver_talent.config import Config
from silver_talent.database.mongodb import serialize_doc

logger = logging.getLogger(__name__)

JOB_SEARCH_FIELDS = ("title", "company")
POST_SEARCH_FIELDS = ("title", "excerpt", "content", "tags")

ALL_CATEGORIES = "All Categories"
ALL_LOCATIONS = "All Locations"
ALL_TYPES = "All Types"
ALL_POST_CATEGORIES = "all-categories"


@dataclass
class ListingQuery:
    filter: Dict[str, Any] = field(default_factory=dict)
    sort: List[Tuple[str, int]] = field(default_factory=list)
    page: int = 1
    limit: int = Config.DEFAULT_PAGE_LIMIT
    # Set when the filter can match nothing (e.g. an unknown category slug)
    empty: bool = False

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def is_admin_view(value: Any) -> bool:
    return str(value).strip().lower() == "true"


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_page_params(page: Any, limit: Any, admin: bool = False,
                      default_limit: int = Config.DEFAULT_PAGE_LIMIT) -> Tuple[int, int]:
    """Admin callers always get the elevated page size"""
    effective_page = _positive_int(page, 1)
    effective_limit = Config.ADMIN_PAGE_LIMIT if admin else _positive_int(limit, default_limit)
    return effective_page, effective_limit


def contains(term: str) -> Dict[str, str]:
    """Case-insensitive substring match"""
    return {"$regex": re.escape(term.strip()), "$options": "i"}


def parse_sort(sort: Optional[str], default: str) -> List[Tuple[str, int]]:
    """'-appliedDate' -> [("appliedDate", -1)]; unknown shapes fall back to default"""
    sort_key = (sort or default).strip()
    if not re.fullmatch(r"-?[A-Za-z_]+", sort_key):
        sort_key = default
    if sort_key.startswith("-"):
        return [(sort_key[1:], DESCENDING), ("_id", DESCENDING)]
    return [(sort_key, ASCENDING), ("_id", ASCENDING)]


def build_job_listing(q: Optional[str] = None, category: Optional[str] = None,
                      location: Optional[str] = None, type: Optional[str] = None,
                      page: Any = 1, limit: Any = None, admin_view: Any = None) -> ListingQuery:
    """Jobs are always public; admin only changes the page size"""
    query: Dict[str, Any] = {}
    if q and q.strip():
        query["$or"] = [{name: contains(q)} for name in JOB_SEARCH_FIELDS]
    if category and category != ALL_CATEGORIES:
        query["category"] = category
    if location and location != ALL_LOCATIONS:
        query["location"] = contains(location)
    if type and type != ALL_TYPES:
        query["type"] = type

    effective_page, effective_limit = parse_page_params(page, limit, is_admin_view(admin_view))
    return ListingQuery(
        filter=query,
        sort=[("createdAt", DESCENDING), ("_id", DESCENDING)],
        page=effective_page,
        limit=effective_limit,
    )


def build_post_listing(categories, category: Optional[str] = None, tag: Optional[str] = None,
                       search: Optional[str] = None, page: Any = 1, limit: Any = None,
                       admin_view: Any = None) -> ListingQuery:
    """
    Public callers only ever see published posts, newest publication first.
    Admin callers see everything, newest creation first. `category` is a
    category slug and is resolved against the categories collection.
    """
    admin = is_admin_view(admin_view)
    query: Dict[str, Any] = {}
    if not admin:
        query["isPublished"] = True

    effective_page, effective_limit = parse_page_params(page, limit, admin)
    listing = ListingQuery(filter=query, page=effective_page, limit=effective_limit)

    if category and category != ALL_POST_CATEGORIES:
        category_doc = categories.find_one({"slug": category}, {"_id": 1})
        if not category_doc:
            listing.empty = True
            return listing
        query["category"] = category_doc["_id"]
    if tag and tag.strip():
        query["tags"] = contains(tag)
    if search and search.strip():
        query["$or"] = [{name: contains(search)} for name in POST_SEARCH_FIELDS]

    if admin:
        listing.sort = [("createdAt", DESCENDING), ("_id", DESCENDING)]
    else:
        listing.sort = [("publishDate", DESCENDING), ("_id", DESCENDING)]
    return listing


def paginate(collection, listing: ListingQuery, items_key: str, transform=None) -> Dict[str, Any]:
    """
    Run the page query and a separate count over the same filter.
    Returns {items, <items_key>, totalPages, currentPage, totalCount}.
    """
    if listing.empty:
        items: List[Dict] = []
        total = 0
    else:
        cursor = collection.find(listing.filter)
        if listing.sort:
            cursor = cursor.sort(listing.sort)
        items = list(cursor.skip(listing.skip).limit(listing.limit))
        total = collection.count_documents(listing.filter)

    if transform is not None:
        items = [transform(item) for item in items]
    items = serialize_doc(items)
    logger.debug(f"{collection.name}: page={listing.page} limit={listing.limit} fetched={len(items)} total={total}")
    return {
        "items": items,
        items_key: items,
        "totalPages": math.ceil(total / listing.limit) if listing.limit else 0,
        "currentPage": listing.page,
        "totalCount": total,
    }
