"""
Farmer Query Pipeline
filter (text, category) -> sort -> paginate, recomputed from scratch on every call

VERSION HISTORY:
1.0.0 - Shared by the dashboard table and the farmers grid
"""
import math
import re
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .constants import (
    ALL_CATEGORIES,
    DEBOUNCE_SECONDS,
    SORT_ASC,
    SORT_CREATED_AT,
    SORT_DESC,
    SORT_FARM_SIZE,
    SORT_KEYS,
    SORT_NAME,
    SUGGESTION_LIMIT,
    TABLE_PAGE_SIZE,
    UNKNOWN_CATEGORY,
)

Farmer = Dict[str, object]

_NUMBER_PREFIX = re.compile(r'^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


@dataclass(frozen=True)
class QueryState:
    search: str = ""
    category: str = ALL_CATEGORIES
    sort_key: str = SORT_CREATED_AT
    sort_dir: str = SORT_DESC
    page: int = 1
    page_size: int = TABLE_PAGE_SIZE

    def __post_init__(self):
        if self.sort_key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {self.sort_key}")
        if self.sort_dir not in (SORT_ASC, SORT_DESC):
            raise ValueError(f"Unknown sort direction: {self.sort_dir}")
        if self.page_size < 1:
            raise ValueError("page_size must be positive")
        if self.page < 1:
            raise ValueError("page must be 1 or more")


@dataclass(frozen=True)
class QueryResult:
    rows: List[Farmer]       # current page
    filtered: List[Farmer]   # every match, sorted
    page: int
    total_pages: int

    @property
    def total(self) -> int:
        return len(self.filtered)


# =====================================================
# FIELD COERCION
# =====================================================

def _text(value) -> str:
    return "" if value is None else str(value)


def parse_size(value) -> float:
    """Leading-number parse of farmSize; anything unparseable is 0"""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return 0.0 if math.isnan(value) else float(value)
    match = _NUMBER_PREFIX.match(_text(value))
    return float(match.group(0)) if match else 0.0


def parse_timestamp(value) -> float:
    """ISO-8601 (trailing Z allowed) to epoch seconds; unparseable is 0"""
    if isinstance(value, datetime):
        dt = value
    else:
        raw = _text(value).strip()
        if not raw:
            return 0.0
        if raw.endswith('Z'):
            raw = raw[:-1] + '+00:00'
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            return 0.0
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


# =====================================================
# PIPELINE STAGES
# =====================================================

def matches_text(farmer: Farmer, search: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    haystack = " ".join(_text(farmer.get(k)) for k in ("name", "farmName", "subcity", "email"))
    return needle in haystack.lower()


def matches_category(farmer: Farmer, category: str) -> bool:
    """Blank types are filed under "Unknown", as farm_types() lists them"""
    return category == ALL_CATEGORIES or (farmer.get("farmType") or UNKNOWN_CATEGORY) == category


def sort_farmers(farmers: Sequence[Farmer], key: str, direction: str) -> List[Farmer]:
    """Stable sort; equal keys keep their input order in both directions"""
    if key == SORT_NAME:
        key_fn = lambda f: _text(f.get("name")).casefold()
    elif key == SORT_FARM_SIZE:
        key_fn = lambda f: parse_size(f.get("farmSize"))
    else:
        key_fn = lambda f: parse_timestamp(f.get("createdAt"))
    return sorted(farmers, key=key_fn, reverse=(direction == SORT_DESC))


def filter_and_sort(farmers: Sequence[Farmer], state: QueryState) -> List[Farmer]:
    matched = [f for f in farmers
               if matches_text(f, state.search) and matches_category(f, state.category)]
    return sort_farmers(matched, state.sort_key, state.sort_dir)


def total_pages(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, count: int, page_size: int) -> int:
    return min(max(1, page), total_pages(count, page_size))


def paginate(rows: Sequence[Farmer], page: int, page_size: int) -> List[Farmer]:
    start = (page - 1) * page_size
    return list(rows[start:start + page_size])


def run(farmers: Sequence[Farmer], state: QueryState) -> QueryResult:
    """Pipeline for a view: the page number is clamped to the filtered count"""
    filtered = filter_and_sort(farmers, state)
    page = clamp_page(state.page, len(filtered), state.page_size)
    return QueryResult(
        rows=paginate(filtered, page, state.page_size),
        filtered=filtered,
        page=page,
        total_pages=total_pages(len(filtered), state.page_size),
    )


def apply(farmers: Sequence[Farmer], state: QueryState) -> List[Farmer]:
    """The ordered page of farmers for `state`, sliced at state.page as given"""
    return paginate(filter_and_sort(farmers, state), state.page, state.page_size)


# =====================================================
# VIEW HELPERS
# =====================================================

def toggle_sort(state: QueryState, key: str) -> QueryState:
    """Same column flips direction; a new column starts descending"""
    if state.sort_key == key:
        return replace(state, sort_dir=SORT_ASC if state.sort_dir == SORT_DESC else SORT_DESC)
    return replace(state, sort_key=key, sort_dir=SORT_DESC)


def farm_types(farmers: Sequence[Farmer]) -> List[str]:
    seen = []
    for farmer in farmers:
        farm_type = farmer.get("farmType") or UNKNOWN_CATEGORY
        if farm_type not in seen:
            seen.append(farm_type)
    return [ALL_CATEGORIES] + seen


def suggestions(farmers: Sequence[Farmer], raw_search: str,
                limit: int = SUGGESTION_LIMIT) -> List[Farmer]:
    """Top matches on name or farm name for the live (undebounced) input"""
    if not raw_search:
        return []
    needle = raw_search.lower()
    hits = [f for f in farmers
            if needle in _text(f.get("name")).lower() or needle in _text(f.get("farmName")).lower()]
    return hits[:limit]


def page_window(page: int, page_size: int, total: int) -> Tuple[int, int]:
    """1-based (first, last) row numbers shown, (0, 0) when empty"""
    if total == 0:
        return 0, 0
    return (page - 1) * page_size + 1, min(page * page_size, total)


def summarize(farmers: Sequence[Farmer]) -> Dict[str, object]:
    by_type: Dict[str, int] = {}
    for farmer in farmers:
        farm_type = _text(farmer.get("farmType"))
        by_type[farm_type] = by_type.get(farm_type, 0) + 1
    return {
        "total_farmers": len(farmers),
        "total_farm_size": sum(parse_size(f.get("farmSize")) for f in farmers),
        "farms_by_type": by_type,
    }


# =====================================================
# DEBOUNCE
# =====================================================

class Debouncer:
    """
    Commits the latest pushed value once `delay` seconds pass without
    another push. Each push cancels the pending commit and restarts it.
    """

    def __init__(self, delay: float = DEBOUNCE_SECONDS,
                 clock: Callable[[], float] = time.monotonic, initial: str = "",
                 on_commit: Optional[Callable[[str], None]] = None):
        self.delay = delay
        self._on_commit = on_commit
        self._clock = clock
        self.committed = initial
        self._pending: Optional[str] = None
        self._deadline: Optional[float] = None

    def push(self, value: str):
        if value == self._pending:
            return
        if self._pending is None and value.strip() == self.committed:
            return
        self._pending = value
        self._deadline = self._clock() + self.delay

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def remaining(self) -> float:
        if self._deadline is None:
            return 0.0
        return max(0.0, self._deadline - self._clock())

    def poll(self) -> str:
        """Commit if the quiet period elapsed; returns the committed value"""
        if self._pending is not None and self._clock() >= self._deadline:
            self.committed = self._pending.strip()
            self._pending = None
            self._deadline = None
            if self._on_commit:
                self._on_commit(self.committed)
        return self.committed
