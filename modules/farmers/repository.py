"""
Farmer Repository
Client-side access to the farmer store: fetch, normalize, register
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List

from .constants import FARMER_FIELDS

logger = logging.getLogger(__name__)


class FarmerError(Exception):
    """Base class for farmer data errors shown to the user"""


class FarmerLoadError(FarmerError):
    pass


class FarmerSaveError(FarmerError):
    pass


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def normalize(record: Dict, fetched_at: str) -> Dict:
    """Legacy rows without createdAt are shown as registered at fetch time"""
    farmer = dict(record)
    if farmer.get('createdAt') is None:
        farmer['createdAt'] = fetched_at
    return farmer


class FarmerRepository:
    """
    Wraps a store exposing get() -> (status, body) and post(record) -> (status, body)

    `farmers` holds the last successfully loaded list; a failed refresh
    leaves it untouched and records `error`.
    """

    def __init__(self, store, clock: Callable[[], str] = _now_iso):
        self.store = store
        self._clock = clock
        self.farmers: List[Dict] = []
        self.error: str = ""
        self.loaded = False

    def list(self) -> List[Dict]:
        try:
            status, body = self.store.get()
        except Exception as e:
            raise FarmerLoadError(f"Error fetching farmers: {e}") from e

        if not 200 <= status < 300:
            raise FarmerLoadError(f"Failed to fetch ({status})")
        if not isinstance(body, list):
            raise FarmerLoadError("Error fetching farmers: unexpected response")

        fetched_at = self._clock()
        return [normalize(record, fetched_at) for record in body if isinstance(record, dict)]

    def refresh(self) -> bool:
        """Reload into `farmers`; no retry on failure"""
        try:
            self.farmers = self.list()
        except FarmerLoadError as e:
            self.error = str(e)
            logger.error("Farmer refresh failed: %s", e)
            return False
        self.error = ""
        self.loaded = True
        logger.debug("Loaded %d farmers", len(self.farmers))
        return True

    def register(self, form: Dict) -> str:
        """POST one farmer; returns the store's success message"""
        record = {field: str(form.get(field, '')).strip() for field in FARMER_FIELDS}
        try:
            status, body = self.store.post(record)
        except Exception as e:
            raise FarmerSaveError('Something went wrong. Please try again.') from e

        if not 200 <= status < 300:
            logger.error("Farmer registration rejected (%s): %s", status, body)
            raise FarmerSaveError('Something went wrong. Please try again.')
        return (body or {}).get('message', '')
