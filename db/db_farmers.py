"""
Farmer Storage Operations
Flat-file and Supabase backends behind one GET/POST contract

VERSION HISTORY:
1.1.0 - Added SupabaseFarmerStore (storage.backend = "supabase")
      - createdAt is stamped at write time when the payload lacks it
1.0.0 - JsonFarmerStore: read-entire-file, append, write-entire-file
      KNOWN LIMITATION:
      - No locking. Two registrations that read the file at the same
        time both append to their own copy; the last writer wins.
"""
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Tuple

from config.database import Database

logger = logging.getLogger(__name__)

Response = Tuple[int, Any]

SUCCESS_MESSAGE = "Farmer registered successfully"
FAILURE_MESSAGE = "Failed to save farmer data"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class JsonFarmerStore:
    """
    Farmer collection kept as a pretty-printed JSON array on disk
    get()  -> (200, [records])   missing/unreadable file reads as []
    post() -> (201, {message}) | (500, {error})
    """

    def __init__(self, path: str, clock: Callable[[], str] = utc_now_iso):
        self.path = path
        self._clock = clock

    def get(self) -> Response:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                farmers = json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning("Farmer store %s unreadable, serving empty list: %s", self.path, e)
            return 200, []
        return 200, farmers

    def post(self, record: Dict) -> Response:
        if not isinstance(record, dict):
            logger.error("Rejected farmer payload of type %s", type(record).__name__)
            return 500, {"error": FAILURE_MESSAGE}

        try:
            farmers = self._read_or_init()
            new_farmer = dict(record)
            new_farmer.setdefault("createdAt", self._clock())
            farmers.append(new_farmer)

            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump(farmers, fh, indent=2, ensure_ascii=False)
        except (OSError, ValueError) as e:
            logger.error("Failed to write farmer store %s: %s", self.path, e)
            return 500, {"error": FAILURE_MESSAGE}

        logger.info("Stored farmer %s (%d total)", new_farmer.get("email", "?"), len(farmers))
        return 201, {"message": SUCCESS_MESSAGE}

    def _read_or_init(self) -> List[Dict]:
        """Read the whole store, creating an empty one on first write"""
        if not os.path.exists(self.path):
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as fh:
                fh.write("[]")
            return []

        with open(self.path, "r", encoding="utf-8") as fh:
            farmers = json.load(fh)
        if not isinstance(farmers, list):
            raise ValueError("farmer store does not hold a JSON array")
        return farmers


class SupabaseFarmerStore:
    """Same contract as JsonFarmerStore over the `farmers` table"""

    TABLE = "farmers"

    def __init__(self, client_factory: Callable = Database.get_client,
                 clock: Callable[[], str] = utc_now_iso):
        self._client_factory = client_factory
        self._clock = clock

    def get(self) -> Response:
        try:
            db = self._client_factory()
            response = db.table(self.TABLE).select('*').execute()
            return 200, response.data if response.data else []
        except Exception as e:
            logger.error("Error fetching farmers from Supabase: %s", e)
            return 500, {"error": f"Error fetching farmers: {e}"}

    def post(self, record: Dict) -> Response:
        if not isinstance(record, dict):
            return 500, {"error": FAILURE_MESSAGE}
        try:
            db = self._client_factory()
            new_farmer = dict(record)
            new_farmer.setdefault("createdAt", self._clock())
            db.table(self.TABLE).insert(new_farmer).execute()
        except Exception as e:
            logger.error("Error saving farmer to Supabase: %s", e)
            return 500, {"error": FAILURE_MESSAGE}
        return 201, {"message": SUCCESS_MESSAGE}


def build_store(backend: str, data_file: str):
    """Pick the storage backend named in settings"""
    if backend == "supabase":
        return SupabaseFarmerStore()
    if backend != "json":
        logger.warning("Unknown storage backend %r, using json", backend)
    return JsonFarmerStore(data_file)
