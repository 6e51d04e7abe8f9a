"""
CSV export of the currently filtered farmer view
"""
import csv
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence

import pandas as pd

from .constants import EXPORT_COLUMNS, NO_DATA_NOTICE

logger = logging.getLogger(__name__)

CSV_MIME = "text/csv"


@dataclass(frozen=True)
class ExportResult:
    data: Optional[bytes]
    file_name: Optional[str]
    notice: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def export_file_name(today: date) -> str:
    return f"farmers_{today.isoformat()}.csv"


def farmers_to_csv(rows: Sequence[Dict]) -> str:
    """Every field quoted, embedded quotes doubled, header row first"""
    keys = [key for key, _ in EXPORT_COLUMNS]
    df = pd.DataFrame(
        [["" if row.get(key) is None else str(row.get(key)) for key in keys] for row in rows],
        columns=[label for _, label in EXPORT_COLUMNS],
    )
    return df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n").rstrip("\n")


def export_csv(rows: List[Dict], today: Callable[[], date] = date.today) -> ExportResult:
    """Serialize `rows` for download; an empty view yields a notice instead"""
    if not rows:
        return ExportResult(data=None, file_name=None, notice=NO_DATA_NOTICE)

    content = farmers_to_csv(rows)
    file_name = export_file_name(today())
    logger.debug("Prepared %d farmers for %s", len(rows), file_name)
    return ExportResult(data=content.encode("utf-8"), file_name=file_name)


def log_download(count: int, file_name: str):
    """Download-button callback; runs only when the user actually downloads"""
    logger.info("Exported %d farmers to %s", count, file_name)
