import json
import logging
from typing import List

from ...application.ports.record_store import AppointmentRecord

logger = logging.getLogger(__name__)


def dump_records(records: List[AppointmentRecord]) -> str:
    return json.dumps([r.to_dict() for r in records], indent=2)


def parse_records(raw: str) -> List[AppointmentRecord]:
    """Decode a persisted document into records.

    Raises ValueError when the document is not a JSON array. Entries that
    cannot be mapped onto AppointmentRecord are skipped with a warning.
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of appointments, got {type(data).__name__}")
    records: List[AppointmentRecord] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning(f"Skipping appointment entry {index}: not an object")
            continue
        try:
            records.append(AppointmentRecord.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping appointment entry {index}: {e}")
    return records
