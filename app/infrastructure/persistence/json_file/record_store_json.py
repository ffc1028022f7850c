import os
import logging
from typing import List

from ....application.ports.record_store import RecordStore, AppointmentRecord
from ..serialization import dump_records, parse_records

logger = logging.getLogger(__name__)


class JsonFileRecordStore(RecordStore):
    def __init__(self, path: str) -> None:
        self.path = path

    def load(self) -> List[AppointmentRecord]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return parse_records(f.read())
        except (OSError, ValueError) as e:
            # Read failures degrade to an empty collection
            logger.error(f"Error reading appointments from {self.path}: {e}")
            return []

    def save(self, records: List[AppointmentRecord]) -> bool:
        try:
            payload = dump_records(records)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(payload)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing appointments to {self.path}: {e}")
            return False

    def ensure_initialized(self) -> bool:
        if os.path.exists(self.path):
            return True
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(dump_records([]))
        except OSError as e:
            logger.error(f"Error creating appointments data file {self.path}: {e}")
            return False
        logger.info(f"Created new appointments data file at {self.path}")
        return True
