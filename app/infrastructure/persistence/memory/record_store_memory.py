from typing import List, Optional

from ....application.ports.record_store import RecordStore, AppointmentRecord
from ..serialization import dump_records, parse_records


class InMemoryRecordStore(RecordStore):
    """Keeps the serialized document in memory instead of on disk.

    The document is stored as JSON text so every load hands back fresh
    objects, the same as re-reading a file.
    """

    def __init__(self, records: Optional[List[AppointmentRecord]] = None) -> None:
        self._document: Optional[str] = dump_records(records) if records is not None else None

    @property
    def document(self) -> Optional[str]:
        return self._document

    def load(self) -> List[AppointmentRecord]:
        if self._document is None:
            return []
        return parse_records(self._document)

    def save(self, records: List[AppointmentRecord]) -> bool:
        self._document = dump_records(records)
        return True

    def ensure_initialized(self) -> bool:
        if self._document is None:
            self._document = dump_records([])
        return True
