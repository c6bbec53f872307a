"""Repository base classes used by all concrete repositories."""
import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional


class BaseRepository:
    """Holds one in-memory collection and the lock that guards it.

    Nothing is written to disk: a repository lives exactly as long as the
    :class:`~campus.store.FixtureStore` that owns it.  Sub-classes keep their
    records in ``self.data`` and take ``self._lock`` around every read of a
    mutable collection and every mutation.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._log = logging.getLogger(f'metaverse.repository.{type(self).__name__}')


class RecordListRepository(BaseRepository):
    """An append-only, ordered list of record dicts.

    Records are never updated or removed once appended.  Readers receive a
    snapshot list so that iteration is safe while another request appends.
    """

    def __init__(self, records: Optional[Iterable[Dict]] = None) -> None:
        super().__init__()
        self.data: List[Dict] = list(records or [])

    def all(self) -> List[Dict]:
        with self._lock:
            return list(self.data)

    def count(self) -> int:
        with self._lock:
            return len(self.data)

    def find_by(self, key: str, value) -> Optional[Dict]:
        """Return the first record whose *key* equals *value* exactly, or ``None``."""
        for record in self.all():
            if record.get(key) == value:
                return record
        return None

    def filter(self, predicate: Callable[[Dict], bool]) -> List[Dict]:
        return [r for r in self.all() if predicate(r)]

    def append(self, record: Dict) -> Dict:
        with self._lock:
            self.data.append(record)
        self._log.debug("Appended %s", record.get('id'))
        return record

    def append_built(self, build: Callable[[int], Dict]) -> Dict:
        """Build a record from the current length and append it atomically.

        *build* receives ``len(self.data)`` and runs while the lock is held,
        so a position-derived field (such as a sequential token id) can never
        collide with a concurrent append.
        """
        with self._lock:
            record = build(len(self.data))
            self.data.append(record)
        self._log.debug("Appended %s", record.get('id'))
        return record


def same_address(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive address comparison; ``None`` never matches."""
    if a is None or b is None:
        return False
    return a.lower() == b.lower()
