"""Repository for simulated on-chain transactions (seed set only)."""
from typing import Dict, List, Optional

from .base import RecordListRepository, same_address


class TransactionRepository(RecordListRepository):
    """Fixed list of transactions; no operation appends to it at runtime."""

    def find(self, tx_hash: str) -> Optional[Dict]:
        return self.find_by('hash', tx_hash)

    def search(self, address: Optional[str] = None,
               tx_type: Optional[str] = None) -> List[Dict]:
        """Return transactions matching every supplied filter.

        *address* matches either the ``from`` or the ``to`` side, ignoring
        case; *tx_type* must equal ``type`` exactly.  Falsy filters are
        ignored.
        """
        def matches(tx: Dict) -> bool:
            if address and not (same_address(tx.get('from'), address)
                                or same_address(tx.get('to'), address)):
                return False
            if tx_type and tx.get('type') != tx_type:
                return False
            return True

        return self.filter(matches)
