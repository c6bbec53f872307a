"""Repository for wallets ({lowercased address: wallet_dict})."""
from typing import Dict, List, Optional

from .base import BaseRepository


class WalletRepository(BaseRepository):
    """Keeps wallet records keyed by lowercased address.

    Schema::

        {
            "<address>": {
                "address":     "<lowercase hex>",
                "balance":     "<decimal str>",
                "balanceWei":  "<integer str>",
                "network":     "ethereum",
                "isConnected": <bool>
            }
        }
    """

    def __init__(self, wallets: Optional[Dict[str, Dict]] = None) -> None:
        super().__init__()
        self.data: Dict[str, Dict] = {}
        for wallet in (wallets or {}).values():
            self.upsert(wallet)

    def find(self, address: str) -> Optional[Dict]:
        """Return the wallet for *address* (any case), or ``None``."""
        if not address:
            return None
        with self._lock:
            return self.data.get(address.lower())

    def upsert(self, wallet: Dict) -> None:
        with self._lock:
            self.data[wallet['address'].lower()] = wallet

    def all(self) -> List[Dict]:
        with self._lock:
            return list(self.data.values())

    def count(self) -> int:
        with self._lock:
            return len(self.data)
