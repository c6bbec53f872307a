"""Read-only access to the simulated transaction history."""
from typing import Dict, List, Optional

from ..errors import NotFoundError
from ..repositories.transaction_repository import TransactionRepository


class TransactionService:
    """Filters and looks up transactions.

    Both filters of :meth:`list` are optional and combine with AND.
    """

    def __init__(self, repository: TransactionRepository) -> None:
        self._repo = repository

    def list(self, address: Optional[str] = None,
             tx_type: Optional[str] = None) -> List[Dict]:
        return self._repo.search(address=address, tx_type=tx_type)

    def get(self, tx_hash: str) -> Dict:
        tx = self._repo.find(tx_hash)
        if tx is None:
            raise NotFoundError('Transaction with the specified hash not found',
                                error='Transaction not found')
        return tx
