"""Aggregate statistics recomputed from the live fixture collections."""
import re
from typing import Dict, Iterable

from ..fixtures import TOTAL_TOKEN_SUPPLY

_INT_PREFIX = re.compile(r'^\s*([+-]?\d+)')


def parse_int_prefix(value) -> int:
    """Parse the leading integer of *value* the way ``parseInt`` does.

    ``"150"`` → 150, ``"12.5"`` → 12, ``" 7 EDU"`` → 7.  A value with no
    leading digits counts as 0.
    """
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else 0


def sum_amounts(amounts: Iterable) -> int:
    return sum(parse_int_prefix(a) for a in amounts)


class StatsService:
    """Re-scans the store on every call; nothing is cached."""

    def __init__(self, store) -> None:
        """
        Args:
            store: A :class:`~campus.store.FixtureStore`.
        """
        self._store = store

    def get(self) -> Dict:
        wallet_count = self._store.wallets.count()
        certificate_count = self._store.certificates.count()
        return {
            'totalCertificates': certificate_count,
            'totalRewards': self._store.rewards.count(),
            'totalTransactions': self._store.transactions.count(),
            'totalWallets': wallet_count,
            'totalTokenSupply': TOTAL_TOKEN_SUPPLY,
            'activeStudents': wallet_count,
            'coursesCompleted': certificate_count,
            'tokensDistributed': sum_amounts(self._store.rewards.amounts()),
        }
