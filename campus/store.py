"""The injectable fixture store: one repository per collection."""
from typing import Dict, Iterable, Optional

from . import fixtures
from .randomness import RandomSource
from .repositories import (
    CertificateRepository, RewardRepository, TransactionRepository, WalletRepository,
)


class FixtureStore:
    """Owns the wallet, certificate, reward and transaction collections plus
    the :class:`~campus.randomness.RandomSource` used to synthesise new
    records.

    Use :meth:`seeded` for the demo data set; pass explicit collections to
    build a store with any other starting state.
    """

    def __init__(self,
                 wallets: Optional[Dict[str, Dict]] = None,
                 certificates: Optional[Iterable[Dict]] = None,
                 rewards: Optional[Iterable[Dict]] = None,
                 transactions: Optional[Iterable[Dict]] = None,
                 randomness: Optional[RandomSource] = None) -> None:
        self.wallets = WalletRepository(wallets)
        self.certificates = CertificateRepository(certificates)
        self.rewards = RewardRepository(rewards)
        self.transactions = TransactionRepository(transactions)
        self.randomness = randomness or RandomSource()

    @classmethod
    def seeded(cls, randomness: Optional[RandomSource] = None) -> 'FixtureStore':
        """Return a store populated with fresh copies of the demo fixtures."""
        return cls(
            wallets=fixtures.seed_wallets(),
            certificates=fixtures.seed_certificates(),
            rewards=fixtures.seed_rewards(),
            transactions=fixtures.seed_transactions(),
            randomness=randomness,
        )
