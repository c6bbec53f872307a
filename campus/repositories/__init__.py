"""Repository package: expose all concrete repositories from one import."""
from .wallet_repository import WalletRepository
from .certificate_repository import CertificateRepository
from .reward_repository import RewardRepository
from .transaction_repository import TransactionRepository

__all__ = [
    'WalletRepository',
    'CertificateRepository',
    'RewardRepository',
    'TransactionRepository',
]
