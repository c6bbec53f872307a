"""Services package: expose all concrete services from one import."""
from .wallet_service import WalletService
from .certificate_service import CertificateService
from .reward_service import RewardService
from .transaction_service import TransactionService
from .verification_service import VerificationService
from .stats_service import StatsService
from .gamification_service import GamificationService

__all__ = [
    'WalletService',
    'CertificateService',
    'RewardService',
    'TransactionService',
    'VerificationService',
    'StatsService',
    'GamificationService',
]
