"""Business logic for wallet lookup and simulated wallet connection."""
import logging
from typing import Dict

from ..errors import MissingFieldError, NotFoundError
from ..fixtures import NETWORK
from ..repositories.wallet_repository import WalletRepository

logger = logging.getLogger('metaverse.services.wallet')

_NOT_FOUND = dict(message='Wallet address not found in our records',
                  error='Wallet not found')


class WalletService:
    """Read-only wallet access over
    :class:`~campus.repositories.wallet_repository.WalletRepository`.

    Rules
    -----
    * Lookups lowercase the address first, so any casing finds the record.
    * ``connect`` never stores anything: an unknown address gets a freshly
      synthesised zero-balance wallet on every call.
    """

    def __init__(self, repository: WalletRepository) -> None:
        self._repo = repository

    def get(self, address: str) -> Dict:
        wallet = self._repo.find(address)
        if wallet is None:
            raise NotFoundError(**_NOT_FOUND)
        return wallet

    def connect(self, address: str) -> Dict:
        """Return the stored wallet for *address*, or a zero-balance stand-in.

        Raises:
            MissingFieldError: *address* is empty or missing.
        """
        if not address:
            raise MissingFieldError('Wallet address is required',
                                    error='Address required')
        address = str(address)
        wallet = self._repo.find(address)
        if wallet is not None:
            logger.info("Wallet %s connected", wallet['address'])
            return wallet
        logger.info("Unknown wallet %s connected with zero balance", address.lower())
        return {
            'address': address.lower(),
            'balance': '0.0',
            'balanceWei': '0',
            'network': NETWORK,
            'isConnected': True,
        }

    def balance(self, address: str) -> Dict:
        """Return the balance-only projection of the wallet for *address*."""
        wallet = self.get(address)
        return {
            'address': wallet['address'],
            'balance': wallet['balance'],
            'balanceWei': wallet['balanceWei'],
            'symbol': 'ETH',
            'network': wallet['network'],
        }
