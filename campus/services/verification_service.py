"""Simulated on-chain verification receipts."""
import logging
from typing import Any, Dict

from ..errors import require_fields
from ..fixtures import VERIFICATION_CONTRACT
from ..randomness import RandomSource

logger = logging.getLogger('metaverse.services.verification')


class VerificationService:
    """Builds a verification receipt for any ``{type, data}`` request.

    No check is made against ``data``: every well-formed request is reported
    as verified, and the receipt is returned without being stored.
    """

    def __init__(self, randomness: RandomSource) -> None:
        self._random = randomness

    def verify(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        require_fields(payload, 'type', 'data')
        receipt = {
            'id': self._random.short_id('verify'),
            'type': payload['type'],
            'data': payload['data'],
            'verified': True,
            'timestamp': self._random.timestamp(),
            'blockNumber': self._random.block_number(),
            'transactionHash': self._random.tx_hash(),
            'verificationDetails': {
                'contractAddress': VERIFICATION_CONTRACT,
                'method': 'verify',
                'gasUsed': '50000',
                'gasPrice': '20000000000',
            },
        }
        logger.info("Verification %s issued for type %s", receipt['id'], receipt['type'])
        return receipt
