"""Business logic for EDU token rewards."""
import logging
from typing import Dict, List, Optional

from ..errors import require_fields
from ..fixtures import TOKEN_SYMBOL
from ..randomness import RandomSource
from ..repositories.reward_repository import RewardRepository

logger = logging.getLogger('metaverse.services.reward')


class RewardService:
    """Lists and issues token rewards via
    :class:`~campus.repositories.reward_repository.RewardRepository`.

    Rules
    -----
    * ``studentAddress``, ``amount`` and ``reason`` are required.
    * ``amount`` is kept as the string the caller sent; it is never turned
      into a float.
    * ``tokenSymbol`` is always ``"EDU"`` and ``status`` always
      ``"completed"``, whatever the request says.
    """

    def __init__(self, repository: RewardRepository,
                 randomness: RandomSource) -> None:
        self._repo = repository
        self._random = randomness

    def list(self, student_address: Optional[str] = None) -> List[Dict]:
        if student_address:
            return self._repo.by_student(student_address)
        return self._repo.all()

    def issue(self, payload: Dict) -> Dict:
        """Append a reward built from an issue request body and return it."""
        require_fields(payload, 'studentAddress', 'amount', 'reason')
        reward = {
            'id': self._random.short_id('reward'),
            'studentAddress': str(payload['studentAddress']).lower(),
            'amount': str(payload['amount']),
            'tokenSymbol': TOKEN_SYMBOL,
            'reason': payload['reason'],
            'timestamp': self._random.timestamp(),
            'transactionHash': self._random.tx_hash(),
            'status': 'completed',
        }
        for optional in ('courseName', 'achievementName'):
            if payload.get(optional) is not None:
                reward[optional] = payload[optional]
        self._repo.append(reward)
        logger.info("Issued %s %s to %s (%s)", reward['amount'], TOKEN_SYMBOL,
                    reward['studentAddress'], reward['reason'])
        return reward
