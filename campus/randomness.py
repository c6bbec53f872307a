"""Injectable source of random identifiers, hashes and timestamps.

Every generated value in the fixture services goes through a
:class:`RandomSource` so that tests can pass a seeded instance (and a fixed
clock) and assert exact outputs.
"""
import datetime
import random
import uuid
from typing import Callable, Optional

BASE_BLOCK_NUMBER = 12345678
BLOCK_JITTER = 1000


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class RandomSource:
    """Wraps a :class:`random.Random` and a clock callable.

    Args:
        seed:  Optional seed; ``None`` seeds from system entropy.
        clock: Zero-argument callable returning an aware ``datetime``.
    """

    def __init__(self, seed: Optional[int] = None,
                 clock: Callable[[], datetime.datetime] = _utcnow) -> None:
        self._rng = random.Random(seed)
        self._clock = clock

    def short_id(self, prefix: str) -> str:
        """Return ``<prefix>-<8 hex chars>`` taken from a random UUID4."""
        value = uuid.UUID(int=self._rng.getrandbits(128), version=4)
        return f'{prefix}-{value.hex[:8]}'

    def tx_hash(self) -> str:
        """Return a ``0x``-prefixed 64-digit hex string."""
        return '0x%064x' % self._rng.getrandbits(256)

    def block_number(self) -> int:
        """Return the base block number plus a jitter in ``[0, 1000)``."""
        return BASE_BLOCK_NUMBER + self._rng.randrange(BLOCK_JITTER)

    def now(self) -> datetime.datetime:
        return self._clock()

    def timestamp(self) -> str:
        """Current time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
        now = self.now().astimezone(datetime.timezone.utc)
        return now.strftime('%Y-%m-%dT%H:%M:%S.') + f'{now.microsecond // 1000:03d}Z'

    def today(self) -> str:
        """Current UTC date as ``YYYY-MM-DD``."""
        return self.now().astimezone(datetime.timezone.utc).strftime('%Y-%m-%d')
