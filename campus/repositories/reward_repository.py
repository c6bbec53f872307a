"""Repository for EDU token reward records (ordered, append-only)."""
from typing import Dict, List

from .base import RecordListRepository, same_address


class RewardRepository(RecordListRepository):
    """Append-only list of issued token rewards."""

    def by_student(self, student_address: str) -> List[Dict]:
        return self.filter(lambda r: same_address(r.get('studentAddress'), student_address))

    def amounts(self) -> List[str]:
        return [r.get('amount', '') for r in self.all()]
