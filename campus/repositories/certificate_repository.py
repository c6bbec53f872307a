"""Repository for NFT certificate records (ordered, append-only)."""
from typing import Dict, List, Optional

from .base import RecordListRepository, same_address


class CertificateRepository(RecordListRepository):
    """Append-only list of certificates in mint order.

    ``tokenId`` values are derived from the list length at append time, see
    :meth:`RecordListRepository.append_built`.
    """

    def find(self, cert_id: str) -> Optional[Dict]:
        return self.find_by('id', cert_id)

    def by_student(self, student_address: str) -> List[Dict]:
        return self.filter(lambda c: same_address(c.get('studentAddress'), student_address))
