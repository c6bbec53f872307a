"""Business logic for listing and minting NFT course certificates."""
import logging
import re
from typing import Dict, List, Optional

from ..errors import NotFoundError, require_fields
from ..fixtures import CERTIFICATE_CONTRACT
from ..randomness import RandomSource
from ..repositories.certificate_repository import CertificateRepository

logger = logging.getLogger('metaverse.services.certificate')

IMAGE_BASE_URL = 'https://metaverse-uni.com/certificates'
DEFAULT_CREDITS = '3'


def image_slug(course_name: str) -> str:
    """``"Intro to  Web3"`` → ``"intro-to-web3"``."""
    return re.sub(r'\s+', '-', course_name.lower())


class CertificateService:
    """Lists and mints certificates, delegating storage to
    :class:`~campus.repositories.certificate_repository.CertificateRepository`.

    Rules
    -----
    * ``studentAddress``, ``courseName`` and ``grade`` are required for a
      mint; a rejected mint leaves the list untouched.
    * ``tokenId`` is one more than the number of certificates before the
      mint.  Minting is not idempotent.
    * ``credits`` defaults to ``"3"`` when absent.
    """

    def __init__(self, repository: CertificateRepository,
                 randomness: RandomSource) -> None:
        self._repo = repository
        self._random = randomness

    def list(self, student_address: Optional[str] = None) -> List[Dict]:
        """Return every certificate, or only those owned by *student_address*."""
        if student_address:
            return self._repo.by_student(student_address)
        return self._repo.all()

    def get(self, cert_id: str) -> Dict:
        certificate = self._repo.find(cert_id)
        if certificate is None:
            raise NotFoundError('Certificate with the specified ID not found',
                                error='Certificate not found')
        return certificate

    def mint(self, payload: Dict) -> Dict:
        """Create and append a certificate from a mint request body.

        Args:
            payload: Request dict with ``studentAddress``, ``courseName``,
                     ``grade`` and optionally ``credits``.

        Returns:
            The new certificate record.

        Raises:
            MissingFieldError: a required field is missing or empty.
        """
        require_fields(payload, 'studentAddress', 'courseName', 'grade')
        student = str(payload['studentAddress']).lower()
        course = str(payload['courseName'])
        grade = payload['grade']
        credits = payload.get('credits') or DEFAULT_CREDITS
        today = self._random.today()
        cert_id = self._random.short_id('cert')
        tx_hash = self._random.tx_hash()
        block = self._random.block_number()

        def build(position: int) -> Dict:
            return {
                'id': cert_id,
                'tokenId': str(position + 1),
                'contractAddress': CERTIFICATE_CONTRACT,
                'studentAddress': student,
                'courseName': course,
                'completionDate': today,
                'grade': grade,
                'metadata': {
                    'name': f'{course} Certificate',
                    'description': f'Certificate of completion for {course} course',
                    'image': f'{IMAGE_BASE_URL}/{image_slug(course)}.png',
                    'attributes': [
                        {'trait_type': 'Course', 'value': course},
                        {'trait_type': 'Grade', 'value': grade},
                        {'trait_type': 'Completion Date', 'value': today},
                        {'trait_type': 'Credits', 'value': credits},
                    ],
                },
                'transactionHash': tx_hash,
                'blockNumber': block,
            }

        certificate = self._repo.append_built(build)
        logger.info("Minted certificate %s (token %s) for %s",
                    certificate['id'], certificate['tokenId'], student)
        return certificate
