"""Seed records loaded into every new :class:`~campus.store.FixtureStore`.

The values are the sample wallets, certificates, rewards and transactions the
demo front end expects to find on first start.  Callers always receive deep
copies, so mutating a store never alters these constants.
"""
import copy
from typing import Dict, List

CERTIFICATE_CONTRACT = '0xCertificateContract123456789'
VERIFICATION_CONTRACT = '0xVerificationContract123456789'
ZERO_ADDRESS = '0x0000000000000000000000000000000000000000'
TOKEN_SYMBOL = 'EDU'
TOTAL_TOKEN_SUPPLY = '1000000'
NETWORK = 'ethereum'

ALICE = '0x1234567890123456789012345678901234567890'
BOB = '0xabcdefabcdefabcdefabcdefabcdefabcdefabcd'

_WALLETS: Dict[str, Dict] = {
    ALICE: {
        'address': ALICE,
        'balance': '2.5',
        'balanceWei': '2500000000000000000',
        'network': NETWORK,
        'isConnected': True,
    },
    BOB: {
        'address': BOB,
        'balance': '0.8',
        'balanceWei': '800000000000000000',
        'network': NETWORK,
        'isConnected': True,
    },
}

_CERTIFICATES: List[Dict] = [
    {
        'id': 'cert-001',
        'tokenId': '1',
        'contractAddress': CERTIFICATE_CONTRACT,
        'studentAddress': ALICE,
        'courseName': 'Advanced Blockchain Development',
        'completionDate': '2024-01-15',
        'grade': 'A+',
        'metadata': {
            'name': 'Blockchain Developer Certificate',
            'description': 'Certificate of completion for Advanced Blockchain Development course',
            'image': 'https://metaverse-uni.com/certificates/blockchain-dev.png',
            'attributes': [
                {'trait_type': 'Course', 'value': 'Advanced Blockchain Development'},
                {'trait_type': 'Grade', 'value': 'A+'},
                {'trait_type': 'Completion Date', 'value': '2024-01-15'},
                {'trait_type': 'Credits', 'value': '3'},
            ],
        },
        'transactionHash': '0xabc123def456789012345678901234567890123456789012345678901234567890',
        'blockNumber': 12345678,
    },
    {
        'id': 'cert-002',
        'tokenId': '2',
        'contractAddress': CERTIFICATE_CONTRACT,
        'studentAddress': BOB,
        'courseName': 'Metaverse Architecture',
        'completionDate': '2024-01-20',
        'grade': 'A',
        'metadata': {
            'name': 'Metaverse Architect Certificate',
            'description': 'Certificate of completion for Metaverse Architecture course',
            'image': 'https://metaverse-uni.com/certificates/metaverse-arch.png',
            'attributes': [
                {'trait_type': 'Course', 'value': 'Metaverse Architecture'},
                {'trait_type': 'Grade', 'value': 'A'},
                {'trait_type': 'Completion Date', 'value': '2024-01-20'},
                {'trait_type': 'Credits', 'value': '4'},
            ],
        },
        'transactionHash': '0xdef456abc789012345678901234567890123456789012345678901234567890123',
        'blockNumber': 12345680,
    },
]

_REWARDS: List[Dict] = [
    {
        'id': 'reward-001',
        'studentAddress': ALICE,
        'amount': '100',
        'tokenSymbol': TOKEN_SYMBOL,
        'reason': 'Course Completion',
        'courseName': 'Advanced Blockchain Development',
        'timestamp': '2024-01-15T10:30:00Z',
        'transactionHash': '0xreward123456789012345678901234567890123456789012345678901234567890',
        'status': 'completed',
    },
    {
        'id': 'reward-002',
        'studentAddress': ALICE,
        'amount': '50',
        'tokenSymbol': TOKEN_SYMBOL,
        'reason': 'Achievement Unlocked',
        'achievementName': 'Perfect Score',
        'timestamp': '2024-01-16T14:20:00Z',
        'transactionHash': '0xreward456789012345678901234567890123456789012345678901234567890123',
        'status': 'completed',
    },
]

_TRANSACTIONS: List[Dict] = [
    {
        'id': 'tx-001',
        'hash': '0xabc123def456789012345678901234567890123456789012345678901234567890',
        'from': ALICE,
        'to': CERTIFICATE_CONTRACT,
        'value': '0',
        'gasUsed': '150000',
        'gasPrice': '20000000000',
        'timestamp': '2024-01-15T10:30:00Z',
        'type': 'certificate_mint',
        'status': 'confirmed',
        'blockNumber': 12345678,
    },
    {
        'id': 'tx-002',
        'hash': '0xreward123456789012345678901234567890123456789012345678901234567890',
        'from': ZERO_ADDRESS,
        'to': ALICE,
        'value': '100000000000000000000',
        'gasUsed': '21000',
        'gasPrice': '20000000000',
        'timestamp': '2024-01-15T10:30:00Z',
        'type': 'token_reward',
        'status': 'confirmed',
        'blockNumber': 12345679,
    },
]


def seed_wallets() -> Dict[str, Dict]:
    return copy.deepcopy(_WALLETS)


def seed_certificates() -> List[Dict]:
    return copy.deepcopy(_CERTIFICATES)


def seed_rewards() -> List[Dict]:
    return copy.deepcopy(_REWARDS)


def seed_transactions() -> List[Dict]:
    return copy.deepcopy(_TRANSACTIONS)
