#!/usr/bin/env python3
"""
Tests for the Flask routes in chain_api.py.

Run with:
    python -m pytest tests/test_chain_api.py
"""
import datetime
import json
import os
import sys
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import chain_api
from campus import fixtures
from campus.randomness import RandomSource
from campus.store import FixtureStore

ALICE = fixtures.ALICE
BOB = fixtures.BOB
UNKNOWN = '0x9999999999999999999999999999999999999999'
FIXED_NOW = datetime.datetime(2025, 3, 14, 12, 0, 0, tzinfo=datetime.timezone.utc)
TEST_CONFIG = {'frontend_url': 'http://localhost:5173'}


class ChainAPITestCase(unittest.TestCase):
    """Fresh app and seeded store per test."""

    def setUp(self):
        self.store = FixtureStore.seeded(RandomSource(seed=11, clock=lambda: FIXED_NOW))
        self.app = chain_api.create_app(store=self.store, config=TEST_CONFIG)
        self.app.config['TESTING'] = True
        self.client = self.app.test_client()

    def _get(self, path):
        resp = self.client.get(path)
        return resp, json.loads(resp.data)

    def _post(self, path, body):
        resp = self.client.post(path, json=body)
        return resp, json.loads(resp.data)


# ===========================================================================
# Health / docs / routing
# ===========================================================================

class TestHealthAndRouting(ChainAPITestCase):

    def test_health(self):
        resp, data = self._get('/health')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(data['status'], 'healthy')
        self.assertEqual(data['service'], 'ethereum-microservice')
        self.assertEqual(data['version'], '1.0.0')
        self.assertIn('timestamp', data)

    def test_unknown_route_returns_generic_not_found(self):
        resp, data = self._get('/api/nothing-here')
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(data, {'error': 'Not found',
                                'message': 'The requested endpoint does not exist'})

    def test_wrong_method_returns_generic_not_found(self):
        resp = self.client.delete('/api/stats')
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(json.loads(resp.data)['error'], 'Not found')

    def test_health_timestamp_is_iso_with_millis_and_z(self):
        _, data = self._get('/health')
        self.assertEqual(data['timestamp'], '2025-03-14T12:00:00.000Z')

    def test_cors_headers(self):
        resp = self.client.get('/health', headers={'Origin': 'http://localhost:5173'})
        self.assertEqual(resp.headers['Access-Control-Allow-Origin'], 'http://localhost:5173')
        self.assertEqual(resp.headers['Access-Control-Allow-Credentials'], 'true')

    def test_cors_preflight_for_json_post(self):
        resp = self.client.options('/api/certificates/mint', headers={
            'Origin': 'http://localhost:5173',
            'Access-Control-Request-Method': 'POST',
            'Access-Control-Request-Headers': 'content-type',
        })
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers['Access-Control-Allow-Origin'], 'http://localhost:5173')
        self.assertIn('POST', resp.headers.get('Access-Control-Allow-Methods', ''))
        self.assertIn('content-type',
                      resp.headers.get('Access-Control-Allow-Headers', '').lower())

    def test_cors_ignores_other_origins(self):
        resp = self.client.get('/health', headers={'Origin': 'http://evil.test'})
        self.assertNotIn('Access-Control-Allow-Origin', resp.headers)

    def test_openapi_lists_every_route(self):
        resp, data = self._get('/api/openapi.json')
        self.assertEqual(resp.status_code, 200)
        for path in ('/health', '/api/wallet/{address}', '/api/wallet/connect',
                     '/api/wallet/{address}/balance', '/api/certificates',
                     '/api/certificates/{id}', '/api/certificates/mint', '/api/rewards',
                     '/api/rewards/issue', '/api/transactions', '/api/transactions/{hash}',
                     '/api/verify', '/api/stats'):
            self.assertIn(path, data['paths'])

    def test_unexpected_error_returns_500(self):
        with patch.object(self.store.transactions, 'search', side_effect=RuntimeError('boom')):
            resp, data = self._get('/api/transactions')
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(data, {'error': 'Internal server error',
                                'message': 'Something went wrong on our end'})
        # The process keeps serving
        resp, _ = self._get('/api/stats')
        self.assertEqual(resp.status_code, 200)


# ===========================================================================
# Wallets
# ===========================================================================

class TestWalletRoutes(ChainAPITestCase):

    def test_get_wallet_any_case(self):
        resp, data = self._get('/api/wallet/' + ALICE.upper().replace('0X', '0x'))
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(data['success'])
        self.assertEqual(data['data']['balance'], '2.5')

    def test_get_wallet_unknown(self):
        resp, data = self._get(f'/api/wallet/{UNKNOWN}')
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(data, {'error': 'Wallet not found',
                                'message': 'Wallet address not found in our records'})

    def test_balance(self):
        resp, data = self._get(f'/api/wallet/{BOB}/balance')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(data['data'], {
            'address': BOB, 'balance': '0.8', 'balanceWei': '800000000000000000',
            'symbol': 'ETH', 'network': 'ethereum',
        })

    def test_balance_unknown(self):
        resp, _ = self._get(f'/api/wallet/{UNKNOWN}/balance')
        self.assertEqual(resp.status_code, 404)

    def test_connect_unknown_wallet(self):
        resp, data = self._post('/api/wallet/connect', {'address': '0xNEW'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(data['message'], 'Wallet connected successfully')
        self.assertEqual(data['data']['address'], '0xnew')
        self.assertEqual(data['data']['balance'], '0.0')

    def test_connect_accepts_form_body(self):
        resp = self.client.post('/api/wallet/connect', data={'address': ALICE})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(json.loads(resp.data)['data']['balance'], '2.5')

    def test_connect_numeric_address(self):
        resp, data = self._post('/api/wallet/connect', {'address': 123})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(data['data']['address'], '123')
        self.assertEqual(data['data']['balance'], '0.0')

    def test_connect_requires_address(self):
        resp, data = self._post('/api/wallet/connect', {})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(data, {'error': 'Address required',
                                'message': 'Wallet address is required'})


# ===========================================================================
# Certificates
# ===========================================================================

class TestCertificateRoutes(ChainAPITestCase):

    MINT = {'studentAddress': BOB, 'courseName': 'Spatial Computing', 'grade': 'A-'}

    def test_list_all(self):
        resp, data = self._get('/api/certificates')
        self.assertEqual(data['count'], 2)
        self.assertEqual(len(data['data']), 2)

    def test_list_filtered(self):
        _, data = self._get(f'/api/certificates?studentAddress={BOB.upper()}')
        self.assertEqual(data['count'], 1)
        self.assertEqual(data['data'][0]['id'], 'cert-002')

    def test_list_filtered_no_match(self):
        _, data = self._get(f'/api/certificates?studentAddress={UNKNOWN}')
        self.assertEqual(data['count'], 0)
        self.assertEqual(data['data'], [])

    def test_get_by_id(self):
        resp, data = self._get('/api/certificates/cert-001')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(data['data']['grade'], 'A+')

    def test_get_unknown(self):
        resp, data = self._get('/api/certificates/cert-404')
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(data['error'], 'Certificate not found')

    def test_mint(self):
        resp, data = self._post('/api/certificates/mint', self.MINT)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(data['message'], 'Certificate minted successfully')
        cert = data['data']
        self.assertEqual(cert['tokenId'], '3')
        self.assertEqual(cert['completionDate'], '2025-03-14')
        _, listing = self._get('/api/certificates')
        self.assertEqual(listing['count'], 3)
        resp, fetched = self._get(f"/api/certificates/{cert['id']}")
        self.assertEqual(fetched['data'], cert)

    def test_mint_missing_grade(self):
        body = dict(self.MINT)
        del body['grade']
        resp, data = self._post('/api/certificates/mint', body)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(data, {'error': 'Missing required fields',
                                'message': 'studentAddress, courseName, and grade are required'})
        self.assertEqual(self.store.certificates.count(), 2)

    def test_mint_does_not_create_transaction(self):
        self._post('/api/certificates/mint', self.MINT)
        _, data = self._get('/api/transactions')
        self.assertEqual(data['count'], 2)


# ===========================================================================
# Rewards
# ===========================================================================

class TestRewardRoutes(ChainAPITestCase):

    def test_list(self):
        _, data = self._get(f'/api/rewards?studentAddress={ALICE}')
        self.assertEqual(data['count'], 2)

    def test_list_no_match(self):
        _, data = self._get(f'/api/rewards?studentAddress={BOB}')
        self.assertEqual(data, {'success': True, 'data': [], 'count': 0})

    def test_issue(self):
        resp, data = self._post('/api/rewards/issue', {
            'studentAddress': BOB, 'amount': '75', 'reason': 'Challenge Won',
            'achievementName': 'Sprinter',
        })
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(data['message'], 'Token reward issued successfully')
        self.assertEqual(data['data']['tokenSymbol'], 'EDU')
        self.assertEqual(data['data']['status'], 'completed')
        self.assertEqual(data['data']['achievementName'], 'Sprinter')

    def test_issue_missing_reason(self):
        resp, data = self._post('/api/rewards/issue', {'studentAddress': BOB, 'amount': '5'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(data['message'], 'studentAddress, amount, and reason are required')


# ===========================================================================
# Transactions, verify, stats
# ===========================================================================

class TestTransactionRoutes(ChainAPITestCase):

    def test_filter_and(self):
        _, data = self._get(f'/api/transactions?address={ALICE}&type=certificate_mint')
        self.assertEqual([t['id'] for t in data['data']], ['tx-001'])

    def test_filter_and_excludes_partial_matches(self):
        _, data = self._get(f'/api/transactions?address={fixtures.ZERO_ADDRESS}&type=certificate_mint')
        self.assertEqual(data['count'], 0)

    def test_get_by_hash(self):
        tx_hash = fixtures.seed_transactions()[1]['hash']
        resp, data = self._get(f'/api/transactions/{tx_hash}')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(data['data']['type'], 'token_reward')

    def test_get_unknown_hash(self):
        resp, data = self._get('/api/transactions/0xdoesnotexist')
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(data['error'], 'Transaction not found')


class TestVerifyAndStats(ChainAPITestCase):

    def test_verify(self):
        resp, data = self._post('/api/verify', {'type': 'certificate', 'data': {'id': 'cert-001'}})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(data['message'], 'Verification completed successfully')
        self.assertTrue(data['data']['verified'])

    def test_verify_missing_data(self):
        resp, data = self._post('/api/verify', {'type': 'certificate'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(data['message'], 'type and data are required')

    def test_stats_after_rewards(self):
        _, before = self._get('/api/stats')
        self.assertEqual(before['data']['tokensDistributed'], 150)
        self._post('/api/rewards/issue', {'studentAddress': BOB, 'amount': '100', 'reason': 'a'})
        self._post('/api/rewards/issue', {'studentAddress': BOB, 'amount': '50', 'reason': 'b'})
        self._post('/api/certificates/mint', {'studentAddress': BOB, 'courseName': 'X', 'grade': 'C'})
        _, after = self._get('/api/stats')
        self.assertEqual(after['data']['tokensDistributed'], 300)
        self.assertEqual(after['data']['totalRewards'], 4)
        self.assertEqual(after['data']['coursesCompleted'], 3)
        self.assertEqual(after['data']['activeStudents'], 2)


if __name__ == '__main__':
    unittest.main()
