#!/usr/bin/env python3
"""
Metaverse University chain fixture API.

A Flask application serving hardcoded wallets, NFT certificates, EDU token
rewards and transactions from an in-memory :class:`campus.store.FixtureStore`.
Nothing touches a real blockchain: hashes and block numbers are random.

Run with::

    python campus_cli.py serve
  or
    flask --app chain_api run --port 3001
"""

import logging
import time
from typing import Dict, Optional

from flask import Blueprint, Flask, current_app, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from campus import __version__
from campus.config import load_config
from campus.errors import ChainAPIError
from campus.store import FixtureStore
from campus.services import (
    CertificateService, RewardService, StatsService, TransactionService,
    VerificationService, WalletService,
)
from openapi_spec import build_spec

logger = logging.getLogger('metaverse.api')
access_logger = logging.getLogger('metaverse.api.access')

SERVICE_NAME = 'ethereum-microservice'

api = Blueprint('chain', __name__)


class ChainServices:
    """The service objects one application instance routes to."""

    def __init__(self, store: FixtureStore) -> None:
        self.store = store
        self.wallets = WalletService(store.wallets)
        self.certificates = CertificateService(store.certificates, store.randomness)
        self.rewards = RewardService(store.rewards, store.randomness)
        self.transactions = TransactionService(store.transactions)
        self.verification = VerificationService(store.randomness)
        self.stats = StatsService(store)


def _services() -> ChainServices:
    return current_app.extensions['campus']


def _body() -> Dict:
    """JSON request body, or form fields, as a dict (never ``None``)."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def _ok(data, message: Optional[str] = None, count: Optional[int] = None):
    body = {'success': True, 'data': data}
    if message is not None:
        body['message'] = message
    if count is not None:
        body['count'] = count
    return jsonify(body)


# ===========================================================================
# Health
# ===========================================================================

@api.route('/health')
def health():
    """Service status"""
    return jsonify({
        'status': 'healthy',
        'service': SERVICE_NAME,
        'timestamp': _services().store.randomness.timestamp(),
        'version': __version__,
    })


@api.route('/api/openapi.json')
def openapi():
    return jsonify(build_spec(server_url=request.host_url.rstrip('/')))


# ===========================================================================
# Wallet Endpoints
# ===========================================================================

@api.route('/api/wallet/<address>', methods=['GET'])
def get_wallet(address):
    return _ok(_services().wallets.get(address))


@api.route('/api/wallet/connect', methods=['POST'])
def connect_wallet():
    wallet = _services().wallets.connect(_body().get('address'))
    return _ok(wallet, message='Wallet connected successfully')


@api.route('/api/wallet/<address>/balance', methods=['GET'])
def get_wallet_balance(address):
    return _ok(_services().wallets.balance(address))


# ===========================================================================
# Certificate Endpoints
# ===========================================================================

@api.route('/api/certificates', methods=['GET'])
def list_certificates():
    certificates = _services().certificates.list(request.args.get('studentAddress'))
    return _ok(certificates, count=len(certificates))


@api.route('/api/certificates/<cert_id>', methods=['GET'])
def get_certificate(cert_id):
    return _ok(_services().certificates.get(cert_id))


@api.route('/api/certificates/mint', methods=['POST'])
def mint_certificate():
    certificate = _services().certificates.mint(_body())
    return _ok(certificate, message='Certificate minted successfully')


# ===========================================================================
# Token Reward Endpoints
# ===========================================================================

@api.route('/api/rewards', methods=['GET'])
def list_rewards():
    rewards = _services().rewards.list(request.args.get('studentAddress'))
    return _ok(rewards, count=len(rewards))


@api.route('/api/rewards/issue', methods=['POST'])
def issue_reward():
    reward = _services().rewards.issue(_body())
    return _ok(reward, message='Token reward issued successfully')


# ===========================================================================
# Transaction Endpoints
# ===========================================================================

@api.route('/api/transactions', methods=['GET'])
def list_transactions():
    transactions = _services().transactions.list(
        address=request.args.get('address'),
        tx_type=request.args.get('type'),
    )
    return _ok(transactions, count=len(transactions))


@api.route('/api/transactions/<tx_hash>', methods=['GET'])
def get_transaction(tx_hash):
    return _ok(_services().transactions.get(tx_hash))


# ===========================================================================
# Verification & Statistics
# ===========================================================================

@api.route('/api/verify', methods=['POST'])
def verify():
    receipt = _services().verification.verify(_body())
    return _ok(receipt, message='Verification completed successfully')


@api.route('/api/stats', methods=['GET'])
def stats():
    return _ok(_services().stats.get())


# ===========================================================================
# Error handling
# ===========================================================================

def _handle_chain_error(exc: ChainAPIError):
    return jsonify(exc.to_dict()), exc.status_code


def _handle_http_error(exc: HTTPException):
    if exc.code in (404, 405):
        return jsonify({
            'error': 'Not found',
            'message': 'The requested endpoint does not exist',
        }), 404
    return jsonify({'error': exc.name, 'message': exc.description}), exc.code


def _handle_unexpected(exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({
        'error': 'Internal server error',
        'message': 'Something went wrong on our end',
    }), 500


# ===========================================================================
# Application factory
# ===========================================================================

def create_app(store: Optional[FixtureStore] = None,
               config: Optional[Dict] = None) -> Flask:
    """Build the Flask app around *store*.

    Args:
        store:  Fixture store to serve; a freshly seeded one when ``None``.
        config: Configuration dict (see :mod:`campus.config`); loaded from
                the environment when ``None``.

    Returns:
        Configured :class:`flask.Flask` instance.
    """
    config = config if config is not None else load_config()
    app = Flask(__name__)
    app.config['FRONTEND_URL'] = config.get('frontend_url', 'http://localhost:5173')
    app.config['MAX_CONTENT_LENGTH'] = 10 * 1024 * 1024
    app.extensions['campus'] = ChainServices(store or FixtureStore.seeded())

    app.register_blueprint(api)
    CORS(app, origins=[app.config['FRONTEND_URL']], supports_credentials=True)
    app.register_error_handler(ChainAPIError, _handle_chain_error)
    app.register_error_handler(HTTPException, _handle_http_error)
    app.register_error_handler(Exception, _handle_unexpected)

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _finish(response):
        started = g.get('request_started')
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        access_logger.info('%s "%s %s" %s %.1fms', request.remote_addr,
                           request.method, request.full_path.rstrip('?'),
                           response.status_code, elapsed_ms)
        return response

    return app
