"""
chain_client.py
===============
HTTP client for the chain fixture API (``chain_api.py``).

Every method sends one request, unwraps the ``{"success": ..., "data": ...}``
envelope and returns ``data``.  Any non-2xx response, or a transport failure,
raises :class:`ClientRequestError` carrying the best message available: the
server's ``message``, else its ``error``, else ``"Request failed"``;
``"Network error"`` when no JSON error body could be read.  Nothing is
retried or cached.

Configuration
-------------
The base URL comes from ``chain_service_url`` in the config (environment
variable ``CHAIN_SERVICE_URL``), default ``http://localhost:3001/api``.

Usage
-----
::

    from chain_client import ChainServiceClient

    client = ChainServiceClient()
    wallet = client.connect_wallet('0x1234...')
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://localhost:3001/api'
_DEFAULT_TIMEOUT = 10  # seconds


def _segment(value: Any) -> str:
    """Escape *value* for use as a single URL path segment."""
    return requests.utils.quote(str(value), safe='')


class ClientRequestError(Exception):
    """A fixture API call failed; ``str(exc)`` is the message to show the user.

    Attributes:
        status_code: HTTP status of the failed response, or ``None`` when the
                     request never got one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ChainServiceClient:
    """Thin wrapper around the fixture API.

    Args:
        base_url: API root including the ``/api`` prefix.
        timeout:  HTTP request timeout in seconds.
        session:  Optional pre-built :class:`requests.Session`.
    """

    def __init__(self, base_url: Optional[str] = None,
                 timeout: float = _DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None) -> None:
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip('/')
        self._timeout  = timeout
        self._session  = session or requests.Session()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'ChainServiceClient':
        return cls(base_url=config.get('chain_service_url'),
                   timeout=config.get('request_timeout', _DEFAULT_TIMEOUT))

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def service_root(self) -> str:
        """The base URL without its trailing ``/api`` segment."""
        if self._base_url.endswith('/api'):
            return self._base_url[:-len('/api')]
        return self._base_url

    # ------------------------------------------------------------------
    # Core request helper
    # ------------------------------------------------------------------

    def _request(self, method: str, endpoint: str, *,
                 params: Optional[Dict[str, str]] = None,
                 json: Optional[Dict[str, Any]] = None,
                 root: bool = False) -> Any:
        url = f"{self.service_root if root else self._base_url}{endpoint}"
        try:
            resp = self._session.request(
                method, url,
                params=params,
                json=json,
                headers={'Content-Type': 'application/json'},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ClientRequestError('Network error') from exc

        if not resp.ok:
            try:
                body = resp.json()
            except ValueError:
                body = {'error': 'Network error'}
            if not isinstance(body, dict):
                body = {}
            message = body.get('message') or body.get('error') or 'Request failed'
            logger.info("%s %s -> HTTP %s: %s", method, url, resp.status_code, message)
            raise ClientRequestError(message, status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as exc:
            raise ClientRequestError('Invalid response from server',
                                     status_code=resp.status_code) from exc
        if isinstance(payload, dict) and 'data' in payload:
            return payload['data']
        return payload

    # ------------------------------------------------------------------
    # Wallet
    # ------------------------------------------------------------------

    def connect_wallet(self, address: str) -> Dict[str, Any]:
        return self._request('POST', '/wallet/connect', json={'address': address})

    def get_wallet(self, address: str) -> Dict[str, Any]:
        return self._request('GET', f'/wallet/{_segment(address)}')

    def get_wallet_balance(self, address: str) -> Dict[str, Any]:
        return self._request('GET', f'/wallet/{_segment(address)}/balance')

    # ------------------------------------------------------------------
    # Certificates
    # ------------------------------------------------------------------

    def get_certificates(self, student_address: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {'studentAddress': student_address} if student_address else None
        return self._request('GET', '/certificates', params=params)

    def get_certificate(self, cert_id: str) -> Dict[str, Any]:
        return self._request('GET', f'/certificates/{_segment(cert_id)}')

    def mint_certificate(self, student_address: str, course_name: str,
                         grade: str, credits: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            'studentAddress': student_address,
            'courseName':     course_name,
            'grade':          grade,
        }
        if credits is not None:
            body['credits'] = credits
        return self._request('POST', '/certificates/mint', json=body)

    # ------------------------------------------------------------------
    # Rewards
    # ------------------------------------------------------------------

    def get_rewards(self, student_address: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {'studentAddress': student_address} if student_address else None
        return self._request('GET', '/rewards', params=params)

    def issue_reward(self, student_address: str, amount: str, reason: str,
                     course_name: Optional[str] = None,
                     achievement_name: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            'studentAddress': student_address,
            'amount':         str(amount),
            'reason':         reason,
        }
        if course_name:
            body['courseName'] = course_name
        if achievement_name:
            body['achievementName'] = achievement_name
        return self._request('POST', '/rewards/issue', json=body)

    # ------------------------------------------------------------------
    # Transactions, verification, stats
    # ------------------------------------------------------------------

    def get_transactions(self, address: Optional[str] = None,
                         tx_type: Optional[str] = None) -> List[Dict[str, Any]]:
        params: Dict[str, str] = {}
        if address:
            params['address'] = address
        if tx_type:
            params['type'] = tx_type
        return self._request('GET', '/transactions', params=params or None)

    def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        return self._request('GET', f'/transactions/{_segment(tx_hash)}')

    def verify(self, verification_type: str, data: Any) -> Dict[str, Any]:
        return self._request('POST', '/verify', json={'type': verification_type, 'data': data})

    def get_stats(self) -> Dict[str, Any]:
        return self._request('GET', '/stats')

    def health_check(self) -> Dict[str, Any]:
        """``GET /health`` on the service root (outside the ``/api`` prefix)."""
        return self._request('GET', '/health', root=True)
