"""
DonateHub API client

The bearer token is an argument of every call; the client never stores one,
so a single instance can serve several identities.
Reads are retried with backoff on timeouts. Writes are never retried.
"""
import logging
import time
from typing import Any, Dict, Optional

import httpx

from .config import Config
from .errors import error_for_status

logger = logging.getLogger(__name__)


class DonateHubClient:
    TIMEOUT = Config.API_TIMEOUT
    RETRIES = Config.API_RETRIES
    BACKOFF_FACTOR = Config.API_BACKOFF

    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.Client] = None):
        # `http` lets callers hand in a preconfigured client (e.g. a TestClient)
        self.http = http or httpx.Client(base_url=base_url or Config.API_URL, timeout=self.TIMEOUT)

    def close(self):
        self.http.close()

    @staticmethod
    def _headers(token: Optional[str]) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(self, method: str, path: str, token: Optional[str] = None, **kwargs) -> httpx.Response:
        return self.http.request(method, path, headers=self._headers(token), **kwargs)

    def _get_with_retries(self, path: str, token: Optional[str] = None, **kwargs) -> httpx.Response:
        """GET with simple retry/backoff on read timeouts."""
        for attempt in range(1, self.RETRIES + 1):
            try:
                return self._send("GET", path, token, **kwargs)
            except httpx.ReadTimeout as e:
                if attempt < self.RETRIES:
                    wait = self.BACKOFF_FACTOR * (2 ** (attempt - 1))
                    logger.warning("GET %s timed out (attempt %d/%d), retrying in %ss", path, attempt, self.RETRIES, wait)
                    time.sleep(wait)
                    continue
                logger.error("GET %s timed out after %d attempts: %s", path, self.RETRIES, e)
                raise

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        if resp.is_error:
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("message")
            else:
                message = resp.text or None
            raise error_for_status(resp.status_code, message)
        return resp.json()

    # ===== AUTH =====

    def register(self, name: str, email: str, password: str, role: str) -> Dict[str, Any]:
        payload = {"name": name, "email": email, "password": password, "role": role}
        return self._json(self._send("POST", "/api/auth/register", json=payload))

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._json(self._send("POST", "/api/auth/login", json={"email": email, "password": password}))

    def me(self, token: str) -> Dict[str, Any]:
        return self._json(self._get_with_retries("/api/auth/me", token))

    # ===== CAMPAIGNS =====

    def list_campaigns(self, category: Optional[str] = None, search: Optional[str] = None,
                       status: Optional[str] = None) -> list:
        params = {k: v for k, v in {"category": category, "search": search, "status": status}.items() if v}
        return self._json(self._get_with_retries("/api/campaigns", params=params))

    def get_campaign(self, campaign_id: int) -> Dict[str, Any]:
        return self._json(self._get_with_retries(f"/api/campaigns/{campaign_id}"))

    def campaigns_by_owner(self, token: str, user_id: int) -> list:
        return self._json(self._get_with_retries(f"/api/campaigns/ngo/{user_id}", token))

    def create_campaign(self, token: str, title: str, description: str, category: str,
                        goal_amount: float) -> Dict[str, Any]:
        payload = {"title": title, "description": description, "category": category, "goalAmount": goal_amount}
        return self._json(self._send("POST", "/api/campaigns", token, json=payload))

    def update_campaign(self, token: str, campaign_id: int, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Send a partial update. Warns when the new goal is below what was already raised."""
        campaign = self._json(self._send("PUT", f"/api/campaigns/{campaign_id}", token, json=patch))
        if campaign["goalAmount"] < campaign["raisedAmount"]:
            logger.warning("Campaign %s goal %s is below the amount already raised (%s)",
                           campaign_id, campaign["goalAmount"], campaign["raisedAmount"])
        return campaign

    def delete_campaign(self, token: str, campaign_id: int) -> Dict[str, Any]:
        return self._json(self._send("DELETE", f"/api/campaigns/{campaign_id}", token))

    # ===== DONATIONS =====

    def donate(self, token: str, campaign_id: int, amount: float) -> Dict[str, Any]:
        payload = {"campaignId": campaign_id, "amount": amount}
        return self._json(self._send("POST", "/api/donations", token, json=payload))

    def donation_history(self, token: str) -> list:
        return self._json(self._get_with_retries("/api/donations/history", token))

    def campaign_donations(self, token: str, campaign_id: int) -> list:
        return self._json(self._get_with_retries(f"/api/donations/campaign/{campaign_id}", token))

    def donation_stats(self, token: str) -> Dict[str, Any]:
        return self._json(self._get_with_retries("/api/donations/stats", token))
