from __future__ import annotations
import os, requests
from typing import Any, Dict, Optional
from dotenv import load_dotenv
load_dotenv()

from models import BidAdvice, Seat, SessionSnapshot
from wire import parse_advice, parse_snapshot

DEFAULT_BASE_URL = "http://127.0.0.1:8080"
DEFAULT_TIMEOUT = 10.0

class RemoteRejection(RuntimeError):
    """The table server answered with an error; `text` is its body, unchanged."""
    def __init__(self, status_code: int, text: str):
        super().__init__(text)
        self.status_code = status_code
        self.text = text

class BridgeClient:
    """
    Minimal client for the bridge table server.
    Sessions live on the server; this class keeps no state beyond its config.
    """
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or os.getenv("BRIDGE_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.timeout = timeout if timeout is not None else float(os.getenv("BRIDGE_TIMEOUT", DEFAULT_TIMEOUT))

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        resp = requests.request(method, url, json=payload, timeout=self.timeout)
        if resp.status_code >= 400:
            print(f"[CLIENT] HTTP {resp.status_code} from {url}")
            print("[CLIENT] Body:", resp.text[:1000])
            # Surface the server's words as-is; never retried.
            raise RemoteRejection(resp.status_code, resp.text.strip())
        return resp.json()

    # ---------- Remote operations ----------
    def create_session(self) -> SessionSnapshot:
        return parse_snapshot(self._request("POST", "/api/sessions"))

    def get_session(self, session_id: str) -> SessionSnapshot:
        return parse_snapshot(self._request("GET", f"/api/sessions/{session_id}"))

    def submit_bid(self, session_id: str, seat: Seat, bid: str) -> SessionSnapshot:
        """`bid` must already be canonical text ("2NT", "Pass", "X", "XX")."""
        payload = {"position": seat.value, "bid": bid}
        return parse_snapshot(self._request("POST", f"/api/sessions/{session_id}/bid", payload))

    def evaluate_bid(self, session_id: str, seat: Seat, bid: str) -> BidAdvice:
        payload = {"sessionId": session_id, "position": seat.value, "bid": bid}
        return parse_advice(self._request("POST", "/api/evaluate-bid", payload))
