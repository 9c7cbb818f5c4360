from __future__ import annotations
import threading
from typing import Optional

from bid_grammar import FormatError, normalize
from bridge_client import BridgeClient
from messages import BID_ACCEPTED, CREATE_SESSION_FIRST, ENTER_A_BID, NEW_SESSION_CREATED, STALE_RESPONSE
from models import BidAdvice, Seat, SessionSnapshot
from turn_gate import EMPTY, FORMAT, NO_SESSION, TurnError, evaluate
from view import TableView, project

class TableEngine:
    """
    Holds the one active session for a table console.
    - The last snapshot from the server is the only source of truth.
    - Every screen is rebuilt from it with view.project(); nothing is patched.
    - An accepted bid is always applied. A fetch is dropped when it was
      started before the latest applied bid finished, so it cannot roll the
      auction back. Creating or opening a session replaces everything.
    """
    def __init__(self, client: BridgeClient):
        self.client = client
        self._lock = threading.Lock()
        self._session_id: Optional[str] = None
        self._snapshot: Optional[SessionSnapshot] = None
        self._next_ticket = 0
        # Ticket of the create/open that set the active session.
        self._session_ticket = 0
        # Fetches with a ticket at or below this started before the last applied bid returned.
        self._fence = 0
        self.message: Optional[str] = None

    # ---------- State access ----------
    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    @property
    def snapshot(self) -> Optional[SessionSnapshot]:
        return self._snapshot

    def view(self, seat: Optional[Seat] = None, raw_token: Optional[str] = "") -> TableView:
        with self._lock:
            v = project(self._snapshot, seat, raw_token, previous_message=self.message)
            self.message = v.availability.message
            return v

    # ---------- Session lifecycle ----------
    def create_session(self) -> TableView:
        ticket = self._take_ticket()
        snapshot = self.client.create_session()
        with self._lock:
            if self._apply_session(ticket, snapshot):
                self.message = NEW_SESSION_CREATED
            else:
                self.message = STALE_RESPONSE
            return project(self._snapshot, None, "", previous_message=self.message)

    def open_session(self, session_id: str) -> TableView:
        """Adopt an existing server session, replacing the active one."""
        ticket = self._take_ticket()
        snapshot = self.client.get_session(session_id)
        with self._lock:
            if self._apply_session(ticket, snapshot):
                self.message = None
            return project(self._snapshot, None, "", previous_message=self.message)

    def refresh(self) -> TableView:
        with self._lock:
            session_id = self._session_id
        if session_id is None:
            raise TurnError(CREATE_SESSION_FIRST)
        ticket = self._take_ticket()
        snapshot = self.client.get_session(session_id)
        with self._lock:
            if self._apply_fetch(ticket, snapshot):
                self.message = None
            return project(self._snapshot, None, "", previous_message=self.message)

    # ---------- Bidding ----------
    def submit_bid(self, seat: Optional[Seat], raw_token: str) -> TableView:
        with self._lock:
            verdict = evaluate(self._snapshot, seat, raw_token)
            session_id = self._session_id
        if not verdict.allowed:
            self._block(verdict.code, verdict.reason)
        bid = normalize(raw_token)
        snapshot = self.client.submit_bid(session_id, seat, bid)
        with self._lock:
            self.message = BID_ACCEPTED if self._apply_bid(snapshot) else STALE_RESPONSE
            return project(self._snapshot, None, "", previous_message=self.message)

    def advise(self, seat: Seat, raw_token: str) -> BidAdvice:
        with self._lock:
            session_id = self._session_id
        if session_id is None:
            raise TurnError(CREATE_SESSION_FIRST)
        if not (raw_token or "").strip():
            raise FormatError(ENTER_A_BID)
        return self.client.evaluate_bid(session_id, seat, normalize(raw_token))

    # ---------- helpers ----------
    def _block(self, code: Optional[str], reason: Optional[str]) -> None:
        if code == NO_SESSION:
            message = CREATE_SESSION_FIRST
        elif code == EMPTY:
            message = ENTER_A_BID
        else:
            message = reason
        with self._lock:
            self.message = message
        if code in (EMPTY, FORMAT):
            raise FormatError(message)
        raise TurnError(message)

    def _take_ticket(self) -> int:
        with self._lock:
            self._next_ticket += 1
            return self._next_ticket

    # The _apply_* helpers expect the caller to hold the lock.
    def _apply_session(self, ticket: int, snapshot: SessionSnapshot) -> bool:
        if ticket < self._session_ticket:
            # An older create/open finishing after a newer one.
            return False
        self._session_ticket = ticket
        self._session_id = snapshot.session_id
        self._snapshot = snapshot
        self._fence = self._next_ticket
        return True

    def _apply_bid(self, snapshot: SessionSnapshot) -> bool:
        if snapshot.session_id != self._session_id:
            return False
        self._snapshot = snapshot
        self._fence = self._next_ticket
        return True

    def _apply_fetch(self, ticket: int, snapshot: SessionSnapshot) -> bool:
        if snapshot.session_id != self._session_id or ticket <= self._fence:
            return False
        self._snapshot = snapshot
        return True
