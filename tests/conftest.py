"""Shared fixtures: wire payloads and a table server stand-in."""
import pytest

from bridge_client import BridgeClient, RemoteRejection
from models import BidAdvice
from wire import parse_snapshot

def entry(position, call):
    """Wire auction entry; `call` is "pass", "x", "xx" or (level, strain)."""
    e = {"position": position, "pass": False, "double": False, "redouble": False, "level": 0, "strain": "C"}
    if call == "pass":
        e["pass"] = True
    elif call == "x":
        e["double"] = True
    elif call == "xx":
        e["redouble"] = True
    else:
        e["level"], e["strain"] = call
    return e

def session_payload(session_id="s-1", dealer="North", auction=(), complete=False):
    return {
        "id": session_id,
        "dealer": dealer,
        "complete": complete,
        "players": [
            {"position": "West", "hcp": 9, "spades": "K 7", "hearts": "Q 9 4", "diamonds": "A 8 6 3", "clubs": "J 5 4 2"},
            {"position": "North", "hcp": 15, "spades": "A Q 5", "hearts": "K J 3", "diamonds": "Q 4", "clubs": "A 10 8 6 3"},
            {"position": "East", "hcp": 7, "spades": "J 10 9 8", "hearts": "A 6", "diamonds": "J 10 9", "clubs": "Q 9 7 3"},
            {"position": "South", "hcp": 9, "spades": "6 4 3 2", "hearts": "10 8 7 5 2", "diamonds": "K 7 5 2", "clubs": "K"},
        ],
        "auction": list(auction),
    }

def snapshot(**kwargs):
    return parse_snapshot(session_payload(**kwargs))

class FakeTableClient(BridgeClient):
    """Answers from canned snapshots instead of the network."""
    def __init__(self):
        self.base_url = "http://table.test"
        self.timeout = 1.0
        self.created = []
        self.sessions = {}
        self.submitted = []
        self.reject = None
        self.advice = BidAdvice(is_recommended=True, recommended_bid="1NT")

    def create_session(self):
        sid = f"s-{len(self.created) + 1}"
        self.created.append(sid)
        self.sessions[sid] = snapshot(session_id=sid)
        return self.sessions[sid]

    def get_session(self, session_id):
        if session_id not in self.sessions:
            raise RemoteRejection(404, "session not found")
        return self.sessions[session_id]

    def submit_bid(self, session_id, seat, bid):
        self.submitted.append((session_id, seat, bid))
        if self.reject:
            raise RemoteRejection(*self.reject)
        current = self.sessions[session_id]
        auction = [entry(e.seat.value, _wire_call(e.call)) for e in current.auction]
        auction.append(entry(seat.value, _wire_call_text(bid)))
        self.sessions[session_id] = snapshot(session_id=session_id, dealer=current.dealer.next().value, auction=auction)
        return self.sessions[session_id]

    def evaluate_bid(self, session_id, seat, bid):
        self.submitted.append(("advice", seat, bid))
        return self.advice

def _wire_call(call):
    if call.kind.value == "pass":
        return "pass"
    if call.kind.value == "double":
        return "x"
    if call.kind.value == "redouble":
        return "xx"
    return (call.level, call.strain.value)

def _wire_call_text(bid):
    if bid == "Pass":
        return "pass"
    if bid == "X":
        return "x"
    if bid == "XX":
        return "xx"
    return (int(bid[0]), bid[1:])

@pytest.fixture
def fake_client():
    return FakeTableClient()
