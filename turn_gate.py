from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from bid_grammar import GRAMMAR_HINT, is_well_formed
from models import Seat, SessionSnapshot

class TurnError(ValueError):
    """Raised when a bid is sent with no session, after completion, or out of turn."""

NO_SESSION = "no_session"
COMPLETE = "complete"
TURN = "turn"
EMPTY = "empty"
FORMAT = "format"

@dataclass(frozen=True)
class GateVerdict:
    allowed: bool
    reason: Optional[str] = None
    # Which rule declined the bid; None when allowed.
    code: Optional[str] = None

def turn_reason(on_turn: Seat) -> str:
    return f"it is {on_turn.value}'s turn ({on_turn.letter})"

def evaluate(snapshot: Optional[SessionSnapshot], seat: Optional[Seat], raw_token: Optional[str]) -> GateVerdict:
    """
    Local fast-fail check before a bid goes to the server. The server still
    has the final word on legality.

    Rules are checked in this order and the first one that fires wins:
    session exists > auction open > seat on turn > token present > token shape.
    """
    if snapshot is None:
        return GateVerdict(False, "no active session", NO_SESSION)
    if snapshot.complete:
        return GateVerdict(False, "auction is complete", COMPLETE)
    if seat != snapshot.dealer:
        return GateVerdict(False, turn_reason(snapshot.dealer), TURN)
    if not (raw_token or "").strip():
        # Quiet: nothing typed yet is not an error.
        return GateVerdict(False, None, EMPTY)
    if not is_well_formed(raw_token):
        return GateVerdict(False, GRAMMAR_HINT, FORMAT)
    return GateVerdict(True)
