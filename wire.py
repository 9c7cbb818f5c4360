from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models import AuctionEntry, BidAdvice, Call, PlayerHand, Seat, SessionSnapshot, Strain

class WireFormatError(ValueError):
    """The table server sent JSON this client cannot read."""

# ---------- Pydantic models for the table server's JSON ----------
class AuctionEntryIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    position: str
    pass_: bool = Field(False, alias="pass")
    double: bool = False
    redouble: bool = False
    level: Optional[int] = None
    strain: Optional[str] = None

class PlayerIn(BaseModel):
    position: str
    hcp: int = 0
    spades: str = ""
    hearts: str = ""
    diamonds: str = ""
    clubs: str = ""

class SessionIn(BaseModel):
    id: str
    dealer: str
    complete: bool = False
    players: List[PlayerIn] = Field(default_factory=list)
    auction: List[AuctionEntryIn] = Field(default_factory=list)

class BidAdviceIn(BaseModel):
    isRecommended: bool
    recommendedBid: str
    explanation: Optional[str] = None

# ---------- Converters ----------
def _strain_from_wire(code: Optional[str]) -> Strain:
    key = (code or "").strip().upper()
    if key == "N":
        key = "NT"
    try:
        return Strain(key)
    except ValueError:
        raise ValueError(f"unknown strain in auction entry: {code!r}") from None

def call_from_wire(e: AuctionEntryIn) -> Call:
    # Contract entries still carry zero-valued flags, and passes a zero level,
    # so the flags are checked first.
    if e.pass_:
        return Call.pass_()
    if e.redouble:
        return Call.redouble()
    if e.double:
        return Call.double()
    if e.level is None or not 1 <= e.level <= 7:
        raise ValueError(f"malformed auction entry: level={e.level!r}")
    return Call.contract(e.level, _strain_from_wire(e.strain))

def to_snapshot(s: SessionIn) -> SessionSnapshot:
    return SessionSnapshot(
        session_id=s.id,
        dealer=Seat.parse(s.dealer),
        complete=s.complete,
        auction=tuple(AuctionEntry(seat=Seat.parse(e.position), call=call_from_wire(e)) for e in s.auction),
        players=tuple(
            PlayerHand(
                seat=Seat.parse(p.position),
                hcp=p.hcp,
                spades=p.spades,
                hearts=p.hearts,
                diamonds=p.diamonds,
                clubs=p.clubs,
            )
            for p in s.players
        ),
    )

def parse_snapshot(data: dict) -> SessionSnapshot:
    try:
        return to_snapshot(SessionIn.model_validate(data))
    except ValueError as e:
        raise WireFormatError(f"unexpected session payload: {e}") from e

def parse_advice(data: dict) -> BidAdvice:
    try:
        a = BidAdviceIn.model_validate(data)
    except ValueError as e:
        raise WireFormatError(f"unexpected advice payload: {e}") from e
    return BidAdvice(is_recommended=a.isRecommended, recommended_bid=a.recommendedBid, explanation=a.explanation)
