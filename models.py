from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

class Seat(str, Enum):
    # Declaration order is the clockwise rotation.
    NORTH = "North"
    EAST = "East"
    SOUTH = "South"
    WEST = "West"

    @property
    def letter(self) -> str:
        return self.value[0]

    def next(self) -> "Seat":
        seats = list(Seat)
        return seats[(seats.index(self) + 1) % len(seats)]

    @classmethod
    def parse(cls, text: str) -> "Seat":
        """Accepts "North", "north", "N" or "n"."""
        key = (text or "").strip().lower()
        for seat in cls:
            if key in (seat.value.lower(), seat.letter.lower()):
                return seat
        raise ValueError(f"invalid position: {text}")

class Strain(str, Enum):
    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"
    NOTRUMP = "NT"

class CallKind(str, Enum):
    PASS = "pass"
    DOUBLE = "double"
    REDOUBLE = "redouble"
    CONTRACT = "contract"

@dataclass(frozen=True)
class Call:
    kind: CallKind
    # Only set for contract bids:
    level: Optional[int] = None
    strain: Optional[Strain] = None

    def __post_init__(self):
        if self.kind is CallKind.CONTRACT:
            if self.level is None or not 1 <= self.level <= 7 or self.strain is None:
                raise ValueError("contract bid needs a level 1-7 and a strain")
        elif self.level is not None or self.strain is not None:
            raise ValueError(f"{self.kind.value} carries no level or strain")

    @classmethod
    def pass_(cls) -> "Call":
        return cls(CallKind.PASS)

    @classmethod
    def double(cls) -> "Call":
        return cls(CallKind.DOUBLE)

    @classmethod
    def redouble(cls) -> "Call":
        return cls(CallKind.REDOUBLE)

    @classmethod
    def contract(cls, level: int, strain: Strain) -> "Call":
        return cls(CallKind.CONTRACT, level=level, strain=strain)

@dataclass(frozen=True)
class AuctionEntry:
    seat: Seat
    call: Call

@dataclass(frozen=True)
class PlayerHand:
    # Display-only; the suit holdings are whatever text the server sends.
    seat: Seat
    hcp: int
    spades: str = ""
    hearts: str = ""
    diamonds: str = ""
    clubs: str = ""

@dataclass(frozen=True)
class SessionSnapshot:
    session_id: str
    # The wire calls this "dealer" but it is the seat to act next.
    dealer: Seat
    auction: Tuple[AuctionEntry, ...] = ()
    complete: bool = False
    players: Tuple[PlayerHand, ...] = ()

@dataclass(frozen=True)
class BidAdvice:
    is_recommended: bool
    recommended_bid: str
    explanation: Optional[str] = None
