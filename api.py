from __future__ import annotations
from typing import Dict, Optional

import requests
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from bid_grammar import FormatError
from bridge_client import BridgeClient, RemoteRejection
from engine import TableEngine
from models import Seat
from turn_gate import TurnError
from view import TableView
from wire import WireFormatError

# ---------- Pydantic IO models ----------
class BidIn(BaseModel):
    seat: str = Field(..., examples=["North"])
    bid: str = Field(..., examples=["1NT"])

class HandOut(BaseModel):
    position: str
    hcp: int
    spades: str
    hearts: str
    diamonds: str
    clubs: str

class AuctionRowOut(BaseModel):
    position: str
    call: str

class AvailabilityOut(BaseModel):
    disabled: bool
    message: Optional[str] = None

class TableViewOut(BaseModel):
    session_id: Optional[str] = None
    seat_on_turn: Optional[str] = None
    selected_seat: Optional[str] = None
    complete: bool
    hands: list[HandOut]
    last_calls: Dict[str, str]
    auction: list[AuctionRowOut]
    # "No bids yet" when the auction is empty:
    auction_placeholder: Optional[str] = None
    availability: AvailabilityOut

class AdviceOut(BaseModel):
    is_recommended: bool
    recommended_bid: str
    explanation: Optional[str] = None

# ---------- App ----------
app = FastAPI(title="Bridge Bidding Table API", version="1.0.0")

_client = BridgeClient()
_engine = TableEngine(client=_client)

def _to_view_out(v: TableView) -> TableViewOut:
    return TableViewOut(
        session_id=v.session_id,
        seat_on_turn=v.seat_on_turn.value if v.seat_on_turn else None,
        selected_seat=v.selected_seat.value if v.selected_seat else None,
        complete=v.complete,
        hands=[
            HandOut(position=h.seat.value, hcp=h.hcp, spades=h.spades,
                    hearts=h.hearts, diamonds=h.diamonds, clubs=h.clubs)
            for h in v.hands
        ],
        last_calls={s.value: c for s, c in v.last_calls.items()},
        auction=[AuctionRowOut(position=r.seat.value, call=r.call) for r in v.auction],
        auction_placeholder=v.auction_placeholder,
        availability=AvailabilityOut(disabled=v.availability.disabled, message=v.availability.message),
    )

def _parse_seat(text: Optional[str]) -> Optional[Seat]:
    if text is None or not text.strip():
        return None
    try:
        return Seat.parse(text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

def _remote_call(fn, *args):
    try:
        return fn(*args)
    except RemoteRejection as e:
        # Forward the table server's status and text untouched
        raise HTTPException(status_code=e.status_code, detail=e.text)
    except WireFormatError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except TurnError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except FormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except requests.RequestException as e:
        raise HTTPException(status_code=502, detail=str(e))

@app.post("/v1/table/session", response_model=TableViewOut)
def create_session():
    return _to_view_out(_remote_call(_engine.create_session))

@app.post("/v1/table/refresh", response_model=TableViewOut)
def refresh():
    return _to_view_out(_remote_call(_engine.refresh))

@app.get("/v1/table/view", response_model=TableViewOut)
def get_view(seat: Optional[str] = None, bid: str = ""):
    return _to_view_out(_engine.view(_parse_seat(seat), bid))

@app.post("/v1/table/bid", response_model=TableViewOut)
def submit_bid(payload: BidIn):
    seat = _parse_seat(payload.seat)
    if seat is None:
        raise HTTPException(status_code=400, detail="seat is required")
    return _to_view_out(_remote_call(_engine.submit_bid, seat, payload.bid))

@app.post("/v1/table/advice", response_model=AdviceOut, response_model_exclude_none=True)
def advice(payload: BidIn):
    seat = _parse_seat(payload.seat)
    if seat is None:
        raise HTTPException(status_code=400, detail="seat is required")
    a = _remote_call(_engine.advise, seat, payload.bid)
    return AdviceOut(is_recommended=a.is_recommended, recommended_bid=a.recommended_bid, explanation=a.explanation)
