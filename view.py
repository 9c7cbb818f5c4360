from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from bid_grammar import render
from messages import NO_BIDS_YET, NO_CALL
from models import Call, PlayerHand, Seat, SessionSnapshot
from turn_gate import evaluate

@dataclass(frozen=True)
class AuctionRow:
    seat: Seat
    call: str

@dataclass(frozen=True)
class Availability:
    disabled: bool
    message: Optional[str] = None

@dataclass(frozen=True)
class TableView:
    session_id: Optional[str]
    seat_on_turn: Optional[Seat]
    complete: bool
    selected_seat: Optional[Seat]
    hands: Tuple[PlayerHand, ...]
    last_calls: Dict[Seat, str]
    auction: Tuple[AuctionRow, ...]
    # Set only when the auction is empty, so "no bids" never looks like "no rows".
    auction_placeholder: Optional[str]
    availability: Availability

def last_call_by_seat(snapshot: Optional[SessionSnapshot]) -> Dict[Seat, Optional[Call]]:
    last: Dict[Seat, Optional[Call]] = {seat: None for seat in Seat}
    if snapshot is None:
        return last
    for entry in snapshot.auction:
        last[entry.seat] = entry.call
    return last

def auction_rows(snapshot: Optional[SessionSnapshot]) -> Tuple[AuctionRow, ...]:
    if snapshot is None:
        return ()
    return tuple(AuctionRow(seat=e.seat, call=render(e.call)) for e in snapshot.auction)

def seat_on_turn(snapshot: Optional[SessionSnapshot]) -> Optional[Seat]:
    return snapshot.dealer if snapshot is not None else None

def hand_summaries(snapshot: Optional[SessionSnapshot]) -> Tuple[PlayerHand, ...]:
    if snapshot is None:
        return ()
    order = list(Seat)
    return tuple(sorted(snapshot.players, key=lambda p: order.index(p.seat)))

def availability(
    snapshot: Optional[SessionSnapshot],
    seat: Optional[Seat],
    raw_token: Optional[str],
    previous_message: Optional[str] = None,
) -> Availability:
    """
    Input state for the bid box. A gate reason replaces whatever was shown;
    with no reason (empty box or acceptable bid) the previous message stays.
    """
    verdict = evaluate(snapshot, seat, raw_token)
    message = verdict.reason if verdict.reason is not None else previous_message
    return Availability(disabled=not verdict.allowed, message=message)

def project(
    snapshot: Optional[SessionSnapshot],
    seat: Optional[Seat] = None,
    raw_token: Optional[str] = "",
    previous_message: Optional[str] = None,
) -> TableView:
    """Everything the screen needs, rebuilt from the snapshot on every call."""
    selected = seat if seat is not None else seat_on_turn(snapshot)
    rows = auction_rows(snapshot)
    last_calls = {
        s: (render(c) if c is not None else NO_CALL)
        for s, c in last_call_by_seat(snapshot).items()
    }
    return TableView(
        session_id=snapshot.session_id if snapshot is not None else None,
        seat_on_turn=seat_on_turn(snapshot),
        complete=snapshot.complete if snapshot is not None else False,
        selected_seat=selected,
        hands=hand_summaries(snapshot),
        last_calls=last_calls,
        auction=rows,
        auction_placeholder=None if rows else NO_BIDS_YET,
        availability=availability(snapshot, selected, raw_token, previous_message),
    )

def format_view(view: TableView) -> str:
    """Plain-text rendering for the terminal."""
    lines: List[str] = []
    if view.session_id is None:
        lines.append("No active session.")
        return "\n".join(lines)
    lines.append(f"Session:   {view.session_id}")
    lines.append(f"On turn:   {view.seat_on_turn.value if view.seat_on_turn else '-'}")
    lines.append(f"Complete:  {view.complete}")
    lines.append("")
    for hand in view.hands:
        lines.append(f"{hand.seat.value} - HCP: {hand.hcp}")
        lines.append(f"  ♠ {hand.spades}")
        lines.append(f"  ♥ {hand.hearts}")
        lines.append(f"  ♦ {hand.diamonds}")
        lines.append(f"  ♣ {hand.clubs}")
    lines.append("")
    lines.append("  ".join(f"{s.letter}: {c}" for s, c in view.last_calls.items()))
    lines.append("")
    lines.append("--- Auction ---")
    if view.auction_placeholder:
        lines.append(view.auction_placeholder)
    for row in view.auction:
        lines.append(f"{row.seat.value:<6} {row.call}")
    return "\n".join(lines)
