from __future__ import annotations
import argparse
import sys
from typing import Optional, Tuple

import requests
from dotenv import load_dotenv
load_dotenv()

from bid_grammar import FormatError
from bridge_client import BridgeClient, RemoteRejection
from engine import TableEngine
from messages import PLAY_HELP
from models import Seat
from turn_gate import TurnError
from view import TableView, format_view
from wire import WireFormatError

# -----------------------------
# Pretty printers
# -----------------------------
def print_view(view: TableView) -> None:
    print("\n===== TABLE =====")
    print(format_view(view))
    if view.availability.message:
        print(f"\n>> {view.availability.message}")
    print("=" * 17)

# -----------------------------
# Input parsing
# -----------------------------
def split_seat_and_bid(line: str) -> Tuple[Optional[Seat], str]:
    """
    "N 1NT" -> (North, "1NT"). A line with no seat word bids for nobody and
    is left for the turn check to report.
    """
    parts = line.split(None, 1)
    if not parts:
        return None, ""
    try:
        seat = Seat.parse(parts[0])
    except ValueError:
        return None, line.strip()
    return seat, (parts[1] if len(parts) > 1 else "").strip()

# -----------------------------
# Interactive play loop
# -----------------------------
def interactive_play(engine: TableEngine) -> None:
    print_view(engine.create_session())
    print(PLAY_HELP)

    while True:
        try:
            line = input("\nbid> ").strip()
        except EOFError:
            print()
            return
        cmd = line.lower()
        if not cmd:
            continue
        if cmd in ("quit", "exit", "q"):
            return
        if cmd == "help":
            print(PLAY_HELP)
            continue

        words = line.split(None, 1)
        try:
            if cmd == "new":
                print_view(engine.create_session())
            elif cmd == "refresh":
                print_view(engine.refresh())
            elif words[0].lower() == "advice":
                seat, bid = split_seat_and_bid(words[1] if len(words) > 1 else "")
                if seat is None:
                    print("⚠️  Name a seat, e.g. advice N 1NT")
                    continue
                adv = engine.advise(seat, bid)
                if adv.is_recommended:
                    print(f"✅ {bid} is the recommended bid")
                else:
                    print(f"💡 Recommended: {adv.recommended_bid}")
                    if adv.explanation:
                        print(f"   {adv.explanation}")
            else:
                seat, bid = split_seat_and_bid(line)
                print_view(engine.submit_bid(seat, bid))
        except (FormatError, TurnError) as e:
            print(f"⚠️  {e}")
        except RemoteRejection as e:
            print(f"❌ {e.text}")
        except requests.RequestException as e:
            print(f"❌ Table server unreachable: {e}")
        except WireFormatError as e:
            print(f"❌ {e}")

# -----------------------------
# One-shot view
# -----------------------------
def show_session(client: BridgeClient, session_id: str) -> None:
    engine = TableEngine(client=client)
    print_view(engine.open_session(session_id))

# -----------------------------
# Run server (programmatically)
# -----------------------------
def run_server(port: int, host: str = "127.0.0.1", reload: bool = True) -> None:
    try:
        import uvicorn
    except ImportError:
        print("❌ uvicorn not installed. Run: pip install -e .")
        sys.exit(1)
    uvicorn.run("api:app", host=host, port=port, reload=reload)

# -----------------------------
# Health checker
# -----------------------------
def health_check(client: BridgeClient) -> None:
    print(f"🔎 Checking table server at {client.base_url} ...")
    try:
        snapshot = client.create_session()
        print(f"✅ Session API ok (session_id={snapshot.session_id}, on turn={snapshot.dealer.value})")
    except (requests.RequestException, RemoteRejection, ValueError) as e:
        print(f"❌ Health check failed: {e}")
        sys.exit(1)

# -----------------------------
# CLI
# -----------------------------
def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Bridge bidding table: console host and terminal client")

    sub = p.add_subparsers(dest="cmd", required=True)

    ps = sub.add_parser("serve", help="Start the table console API (uvicorn)")
    ps.add_argument("--port", type=int, default=8000, help="Port to bind")
    ps.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind")
    ps.add_argument("--no-reload", action="store_true", help="Disable auto-reload")

    pp = sub.add_parser("play", help="Bid at a new table from the terminal")
    pp.add_argument("--base-url", type=str, default=None, help="Table server URL (default: $BRIDGE_BASE_URL)")

    pv = sub.add_parser("show", help="Print one session's hands and auction")
    pv.add_argument("--session-id", type=str, required=True, help="Session to fetch")
    pv.add_argument("--base-url", type=str, default=None, help="Table server URL (default: $BRIDGE_BASE_URL)")

    ph = sub.add_parser("health", help="Check table server availability")
    ph.add_argument("--base-url", type=str, default=None, help="Table server URL (default: $BRIDGE_BASE_URL)")

    return p.parse_args(argv)

def main(argv=None) -> None:
    args = parse_args(argv)

    if args.cmd == "serve":
        run_server(port=args.port, host=args.host, reload=(not args.no_reload))
        return

    client = BridgeClient(base_url=args.base_url)

    if args.cmd == "play":
        try:
            interactive_play(TableEngine(client=client))
        except (requests.RequestException, RemoteRejection, WireFormatError) as e:
            print(f"⚠️  Could not start a table at {client.base_url}: {e}\n"
                  "    Is the table server running?")
            sys.exit(1)
        return

    if args.cmd == "show":
        try:
            show_session(client, args.session_id)
        except RemoteRejection as e:
            print(f"❌ {e.text}")
            sys.exit(1)
        except (requests.RequestException, WireFormatError) as e:
            print(f"❌ Could not fetch session: {e}")
            sys.exit(1)
        return

    if args.cmd == "health":
        health_check(client)
        return

    print("Unknown command. Try: python main.py --help")
    sys.exit(2)

if __name__ == "__main__":
    main()
