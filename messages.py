from __future__ import annotations

# User-facing text shown by the table console and the CLI.
NO_BIDS_YET = "No bids yet"
NO_CALL = "-"

NEW_SESSION_CREATED = "New session created"
BID_ACCEPTED = "Bid accepted"
CREATE_SESSION_FIRST = "Create a session first"
ENTER_A_BID = "Enter a bid"
STALE_RESPONSE = "Ignored an out-of-date server response"

PLAY_HELP = """Commands:
  <seat> <bid>          submit a bid, e.g. "N 1NT" or "east pass"
  advice <seat> <bid>   ask the server whether the bid is its recommendation
  refresh               re-fetch the session
  new                   start a new session
  help                  show this text
  quit                  leave the table
Bids: 1C..7NT (N and NT both mean no-trump), Pass/P, X/Dbl/Double, XX/Rdbl/Redouble."""
