from __future__ import annotations
import re
from typing import Dict, Optional

from models import Call, CallKind, Strain

class FormatError(ValueError):
    """Raised when a bid token does not have the shape of a call."""

# Spellings are matched after strip() + lower().
_SPECIAL_TOKENS: Dict[str, Call] = {
    "pass": Call.pass_(),
    "p": Call.pass_(),
    "double": Call.double(),
    "dbl": Call.double(),
    "x": Call.double(),
    "redouble": Call.redouble(),
    "rdbl": Call.redouble(),
    "xx": Call.redouble(),
}

_STRAIN_CODES: Dict[str, Strain] = {
    "c": Strain.CLUBS,
    "d": Strain.DIAMONDS,
    "h": Strain.HEARTS,
    "s": Strain.SPADES,
    "n": Strain.NOTRUMP,
    "nt": Strain.NOTRUMP,
}

_CONTRACT_RE = re.compile(r"([1-7])(nt|n|c|d|h|s)")

GRAMMAR_HINT = "enter a level 1-7 followed by C, D, H, S or NT, or Pass, X (double), XX (redouble)"

def _fold(token: Optional[str]) -> str:
    return (token or "").strip().lower()

def is_well_formed(token: Optional[str]) -> bool:
    folded = _fold(token)
    if folded in _SPECIAL_TOKENS:
        return True
    return _CONTRACT_RE.fullmatch(folded) is not None

def canonicalize(token: Optional[str]) -> Call:
    """
    Map any accepted spelling to its Call. "1n" and "1NT" give the same call,
    as do "x" and "dbl". Call is_well_formed() first; anything else raises
    FormatError.
    """
    folded = _fold(token)
    special = _SPECIAL_TOKENS.get(folded)
    if special is not None:
        return special
    m = _CONTRACT_RE.fullmatch(folded)
    if not m:
        raise FormatError(f"invalid bid format: {token!r}")
    return Call.contract(int(m.group(1)), _STRAIN_CODES[m.group(2)])

def render(call: Call) -> str:
    if call.kind is CallKind.PASS:
        return "Pass"
    if call.kind is CallKind.DOUBLE:
        return "X"
    if call.kind is CallKind.REDOUBLE:
        return "XX"
    return f"{call.level}{call.strain.value}"

def normalize(token: Optional[str]) -> str:
    """Canonical text for a raw token; this is what goes on the wire."""
    return render(canonicalize(token))
