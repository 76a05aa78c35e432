import re
from typing import Optional, Tuple

from .models import SELL_MODES

_PHONE_RE = re.compile(r"^(\+30)?[0-9]{10}$")
_AFM_RE = re.compile(r"^[0-9]{9}$")
_WS_RE = re.compile(r"\s+")

ValidationResult = Tuple[bool, Optional[str]]


def is_non_empty(v: Optional[str]) -> bool:
    return len((v or "").strip()) > 0


def validate_telephone(telephone: str) -> ValidationResult:
    if not telephone.strip():
        return True, None
    if not _PHONE_RE.match(_WS_RE.sub("", telephone)):
        return False, "Το τηλέφωνο πρέπει να είναι 10 ψηφία (π.χ. 6912345678 ή +306912345678)"
    return True, None


def validate_afm(afm: str) -> ValidationResult:
    if not afm.strip():
        return True, None
    if not _AFM_RE.match(_WS_RE.sub("", afm)):
        return False, "Το ΑΦΜ πρέπει να είναι ακριβώς 9 ψηφία"
    return True, None


def require_non_negative(v, name: str = "value") -> None:
    if v < 0:
        raise ValueError(f"{name} must be >= 0")


def require_int(v, name: str = "quantity") -> None:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{name} must be an integer")


def require_quantity(v, minimum: int = 0) -> None:
    require_int(v)
    if v < minimum:
        raise ValueError(f"quantity must be >= {minimum}")


def require_sell_mode(sell_mode: str) -> None:
    if sell_mode not in SELL_MODES:
        raise ValueError(f"sell mode must be one of {', '.join(SELL_MODES)}, got {sell_mode!r}")


def require_in_stock(quantity: int, stock: int) -> None:
    if quantity > stock:
        raise ValueError(f"Διαθέσιμο απόθεμα: {stock}")
