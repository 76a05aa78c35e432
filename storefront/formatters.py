from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .config import Settings, settings
from .models import SELL_MODE_BOX, SELL_MODE_UNIT
from .pricing import Number, to_decimal

_SELL_MODE_LABELS = {
    SELL_MODE_UNIT: "ανά συσκευασία",
    SELL_MODE_BOX: "ανά κιβώτιο",
}


def money(v: Number, cfg: Optional[Settings] = None) -> str:
    cfg = cfg or settings
    quantum = Decimal(1).scaleb(-cfg.decimals)
    rounded = to_decimal(v).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{cfg.currency_symbol}{rounded}"


def sell_mode_label(sell_mode: str) -> str:
    return _SELL_MODE_LABELS.get(sell_mode, _SELL_MODE_LABELS[SELL_MODE_UNIT])
