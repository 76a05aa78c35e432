from typing import Dict, Iterable, List, Tuple

from .errors import CartStoreError
from .models import CartEntry, ProductVariant

RowKey = Tuple[str, int, str]


class CartStore:
    """Persistence boundary for cart rows, keyed by profile, variant and sell mode.

    Implementations raise CartStoreError when a write or read fails.
    """

    def variant(self, variant_id: int) -> ProductVariant:
        raise NotImplementedError

    def fetch(self, profile_id: str) -> List[CartEntry]:
        raise NotImplementedError

    def insert(self, profile_id: str, variant_id: int, quantity: int, sell_mode: str) -> None:
        raise NotImplementedError

    def update(self, profile_id: str, variant_id: int, sell_mode: str, quantity: int) -> None:
        raise NotImplementedError

    def delete(self, profile_id: str, variant_id: int, sell_mode: str) -> None:
        raise NotImplementedError

    def clear(self, profile_id: str) -> None:
        raise NotImplementedError


class InMemoryCartStore(CartStore):
    def __init__(self, variants: Iterable[ProductVariant] = ()):
        self.variants: Dict[int, ProductVariant] = {v.id: v for v in variants}
        self.rows: Dict[RowKey, int] = {}

    def variant(self, variant_id: int) -> ProductVariant:
        try:
            return self.variants[variant_id]
        except KeyError:
            raise CartStoreError(f"unknown variant {variant_id}") from None

    def fetch(self, profile_id: str) -> List[CartEntry]:
        return [
            CartEntry(variant_id=vid, quantity=qty, sell_mode=mode, variant=self.variant(vid))
            for (pid, vid, mode), qty in self.rows.items()
            if pid == profile_id
        ]

    def insert(self, profile_id: str, variant_id: int, quantity: int, sell_mode: str) -> None:
        self.variant(variant_id)
        key = (profile_id, variant_id, sell_mode)
        if key in self.rows:
            raise CartStoreError(f"duplicate cart row {key}")
        self.rows[key] = quantity

    def update(self, profile_id: str, variant_id: int, sell_mode: str, quantity: int) -> None:
        key = (profile_id, variant_id, sell_mode)
        if key not in self.rows:
            raise CartStoreError(f"no cart row {key}")
        self.rows[key] = quantity

    def delete(self, profile_id: str, variant_id: int, sell_mode: str) -> None:
        self.rows.pop((profile_id, variant_id, sell_mode), None)

    def clear(self, profile_id: str) -> None:
        for key in [k for k in self.rows if k[0] == profile_id]:
            del self.rows[key]
