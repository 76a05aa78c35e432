import logging
from dataclasses import replace
from typing import Callable, List, Optional

from .errors import CartPersistenceError, CartStoreError, LoginRequiredError
from .models import CartEntry, CartTotals, LineItem
from .pricing import compute_totals
from .store import CartStore
from .validators import require_in_stock, require_int, require_quantity, require_sell_mode

logger = logging.getLogger("storefront.cart")


class CartSession:
    """A shopper's cart, mirrored locally from a CartStore.

    Quantity changes and removals are applied locally first and then written
    to the store. If the write fails the local items are reloaded from the
    store (or restored, if the store cannot be read) and CartPersistenceError
    is raised. Totals are recomputed on every call to totals().
    """

    def __init__(self, store: CartStore, profile_id: Optional[str]):
        self.store = store
        self.profile_id = profile_id
        self._items: List[CartEntry] = []

    @property
    def items(self) -> List[CartEntry]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def line_items(self) -> List[LineItem]:
        return [e.line_item() for e in self._items]

    def totals(self) -> CartTotals:
        return compute_totals(self.line_items())

    def find(self, variant_id: int, sell_mode: str) -> Optional[CartEntry]:
        for e in self._items:
            if e.key == (variant_id, sell_mode):
                return e
        return None

    def load(self) -> List[CartEntry]:
        if self.profile_id is None:
            self._items = []
            return self.items
        try:
            self._items = self.store.fetch(self.profile_id)
        except CartStoreError as e:
            logger.error("failed to load cart for %s: %s", self.profile_id, e)
            raise CartPersistenceError("Αποτυχία φόρτωσης καλαθιού") from e
        return self.items

    def add(self, variant_id: int, quantity: int, sell_mode: str) -> None:
        if self.profile_id is None:
            raise LoginRequiredError("Συνδεθείτε για να προσθέσετε προϊόντα στο καλάθι")
        require_quantity(quantity, minimum=1)
        require_sell_mode(sell_mode)
        existing = self.find(variant_id, sell_mode)
        try:
            variant = existing.variant if existing is not None else self.store.variant(variant_id)
            new_quantity = quantity + (existing.quantity if existing is not None else 0)
            require_in_stock(new_quantity, variant.stock)
            if existing is not None:
                self.store.update(self.profile_id, variant_id, sell_mode, new_quantity)
            else:
                self.store.insert(self.profile_id, variant_id, quantity, sell_mode)
        except CartStoreError as e:
            logger.error("failed to add variant %s (%s) to cart: %s", variant_id, sell_mode, e)
            raise CartPersistenceError("Αποτυχία προσθήκης στο καλάθι") from e
        self.load()

    def update_quantity(self, variant_id: int, quantity: int, sell_mode: str) -> None:
        if self.profile_id is None:
            return
        require_int(quantity)
        require_sell_mode(sell_mode)
        if quantity <= 0:
            self.remove(variant_id, sell_mode)
            return
        existing = self.find(variant_id, sell_mode)
        if existing is not None:
            require_in_stock(quantity, existing.variant.stock)
        snapshot = self._items
        self._items = [
            replace(e, quantity=quantity) if e.key == (variant_id, sell_mode) else e
            for e in self._items
        ]
        self._write(
            lambda: self.store.update(self.profile_id, variant_id, sell_mode, quantity),
            snapshot,
            "Αποτυχία ενημέρωσης ποσότητας",
        )

    def remove(self, variant_id: int, sell_mode: str) -> None:
        if self.profile_id is None:
            return
        require_sell_mode(sell_mode)
        snapshot = self._items
        self._items = [e for e in self._items if e.key != (variant_id, sell_mode)]
        self._write(
            lambda: self.store.delete(self.profile_id, variant_id, sell_mode),
            snapshot,
            "Αποτυχία αφαίρεσης προϊόντος",
        )

    def clear(self) -> None:
        if self.profile_id is None:
            return
        try:
            self.store.clear(self.profile_id)
        except CartStoreError as e:
            logger.error("failed to clear cart for %s: %s", self.profile_id, e)
            raise CartPersistenceError("Αποτυχία εκκαθάρισης καλαθιού") from e
        self._items = []

    def _write(self, write: Callable[[], None], snapshot: List[CartEntry], message: str) -> None:
        try:
            write()
        except CartStoreError as e:
            logger.error("%s: %s", message, e)
            # the store is authoritative; drop the optimistic change
            try:
                self._items = self.store.fetch(self.profile_id)
            except CartStoreError as reload_error:
                logger.error("failed to reload cart for %s: %s", self.profile_id, reload_error)
                self._items = snapshot
            raise CartPersistenceError(message) from e
