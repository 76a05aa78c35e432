from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from storefront.cart import CartSession
from storefront.models import (
    SELL_MODE_UNIT,
    DeliveryDetails,
    LineItem,
    ProductBase,
    ProductVariant,
)
from storefront.store import InMemoryCartStore


@dataclass(frozen=True)
class Defaults:
    unit_price: str = "10.00"
    vat: str = "24"
    profile_id: str = "P1"


def make_item(
    unit_price="10.00",
    quantity: int = 1,
    tax: str = Defaults.vat,
    sell_mode: str = SELL_MODE_UNIT,
    box_price: Optional[str] = None,
) -> LineItem:
    return LineItem(
        unit_price=Decimal(unit_price),
        box_price=Decimal(box_price) if box_price is not None else None,
        quantity=quantity,
        tax_rate_percent=Decimal(tax),
        sell_mode=sell_mode,
    )


def make_variant(
    vid: int = 1,
    unit_price: str = Defaults.unit_price,
    box_price: Optional[str] = None,
    vat: str = Defaults.vat,
    units_per_box: Optional[int] = None,
    stock: int = 100,
) -> ProductVariant:
    return ProductVariant(
        id=vid,
        variant_name=f"Variant-{vid}",
        unit_price=Decimal(unit_price),
        box_price=Decimal(box_price) if box_price is not None else None,
        units_per_box=units_per_box,
        stock=stock,
        base=ProductBase(id=vid, name=f"Box-{vid}", vat=Decimal(vat)),
    )


def make_catalog() -> List[ProductVariant]:
    return [
        make_variant(1, unit_price="5.00", vat="13"),
        make_variant(2, unit_price="5.00", box_price="40.00", vat="24", units_per_box=10),
        make_variant(3, unit_price="10.00", vat="24"),
    ]


def make_store(variants: List[ProductVariant] = None) -> InMemoryCartStore:
    return InMemoryCartStore(variants if variants is not None else make_catalog())


def make_session(store: InMemoryCartStore = None, profile_id: Optional[str] = Defaults.profile_id) -> CartSession:
    s = CartSession(store if store is not None else make_store(), profile_id)
    s.load()
    return s


def make_details(**overrides) -> DeliveryDetails:
    fields = {
        "name": "Maria",
        "surname": "Papadopoulou",
        "telephone": "6912345678",
        "city": "Athens",
        "street": "Ermou 10",
    }
    fields.update(overrides)
    return DeliveryDetails(**fields)
