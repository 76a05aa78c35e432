from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

SELL_MODE_UNIT = "unit"
SELL_MODE_BOX = "box"
SELL_MODES = (SELL_MODE_UNIT, SELL_MODE_BOX)

ORDER_STATUS_SUBMITTED = "submitted"


@dataclass(frozen=True)
class LineItem:
    unit_price: Decimal
    box_price: Optional[Decimal]
    quantity: int
    tax_rate_percent: Decimal
    sell_mode: str = SELL_MODE_UNIT


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    item_count: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "subtotal": self.subtotal,
            "tax_amount": self.tax_amount,
            "total": self.total,
            "item_count": self.item_count,
        }


@dataclass(frozen=True)
class ProductBase:
    id: int
    name: str
    vat: Decimal
    image_path: Optional[str] = None


@dataclass(frozen=True)
class ProductVariant:
    id: int
    variant_name: str
    unit_price: Decimal
    base: ProductBase
    box_price: Optional[Decimal] = None
    units_per_box: Optional[int] = None
    stock: int = 0


@dataclass
class CartEntry:
    """A persisted cart row joined with the current catalog data of its variant."""

    variant_id: int
    quantity: int
    sell_mode: str
    variant: ProductVariant

    @property
    def key(self):
        return (self.variant_id, self.sell_mode)

    def line_item(self) -> LineItem:
        return LineItem(
            unit_price=self.variant.unit_price,
            box_price=self.variant.box_price,
            quantity=self.quantity,
            tax_rate_percent=self.variant.base.vat,
            sell_mode=self.sell_mode,
        )


@dataclass(frozen=True)
class DeliveryDetails:
    name: str
    surname: str
    telephone: str
    city: str
    street: str
    postal_code: str = ""
    company_name: str = ""
    afm: str = ""


@dataclass
class Order:
    profile_id: str
    entries: List[CartEntry]
    totals: CartTotals
    details: DeliveryDetails
    status: str = ORDER_STATUS_SUBMITTED
    meta: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "profile_id": self.profile_id,
            "status": self.status,
            "total": self.totals.total,
            "items": [
                {"variant_id": e.variant_id, "quantity": e.quantity, "sell_mode": e.sell_mode}
                for e in self.entries
            ],
            "details": {
                "name": self.details.name,
                "surname": self.details.surname,
                "telephone": self.details.telephone,
                "city": self.details.city,
                "street": self.details.street,
                "postal_code": self.details.postal_code,
                "company_name": self.details.company_name,
                "afm": self.details.afm,
            },
            "meta": self.meta,
        }
