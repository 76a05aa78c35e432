import json
import logging
import time
from typing import Optional

from .cart import CartSession
from .errors import CartPersistenceError, CheckoutError
from .formatters import money
from .models import DeliveryDetails, Order
from .validators import is_non_empty, validate_afm, validate_telephone

logger = logging.getLogger("storefront.service")

REQUIRED_FIELDS = ("name", "surname", "telephone", "city", "street")


def check_details(details: DeliveryDetails) -> None:
    missing = [f for f in REQUIRED_FIELDS if not is_non_empty(getattr(details, f))]
    if missing:
        raise CheckoutError(
            "Συμπληρώστε όλα τα απαιτούμενα πεδία (Όνομα, Επώνυμο, Τηλέφωνο, Πόλη, Οδός): "
            + ", ".join(missing)
        )
    for ok, error in (validate_telephone(details.telephone), validate_afm(details.afm)):
        if not ok:
            raise CheckoutError(error)


def saved_details_complete(details: Optional[DeliveryDetails]) -> bool:
    """Whether saved profile details are enough to check out without a new form.

    Either name or surname will do; telephone, city and street are required.
    """
    if details is None:
        return False
    has_name = is_non_empty(details.name) or is_non_empty(details.surname)
    return (
        has_name
        and is_non_empty(details.telephone)
        and is_non_empty(details.city)
        and is_non_empty(details.street)
    )


def place_order(session: CartSession, details: DeliveryDetails, use_saved: bool = False) -> Order:
    if session.profile_id is None:
        raise CheckoutError("Απαιτείται σύνδεση")
    if use_saved:
        if not saved_details_complete(details):
            raise CheckoutError("Τα αποθηκευμένα στοιχεία είναι ελλιπή")
    else:
        check_details(details)
    if session.is_empty:
        raise CheckoutError("Το καλάθι είναι άδειο")

    totals = session.totals()
    order = Order(
        profile_id=session.profile_id,
        entries=session.items,
        totals=totals,
        details=details,
    )
    order.meta["ts"] = str(int(time.time()))
    try:
        session.clear()
    except CartPersistenceError as e:
        logger.error("order for %s not completed: %s", order.profile_id, e)
        raise CheckoutError("Αποτυχία ολοκλήρωσης") from e
    logger.info("order placed for %s total=%s", order.profile_id, totals.total)
    return order


def print_receipt(order: Order) -> str:
    payload = {
        "profile": order.profile_id,
        "total": money(order.totals.total),
        "count": order.totals.item_count,
        "status": order.status,
    }
    text = json.dumps(payload, ensure_ascii=False)
    print(text)
    return text
