import logging
from decimal import Decimal

import pytest

from common.factories import make_session, make_store, make_variant
from storefront.errors import CartPersistenceError, CartStoreError, LoginRequiredError


def _fail(*args, **kwargs):
    raise CartStoreError("backend unavailable")


@pytest.mark.integration
def test_add_inserts_then_merges(session, store):
    session.add(1, 3, "unit")
    session.add(1, 2, "unit")
    session.add(2, 1, "box")
    assert store.rows == {("P1", 1, "unit"): 5, ("P1", 2, "box"): 1}
    assert [(e.variant_id, e.quantity, e.sell_mode) for e in session.items] == [(1, 5, "unit"), (2, 1, "box")]


@pytest.mark.integration
def test_same_variant_different_mode_is_a_separate_line(session):
    session.add(2, 1, "unit")
    session.add(2, 1, "box")
    assert len(session.items) == 2
    totals = session.totals()
    assert totals.subtotal == Decimal("45.00")
    assert totals.item_count == 2


@pytest.mark.integration
def test_scenario_totals_through_session(session):
    session.add(1, 3, "unit")
    session.add(2, 1, "box")
    totals = session.totals()
    assert (totals.subtotal, totals.tax_amount, totals.total, totals.item_count) == (
        Decimal("55.00"), Decimal("11.55"), Decimal("66.55"), 4
    )


@pytest.mark.integration
def test_update_quantity_is_persisted(session, store):
    session.add(3, 1, "unit")
    session.update_quantity(3, 4, "unit")
    assert store.rows[("P1", 3, "unit")] == 4
    assert session.totals().total == Decimal("49.60")


@pytest.mark.integration
def test_update_to_zero_removes_line(session, store):
    session.add(3, 1, "unit")
    session.update_quantity(3, 0, "unit")
    assert session.is_empty
    assert store.rows == {}


@pytest.mark.integration
def test_failed_update_reloads_authoritative_state(session, store, monkeypatch, caplog):
    session.add(3, 2, "unit")
    monkeypatch.setattr(store, "update", _fail)
    caplog.set_level(logging.ERROR, logger="storefront.cart")

    with pytest.raises(CartPersistenceError):
        session.update_quantity(3, 9, "unit")

    # 回滚：本地数量恢复为存储中的值，总额随之重算
    assert session.find(3, "unit").quantity == 2
    assert session.totals().total == Decimal("24.80")
    assert "backend unavailable" in caplog.text


@pytest.mark.integration
def test_failed_remove_restores_line(session, store, monkeypatch):
    session.add(1, 1, "unit")
    monkeypatch.setattr(store, "delete", _fail)
    with pytest.raises(CartPersistenceError):
        session.remove(1, "unit")
    assert session.find(1, "unit") is not None


@pytest.mark.integration
def test_failed_add_leaves_cart_untouched(session, store):
    with pytest.raises(CartPersistenceError):
        session.add(404, 1, "unit")
    assert session.is_empty
    assert store.rows == {}


@pytest.mark.integration
def test_clear_failure_keeps_local_items(session, store, monkeypatch):
    session.add(1, 1, "unit")
    monkeypatch.setattr(store, "clear", _fail)
    with pytest.raises(CartPersistenceError):
        session.clear()
    assert not session.is_empty


@pytest.mark.integration
def test_anonymous_session(store):
    session = make_session(store, profile_id=None)
    with pytest.raises(LoginRequiredError):
        session.add(1, 1, "unit")
    session.update_quantity(1, 2, "unit")
    session.remove(1, "unit")
    session.clear()
    assert session.is_empty
    assert session.totals().total == 0


@pytest.mark.integration
def test_sessions_are_isolated_by_profile(store):
    a = make_session(store, "A")
    b = make_session(store, "B")
    a.add(1, 2, "unit")
    b.load()
    assert b.is_empty
    assert len(a.items) == 1


@pytest.mark.integration
def test_failed_write_and_failed_reload_restore_previous_items(session, store, monkeypatch):
    session.add(3, 2, "unit")
    monkeypatch.setattr(store, "update", _fail)
    monkeypatch.setattr(store, "fetch", _fail)

    with pytest.raises(CartPersistenceError, match="ενημέρωσης ποσότητας"):
        session.update_quantity(3, 9, "unit")

    # 存储不可读时恢复修改前的本地状态
    assert session.find(3, "unit").quantity == 2
    assert store.rows[("P1", 3, "unit")] == 2


@pytest.mark.integration
def test_failed_remove_and_failed_reload_keep_line(session, store, monkeypatch):
    session.add(1, 1, "unit")
    monkeypatch.setattr(store, "delete", _fail)
    monkeypatch.setattr(store, "fetch", _fail)
    with pytest.raises(CartPersistenceError, match="αφαίρεσης"):
        session.remove(1, "unit")
    assert session.find(1, "unit") is not None


@pytest.mark.integration
def test_load_failure_raises_persistence_error(session, store, monkeypatch):
    monkeypatch.setattr(store, "fetch", _fail)
    with pytest.raises(CartPersistenceError, match="φόρτωσης"):
        session.load()


@pytest.mark.integration
@pytest.mark.parametrize("quantity", [0, -2, 1.5])
def test_add_rejects_non_positive_quantity(session, store, quantity):
    with pytest.raises(ValueError):
        session.add(1, quantity, "unit")
    assert store.rows == {}


@pytest.mark.integration
def test_unknown_sell_mode_rejected(session, store):
    with pytest.raises(ValueError, match="sell mode"):
        session.add(2, 1, "crate")
    session.add(2, 1, "box")
    with pytest.raises(ValueError):
        session.update_quantity(2, 3, "crate")
    with pytest.raises(ValueError):
        session.remove(2, "crate")
    assert store.rows == {("P1", 2, "box"): 1}


@pytest.mark.integration
def test_update_quantity_rejects_fractional(session, store):
    session.add(1, 1, "unit")
    with pytest.raises(ValueError):
        session.update_quantity(1, 2.5, "unit")
    assert session.find(1, "unit").quantity == 1
    assert store.rows[("P1", 1, "unit")] == 1


@pytest.mark.integration
def test_quantity_is_capped_by_stock():
    store = make_store([make_variant(7, stock=3)])
    session = make_session(store)
    session.add(7, 2, "unit")
    with pytest.raises(ValueError):
        session.add(7, 2, "unit")
    with pytest.raises(ValueError):
        session.update_quantity(7, 4, "unit")
    session.update_quantity(7, 3, "unit")
    assert store.rows == {("P1", 7, "unit"): 3}
