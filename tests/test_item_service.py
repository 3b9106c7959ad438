import json

import pytest

from qmedic.models.history import ActionKind
from qmedic.schemas.item import ItemCreate, ItemUpdate
from qmedic.services import item_service
from qmedic.services.action_service import apply_action
from qmedic.services.exceptions import DuplicateItem, ItemNotFound


def test_summary_counts_history_and_low_stock(db, seed_item, context):
    seed_item("MED001", quantity=5, min_quantity=3)
    seed_item("MED002", quantity=2, min_quantity=3)
    apply_action(db, scan_code="MED001", action=ActionKind.CHECK_IN, quantity=2, context=context)
    apply_action(db, scan_code="MED001", action=ActionKind.REMOVE_ALL, quantity=7, context=context)

    summary = item_service.get_inventory_summary(db)

    assert summary.checked_in == 2
    assert summary.checked_out == 7
    # MED001 is now out of stock, which is not counted as low stock
    assert summary.low_stock_count == 1


def test_summary_uses_cached_value(db, monkeypatch):
    cached = json.dumps({"checked_in": 11, "checked_out": 4, "low_stock_count": 2})
    monkeypatch.setattr(item_service, "cache_get", lambda key: cached)

    summary = item_service.get_inventory_summary(db)

    assert (summary.checked_in, summary.checked_out, summary.low_stock_count) == (11, 4, 2)


def test_summary_is_cached_after_compute(db, seed_item, monkeypatch):
    stored = {}
    monkeypatch.setattr(item_service, "cache_get", lambda key: None)
    monkeypatch.setattr(
        item_service, "cache_set", lambda key, value, ttl=60: stored.update({key: value})
    )
    seed_item("MED001", quantity=1, min_quantity=3)

    item_service.get_inventory_summary(db)

    assert json.loads(stored[item_service.SUMMARY_CACHE_KEY])["low_stock_count"] == 1


def test_actions_invalidate_summary_cache(db, seed_item, context, monkeypatch):
    deleted = []
    monkeypatch.setattr(item_service, "cache_delete", lambda key: deleted.append(key))
    seed_item("MED001")

    apply_action(db, scan_code="MED001", action=ActionKind.USE, quantity=1, context=context)

    assert deleted == [item_service.SUMMARY_CACHE_KEY]


class FakeCache:
    """In-memory stand-in for the Redis helpers used by item_service."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ttl=60):
        self.data[key] = value
        return True

    def delete(self, key):
        self.data.pop(key, None)
        return True

    def incr(self, key):
        value = int(self.data.get(key, 0)) + 1
        self.data[key] = str(value)
        return value


@pytest.fixture
def fake_cache(monkeypatch):
    cache = FakeCache()
    monkeypatch.setattr(item_service, "cache_get", cache.get)
    monkeypatch.setattr(item_service, "cache_set", cache.set)
    monkeypatch.setattr(item_service, "cache_delete", cache.delete)
    monkeypatch.setattr(item_service, "cache_incr", cache.incr)
    return cache


def test_invalidation_bumps_summary_generation(fake_cache):
    fake_cache.data[item_service.SUMMARY_CACHE_KEY] = "{}"

    item_service.invalidate_summary_cache()
    item_service.invalidate_summary_cache()

    assert item_service.SUMMARY_CACHE_KEY not in fake_cache.data
    assert fake_cache.data[item_service.SUMMARY_GENERATION_KEY] == "2"


def test_summary_computed_across_a_commit_is_not_cached(
    db, seed_item, context, fake_cache, monkeypatch
):
    seed_item("MED001", quantity=5, min_quantity=3)
    compute = item_service._compute_summary
    calls = []

    def compute_then_commit_action(session):
        summary = compute(session)
        if not calls:
            # Another request commits and invalidates before this one caches
            session.rollback()
            apply_action(
                session, scan_code="MED001", action=ActionKind.USE, quantity=3, context=context
            )
        calls.append(summary)
        return summary

    monkeypatch.setattr(item_service, "_compute_summary", compute_then_commit_action)

    stale = item_service.get_inventory_summary(db)

    assert stale.low_stock_count == 0
    assert item_service.SUMMARY_CACHE_KEY not in fake_cache.data

    fresh = item_service.get_inventory_summary(db)

    assert fresh.low_stock_count == 1
    assert fresh.checked_out == 3
    cached = json.loads(fake_cache.data[item_service.SUMMARY_CACHE_KEY])
    assert cached["low_stock_count"] == 1


def test_create_item_rejects_duplicate_code(db, seed_item):
    seed_item("MED001")

    with pytest.raises(DuplicateItem):
        item_service.create_item(
            db, ItemCreate(item_id="MED001", name="EpiPen Jr", category="Medication")
        )


def test_update_item_can_clear_expiry(db, seed_item):
    seed_item("MED001")
    item_service.update_item(db, "MED001", ItemUpdate(expiry_date="2027-01-01"))

    item = item_service.update_item(db, "MED001", ItemUpdate(expiry_date=None))

    assert item.expiry_date is None


def test_update_unknown_item(db):
    with pytest.raises(ItemNotFound):
        item_service.update_item(db, "NOPE", ItemUpdate(name="x"))
