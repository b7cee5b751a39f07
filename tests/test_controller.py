from decimal import Decimal

import pytest

from conftest import eventually
from hotel_site.core.errors import BackendError
from hotel_site.models.review import Review
from hotel_site.models.room import Room
from hotel_site.resources.controller import Phase, ResourceController
from hotel_site.resources.registry import REVIEWS, ROOMS
from hotel_site.resources.store import ResourceStore


class SpyStore:
    """Records every call; optionally fails writes."""

    def __init__(self, records=None, fail_with=None):
        self.records = list(records or [])
        self.fail_with = fail_with
        self.calls = []

    async def list(self, filters=None, order_by=(), limit=None):
        self.calls.append(("list", filters))
        return list(self.records)

    async def create(self, record):
        self.calls.append(("create", record))
        if self.fail_with:
            raise BackendError(self.fail_with)
        return {"id": "new", **record}

    async def update(self, record_id, patch):
        self.calls.append(("update", record_id))
        if self.fail_with:
            raise BackendError(self.fail_with)
        return {"id": record_id, **patch}

    async def delete(self, record_id):
        self.calls.append(("delete", record_id))
        if self.fail_with:
            raise BackendError(self.fail_with)

    def writes(self):
        return [c for c in self.calls if c[0] != "list"]


async def test_blank_price_never_reaches_the_store():
    store = SpyStore()
    controller = ResourceController(ROOMS, store)
    await controller.refresh()

    controller.start_create()
    controller.update_draft({"name": "Deluxe", "price": ""})
    assert await controller.submit() is None

    assert controller.phase == Phase.EDITING
    assert controller.errors == {"price": "Harga per Malam wajib diisi"}
    assert store.writes() == []


async def test_editing_a_field_clears_its_error():
    controller = ResourceController(ROOMS, SpyStore())
    controller.start_create()
    await controller.submit()
    assert "name" in controller.errors

    controller.set_field("name", "Deluxe")
    assert "name" not in controller.errors


async def test_successful_create_closes_the_form():
    store = SpyStore()
    controller = ResourceController(ROOMS, store)
    controller.start_create()
    controller.update_draft({"name": "Deluxe", "price": "500000"})

    saved = await controller.submit()

    assert saved["price"] == Decimal("500000")
    assert controller.phase == Phase.IDLE
    assert controller.draft is None
    notices = controller.take_notices()
    assert [n.title for n in notices] == ["Kamar berhasil ditambahkan"]
    assert controller.take_notices() == []


async def test_backend_failure_keeps_the_draft():
    store = SpyStore(fail_with="duplicate key value")
    controller = ResourceController(ROOMS, store)
    controller.start_edit({"id": "r1", "name": "Deluxe", "price": Decimal("500000")})
    controller.set_field("name", "Deluxe Plus")

    assert await controller.submit() is None

    assert controller.phase == Phase.IDLE
    assert controller.draft["name"] == "Deluxe Plus"
    assert controller.target_id == "r1"
    assert controller.last_error.message == "duplicate key value"
    assert controller.take_notices()[0].message == "duplicate key value"

    store.fail_with = None
    saved = await controller.submit()

    assert saved["name"] == "Deluxe Plus"
    assert store.writes() == [("update", "r1"), ("update", "r1")]
    assert controller.draft is None


async def test_delete_requires_confirmation():
    store = SpyStore()
    controller = ResourceController(ROOMS, store)

    assert await controller.delete("r1") is False
    assert store.writes() == []

    assert await controller.delete("r1", confirmed=True) is True
    assert store.writes() == [("delete", "r1")]
    assert controller.phase == Phase.IDLE
    assert controller.take_notices()[0].title == "Kamar berhasil dihapus"


async def test_failed_delete_returns_to_idle():
    controller = ResourceController(ROOMS, SpyStore(fail_with="violates foreign key"))
    assert await controller.delete("r1", confirmed=True) is False
    assert controller.phase == Phase.IDLE
    assert controller.deleting_id is None


async def test_features_are_deduplicated():
    controller = ResourceController(ROOMS, SpyStore())
    controller.start_create()
    controller.add_feature("AC")
    controller.add_feature(" AC ")
    controller.add_feature("")
    controller.add_feature("TV")
    controller.remove_feature(0)
    assert controller.draft["features"] == ["TV"]


async def test_form_actions_need_an_open_form():
    controller = ResourceController(ROOMS, SpyStore())
    with pytest.raises(RuntimeError):
        controller.set_field("name", "x")


async def test_fetch_failure_becomes_a_notice():
    class BrokenStore(SpyStore):
        async def list(self, filters=None, order_by=(), limit=None):
            raise BackendError("connection refused")

    controller = ResourceController(ROOMS, BrokenStore())
    await controller.refresh()
    assert controller.take_notices()[0].message == "connection refused"


async def test_results_after_unmount_are_dropped():
    store = SpyStore(records=[{"id": "r1"}])
    controller = ResourceController(ROOMS, store)
    controller.unmount()
    await controller.refresh()
    assert controller.records == []


# ---------- against the database ----------
async def test_public_rooms_show_only_active_in_order(broker):
    store = ResourceStore(Room, broker=broker)
    await store.create({"name": "Suite", "price": Decimal("900000"), "sort_order": 2})
    await store.create({"name": "Hidden", "price": Decimal("1"), "sort_order": 0, "is_active": False})
    await store.create({"name": "Standard", "price": Decimal("300000"), "sort_order": 1})

    public = ResourceController.public(ROOMS, store)
    await public.refresh()

    assert [r["name"] for r in public.records] == ["Standard", "Suite"]
    assert public.phase == Phase.IDLE


async def test_deleting_a_review_updates_other_screens(broker, subscriptions):
    store = ResourceStore(Review, broker=broker)
    kept = await store.create({"guest_name": "Ani", "rating": 5})
    removed = await store.create({"guest_name": "Budi", "rating": 4})

    public = ResourceController.public(REVIEWS, store, subscriptions)
    await public.mount()
    assert {r["id"] for r in public.records} == {kept["id"], removed["id"]}

    admin = ResourceController(REVIEWS, store, subscriptions)
    await admin.mount()
    assert await admin.delete(removed["id"], confirmed=True)

    await eventually(lambda: [r["id"] for r in public.records] == [kept["id"]])

    public.unmount()
    admin.unmount()
    assert subscriptions.active_count("reviews") == 0


async def test_featured_reviews_come_first(broker):
    store = ResourceStore(Review, broker=broker)
    await store.create({"guest_name": "Ani", "rating": 5})
    await store.create({"guest_name": "Budi", "rating": 4, "is_featured": True})
    await store.create({"guest_name": "Citra", "rating": 3})

    public = ResourceController.public(REVIEWS, store)
    await public.refresh()

    assert [r["guest_name"] for r in public.records] == ["Budi", "Citra", "Ani"]
