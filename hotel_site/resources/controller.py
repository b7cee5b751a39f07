"""
List/form state for one admin or public screen of a resource.

One controller instance holds the screen's records, its open form draft and
its pending notices. The backend stays the source of truth: every refresh
replaces `records` wholesale, and a change notification simply triggers a
refresh.

Consistency is deliberately weak. A refresh started by a change notification
can race a save in flight on the same screen; whichever fetch resolves last
wins. After `unmount()` results that arrive late are dropped.
"""
import copy
from enum import Enum

from hotel_site.core import notices
from hotel_site.core.errors import BackendError
from hotel_site.core.logging_config import get_logger
from hotel_site.resources.registry import ResourceSpec
from hotel_site.resources.store import ResourceStore

logger = get_logger()


class Phase(str, Enum):
    LOADING = "loading"
    IDLE = "idle"
    EDITING = "editing"
    SAVING = "saving"
    DELETING = "deleting"


class ResourceController:
    def __init__(self, resource: ResourceSpec, store: ResourceStore, subscriptions=None,
                 filters: dict | None = None, order_by=None, limit: int | None = None):
        self.resource = resource
        self.store = store
        self.subscriptions = subscriptions
        self.filters = filters
        self.order_by = tuple(order_by) if order_by is not None else resource.admin_order
        self.limit = limit

        self.records: list[dict] = []
        self.phase = Phase.LOADING
        self.draft: dict | None = None
        self.target_id = None
        self.errors: dict[str, str] = {}
        self.notices: list = []
        self.deleting_id = None
        self.last_error: BackendError | None = None

        self._mounted = False
        self._disposed = False
        self._unsubscribe = None

    @classmethod
    def public(cls, resource: ResourceSpec, store: ResourceStore, subscriptions=None):
        """Controller for a public section: active records only, in display order."""
        return cls(resource, store, subscriptions, filters=dict(resource.public_filters),
                   order_by=resource.public_order, limit=resource.public_limit)

    @property
    def loading(self) -> bool:
        return self.phase == Phase.LOADING

    # =====================================================================
    #                           LIFECYCLE
    # =====================================================================
    async def mount(self):
        self._mounted = True
        self._disposed = False
        if self.subscriptions is not None and self._unsubscribe is None:
            self._unsubscribe = self.subscriptions.subscribe(self.resource.table, self.refresh)
        await self.refresh()

    def unmount(self):
        self._mounted = False
        self._disposed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def refresh(self):
        try:
            records = await self.store.list(self.filters, self.order_by, self.limit)
        except BackendError as e:
            if not self._disposed:
                logger.error(f"Fetch failed for {self.resource.table}: {e.message}")
                self.notices.append(notices.error(e.message))
            return

        if self._disposed:
            return

        self.records = records
        if self.phase == Phase.LOADING:
            self.phase = Phase.IDLE

    # =====================================================================
    #                           FORM
    # =====================================================================
    def start_create(self):
        self.draft = self.resource.default_draft()
        self.target_id = None
        self.errors = {}
        self.phase = Phase.EDITING

    def start_edit(self, record: dict):
        self.draft = self.resource.draft_from_record(copy.deepcopy(record))
        self.target_id = record["id"]
        self.errors = {}
        self.phase = Phase.EDITING

    def cancel(self):
        self.draft = None
        self.target_id = None
        self.errors = {}
        self.phase = Phase.IDLE

    def set_field(self, name: str, value):
        self._require_draft()
        self.resource.get_field(name)
        self.draft[name] = value
        self.errors.pop(name, None)

    def update_draft(self, values: dict):
        for name, value in values.items():
            self.set_field(name, value)

    def add_feature(self, label: str):
        self._require_draft()
        label = (label or "").strip()
        features = self.draft.setdefault("features", [])
        if label and label not in features:
            features.append(label)

    def remove_feature(self, index: int):
        self._require_draft()
        self.draft["features"] = [f for i, f in enumerate(self.draft.get("features") or []) if i != index]

    def _require_draft(self):
        if self.draft is None:
            raise RuntimeError("No form is open")

    # =====================================================================
    #                           SUBMIT / DELETE
    # =====================================================================
    async def submit(self) -> dict | None:
        """Validate and save the open draft. Returns the saved record or None."""
        self._require_draft()

        record, errors = self.resource.build_record(self.draft)
        if errors:
            self.errors = errors
            self.phase = Phase.EDITING
            return None

        self.errors = {}
        self.last_error = None
        self.phase = Phase.SAVING
        editing = self.target_id is not None
        try:
            if editing:
                saved = await self.store.update(self.target_id, record)
            else:
                saved = await self.store.create(record)
        except BackendError as e:
            # Draft and target are kept; submit() again retries, cancel() discards
            self.last_error = e
            self.notices.append(notices.error(e.message))
            self.phase = Phase.IDLE
            return None

        action = "diperbarui" if editing else "ditambahkan"
        self.notices.append(notices.success(f"{self.resource.label} berhasil {action}"))
        self.cancel()

        if self._mounted:
            await self.refresh()
        return saved

    async def delete(self, record_id, confirmed: bool = False) -> bool:
        if not confirmed:
            return False

        self.last_error = None
        self.phase = Phase.DELETING
        self.deleting_id = record_id
        try:
            await self.store.delete(record_id)
        except BackendError as e:
            self.last_error = e
            self.notices.append(notices.error(e.message))
            return False
        finally:
            self.deleting_id = None
            self.phase = Phase.IDLE

        self.notices.append(notices.success(f"{self.resource.label} berhasil dihapus"))
        if self._mounted:
            await self.refresh()
        return True

    def take_notices(self) -> list:
        pending, self.notices = self.notices, []
        return pending
