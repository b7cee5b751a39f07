"""
Store adapters: translate list/create/update/delete/count intent into
SQLAlchemy calls against the managed database.

The database session API is blocking, so every operation runs in the default
executor and is awaited with a timeout. Nothing is cached here: each `list`
returns the full result for the caller to replace its local copy with.
"""
import asyncio
import functools
from typing import Any, Callable, NamedTuple, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_site.core.config import BACKEND_TIMEOUT_SECONDS
from hotel_site.core.errors import BackendError, BackendTimeout, RecordNotFound
from hotel_site.core.logging_config import get_logger
from hotel_site.db.session import SessionLocal
from hotel_site.models.enums import ChangeEvent
from hotel_site.models.site_setting import SiteSetting

logger = get_logger()


class OrderBy(NamedTuple):
    field: str
    ascending: bool = True


def _backend_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class _SessionRunner:
    def __init__(self, table: str, session_factory: Callable[[], Session] | None, timeout: float):
        self.table = table
        self.session_factory = session_factory or SessionLocal
        self.timeout = timeout

    def _in_session(self, fn, *args):
        db = self.session_factory()
        try:
            return fn(db, *args)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"DB ERROR: {self.table} -> {e}")
            raise BackendError(_backend_message(e))
        finally:
            db.close()

    async def _run(self, fn, *args):
        loop = asyncio.get_running_loop()
        call = functools.partial(self._in_session, fn, *args)
        try:
            return await asyncio.wait_for(loop.run_in_executor(None, call), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"DB TIMEOUT: {self.table} after {self.timeout}s")
            raise BackendTimeout(self.timeout)


# =====================================================================
#                           RESOURCE TABLES
# =====================================================================
class ResourceStore(_SessionRunner):
    def __init__(self, model, session_factory=None, broker=None, timeout: float = BACKEND_TIMEOUT_SECONDS):
        super().__init__(model.__tablename__, session_factory, timeout)
        self.model = model
        self.broker = broker
        self._columns = {c.key: c for c in model.__table__.columns}
        self._pk = list(model.__table__.primary_key.columns)[0].key

    # ---------- helpers ----------
    def _attr(self, field: str):
        if field not in self._columns:
            raise BackendError(f"Kolom tidak dikenal: {self.table}.{field}")
        return getattr(self.model, field)

    def _to_record(self, obj) -> dict:
        return {key: getattr(obj, key) for key in self._columns}

    def _writable(self, values: dict) -> dict:
        return {k: v for k, v in values.items() if k in self._columns and k != self._pk}

    def _filtered(self, db: Session, filters: dict | None):
        query = db.query(self.model)
        for field, value in (filters or {}).items():
            query = query.filter(self._attr(field) == value)
        return query

    async def _notify(self, event: ChangeEvent, record_id):
        if self.broker is not None:
            await self.broker.publish(self.table, event.value)
        logger.bind(log_type="admin").info(f"{event.value} {self.table} id={record_id}")

    # ---------- sync bodies ----------
    def _list(self, db: Session, filters, order_by: Sequence[OrderBy], limit):
        clauses = []
        for order in order_by:
            column = self._attr(order.field)
            clauses.append(column.asc() if order.ascending else column.desc())

        # Ties keep insertion order
        if "created_at" in self._columns:
            clauses.append(self.model.created_at.asc())
        clauses.append(getattr(self.model, self._pk).asc())

        query = self._filtered(db, filters).order_by(*clauses)
        if limit is not None:
            query = query.limit(limit)

        return [self._to_record(row) for row in query.all()]

    def _create(self, db: Session, record: dict):
        obj = self.model(**self._writable(record))
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return self._to_record(obj)

    def _update(self, db: Session, record_id, patch: dict):
        obj = db.get(self.model, record_id)
        if obj is None:
            raise RecordNotFound(self.table, record_id)

        for key, value in self._writable(patch).items():
            setattr(obj, key, value)

        db.commit()
        db.refresh(obj)
        return self._to_record(obj)

    def _delete(self, db: Session, record_id):
        obj = db.get(self.model, record_id)
        if obj is None:
            raise RecordNotFound(self.table, record_id)

        db.delete(obj)
        db.commit()

    def _count(self, db: Session, filters):
        return self._filtered(db, filters).count()

    # ---------- public API ----------
    async def list(self, filters: dict | None = None, order_by: Sequence[OrderBy] = (), limit: int | None = None) -> list[dict]:
        return await self._run(self._list, filters, tuple(order_by), limit)

    async def create(self, record: dict) -> dict:
        created = await self._run(self._create, record)
        await self._notify(ChangeEvent.INSERT, created[self._pk])
        return created

    async def update(self, record_id, patch: dict) -> dict:
        updated = await self._run(self._update, record_id, patch)
        await self._notify(ChangeEvent.UPDATE, record_id)
        return updated

    async def delete(self, record_id) -> None:
        await self._run(self._delete, record_id)
        await self._notify(ChangeEvent.DELETE, record_id)

    async def count(self, filters: dict | None = None) -> int:
        return await self._run(self._count, filters)


# =====================================================================
#                           KEY / VALUE SETTINGS
# =====================================================================
class SettingsStore(_SessionRunner):
    def __init__(self, session_factory=None, broker=None, timeout: float = BACKEND_TIMEOUT_SECONDS):
        super().__init__(SiteSetting.__tablename__, session_factory, timeout)
        self.broker = broker

    def _rows(self, db: Session):
        return [(row.key, row.value) for row in db.query(SiteSetting).all()]

    def _upsert(self, db: Session, key: str, value: str):
        row = db.get(SiteSetting, key)
        if row is None:
            db.add(SiteSetting(key=key, value=value))
            event = ChangeEvent.INSERT
        else:
            row.value = value
            event = ChangeEvent.UPDATE
        db.commit()
        return event

    async def rows(self) -> list[tuple[str, Any]]:
        return await self._run(self._rows)

    async def upsert(self, key: str, value: str) -> None:
        event = await self._run(self._upsert, key, value)
        if self.broker is not None:
            await self.broker.publish(self.table, event.value)
