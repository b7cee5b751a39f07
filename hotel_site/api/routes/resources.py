"""
Admin CRUD endpoints, one router per resource built from its definition.

Create and update go through `ResourceController` so the admin API applies the
same local validation as the admin screens: an invalid draft is answered with
422 and never reaches the database.
"""
from fastapi import APIRouter, Body, Depends, HTTPException

from hotel_site.core.dependencies import require_admin, resource_store
from hotel_site.core.errors import BackendError, RecordNotFound, ValidationFailed
from hotel_site.resources.controller import ResourceController
from hotel_site.resources.registry import RESOURCES, get_resource
from hotel_site.resources.store import ResourceStore
from hotel_site.schemas.facility import FacilityOut
from hotel_site.schemas.footer_logo import FooterLogoOut
from hotel_site.schemas.review import ReviewOut
from hotel_site.schemas.room import RoomOut
from hotel_site.schemas.service import ServiceOut

OUT_SCHEMAS = {
    "rooms": RoomOut,
    "facilities": FacilityOut,
    "services": ServiceOut,
    "reviews": ReviewOut,
    "footer_logos": FooterLogoOut,
}


def backend_http_error(error: BackendError | None) -> HTTPException:
    if isinstance(error, RecordNotFound):
        return HTTPException(status_code=404, detail=error.message)
    if error is None:
        return HTTPException(status_code=400, detail="Terjadi kesalahan, silakan coba lagi")
    return HTTPException(status_code=400, detail=error.message)


async def submit_draft(controller: ResourceController, draft: dict):
    known = {spec.name for spec in controller.resource.fields}
    controller.update_draft({k: v for k, v in draft.items() if k in known})

    saved = await controller.submit()
    if saved is not None:
        return saved

    if controller.errors:
        raise ValidationFailed(controller.errors)
    raise backend_http_error(controller.last_error)


def build_resource_router(table: str) -> APIRouter:
    resource = get_resource(table)
    out_schema = OUT_SCHEMAS[table]
    get_store = resource_store(table)

    router = APIRouter(
        prefix=f"/admin/{table}",
        tags=[f"Admin {resource.label}"],
        dependencies=[Depends(require_admin)]
    )

    # ---------- LIST (inactive rows included) ----------
    @router.get("/", response_model=list[out_schema])
    async def list_records(store: ResourceStore = Depends(get_store)):
        try:
            return await store.list(order_by=resource.admin_order)
        except BackendError as e:
            raise backend_http_error(e)

    # ---------- CREATE ----------
    @router.post("/", response_model=out_schema, status_code=201)
    async def create_record(draft: dict = Body(...), store: ResourceStore = Depends(get_store)):
        controller = ResourceController(resource, store)
        controller.start_create()
        return await submit_draft(controller, draft)

    # ---------- UPDATE ----------
    @router.put("/{record_id}", response_model=out_schema)
    async def update_record(record_id: str, draft: dict = Body(...), store: ResourceStore = Depends(get_store)):
        try:
            current = await store.list(filters={"id": record_id}, limit=1)
        except BackendError as e:
            raise backend_http_error(e)
        if not current:
            raise HTTPException(status_code=404, detail=f"{resource.label} tidak ditemukan")

        controller = ResourceController(resource, store)
        controller.start_edit(current[0])
        return await submit_draft(controller, draft)

    # ---------- DELETE ----------
    @router.delete("/{record_id}")
    async def delete_record(record_id: str, confirm: bool = False, store: ResourceStore = Depends(get_store)):
        if not confirm:
            raise HTTPException(status_code=400, detail="Konfirmasi penghapusan diperlukan")

        controller = ResourceController(resource, store)
        if not await controller.delete(record_id, confirmed=True):
            raise backend_http_error(controller.last_error)

        return {"message": f"{resource.label} berhasil dihapus"}

    return router


routers = [build_resource_router(table) for table in RESOURCES]
