from fastapi import APIRouter, Depends, HTTPException, Request

from hotel_site.core.dependencies import get_settings_store, require_admin
from hotel_site.core.errors import BackendError
from hotel_site.resources.registry import get_resource
from hotel_site.resources.store import ResourceStore, SettingsStore
from hotel_site.schemas.settings import SettingsUpdate, SiteSettings
from hotel_site.services.site_settings import save_settings

router = APIRouter(prefix="/admin", tags=["Admin Panel"], dependencies=[Depends(require_admin)])

DASHBOARD_TABLES = ("rooms", "facilities", "services", "reviews")


# ==================================================
# DASHBOARD COUNTS
# ==================================================
@router.get("/dashboard")
async def dashboard(request: Request):
    counts = {}
    for table in DASHBOARD_TABLES:
        store = ResourceStore(get_resource(table).model, broker=request.app.state.broker)
        try:
            counts[table] = await store.count()
        except BackendError as e:
            raise HTTPException(status_code=400, detail=e.message)
    return counts


# ==================================================
# SITE SETTINGS
# ==================================================
@router.put("/settings", response_model=SiteSettings)
async def update_settings(data: SettingsUpdate, store: SettingsStore = Depends(get_settings_store)):
    try:
        return await save_settings(store, data.model_dump(exclude_none=True))
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message)
