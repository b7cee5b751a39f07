"""
Public read-only sections of the hotel site.

Each section lists only active records in display order and decorates them
with the labels and links the page renders (price labels, galleries, booking
links, review initials).
"""
from fastapi import APIRouter, Depends, HTTPException, Request

from hotel_site.core.dependencies import get_settings_store
from hotel_site.core.errors import BackendError
from hotel_site.resources.controller import ResourceController
from hotel_site.resources.registry import get_resource
from hotel_site.resources.store import ResourceStore, SettingsStore
from hotel_site.schemas.facility import FacilityPublic
from hotel_site.schemas.footer_logo import FooterLogoOut
from hotel_site.schemas.review import ReviewPublic, ReviewSection
from hotel_site.schemas.room import RoomPublic
from hotel_site.schemas.service import ServicePublic
from hotel_site.schemas.settings import ContactInfo, SiteSettings
from hotel_site.services.site_settings import load_settings
from hotel_site.utils import display

router = APIRouter(prefix="/site", tags=["Public Site"])


async def public_records(request: Request, table: str) -> list[dict]:
    resource = get_resource(table)
    store = ResourceStore(resource.model, broker=request.app.state.broker)
    controller = ResourceController.public(resource, store)

    await controller.refresh()
    failures = controller.take_notices()
    if failures:
        raise HTTPException(status_code=400, detail=failures[0].message)
    return controller.records


async def current_settings(store: SettingsStore) -> SiteSettings:
    try:
        return await load_settings(store)
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message)


# =====================================================================
#                           SETTINGS / CONTACT
# =====================================================================
@router.get("/settings", response_model=SiteSettings)
async def site_settings(store: SettingsStore = Depends(get_settings_store)):
    return await current_settings(store)


@router.get("/contact", response_model=ContactInfo)
async def contact(store: SettingsStore = Depends(get_settings_store)):
    settings = await current_settings(store)
    return ContactInfo(
        phone=settings.phone,
        email=settings.email,
        address=settings.address,
        whatsapp=settings.whatsapp,
        whatsapp_link=display.whatsapp_link(settings.whatsapp),
        directions_link=display.directions_link(settings.address),
        google_maps_url=settings.google_maps_url,
    )


# =====================================================================
#                           ROOMS
# =====================================================================
@router.get("/rooms", response_model=list[RoomPublic])
async def rooms(request: Request, store: SettingsStore = Depends(get_settings_store)):
    records = await public_records(request, "rooms")
    settings = await current_settings(store)

    result = []
    for room in records:
        gallery = display.build_gallery(room.get("image_url"), room.get("images"))
        result.append(RoomPublic(
            **room,
            price_label=display.room_price_label(room["price"]),
            gallery=gallery,
            image_count=len(gallery),
            booking_link=display.booking_link(settings.whatsapp, room["name"], settings.hotel_name),
        ))
    return result


# ---------- FACILITIES ----------
@router.get("/facilities", response_model=list[FacilityPublic])
async def facilities(request: Request):
    return [
        FacilityPublic(
            **facility,
            price_label=display.optional_price_label(facility.get("price")),
            gallery=display.build_gallery(facility.get("image_url"), facility.get("images")),
        )
        for facility in await public_records(request, "facilities")
    ]


# ---------- SERVICES ----------
@router.get("/services", response_model=list[ServicePublic])
async def services(request: Request):
    # Free services show no price at all
    return [
        ServicePublic(
            **service,
            glyph=display.resolve_glyph(service.get("icon")),
            price_label=display.optional_price_label(service.get("price"), free_label=None),
        )
        for service in await public_records(request, "services")
    ]


# =====================================================================
#                           REVIEWS
# =====================================================================
@router.get("/reviews", response_model=ReviewSection)
async def reviews(request: Request):
    records = await public_records(request, "reviews")

    return ReviewSection(
        average_rating=display.average_rating(r.get("rating") for r in records),
        reviews=[
            ReviewPublic(
                **review,
                initials=display.avatar_or_initials(review["guest_name"], review.get("guest_avatar")),
                date_label=display.date_label(review["created_at"]),
            )
            for review in records
        ],
    )


# ---------- FOOTER LOGOS ----------
@router.get("/logos", response_model=list[FooterLogoOut])
async def logos(request: Request):
    return await public_records(request, "footer_logos")
