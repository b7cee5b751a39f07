import re
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from urllib.parse import quote

DEFAULT_GLYPH = "HelpCircle"

# Glyph names the site's icon set can render
KNOWN_GLYPHS = {
    "Car", "Wifi", "Clock", "Utensils", "ShieldCheck", "Shirt", "CarFront", "Plane",
}

MONTHS_ID = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]


# -------- PRICES --------
def format_idr(amount) -> str:
    """Rupiah with dot thousands separators and no decimals: Rp500.000"""
    value = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}Rp{abs(int(value)):,}".replace(",", ".")


def room_price_label(price) -> str:
    return f"{format_idr(price)}/malam"


def optional_price_label(price, free_label: str | None = "Gratis"):
    if price is None or Decimal(str(price)) == 0:
        return free_label
    return format_idr(price)


# -------- GALLERIES --------
def build_gallery(image_url: str | None, images: list[str] | None) -> list[str]:
    """Primary image first, then the gallery, without duplicate URLs."""
    gallery = []
    for url in [image_url, *(images or [])]:
        if url and url not in gallery:
            gallery.append(url)
    return gallery


# -------- SERVICES --------
def resolve_glyph(icon: str | None) -> str:
    if icon and icon in KNOWN_GLYPHS:
        return icon
    return DEFAULT_GLYPH


# -------- REVIEWS --------
def initials(name: str) -> str:
    return "".join(word[0] for word in name.split() if word).upper()[:2]


def avatar_or_initials(name: str, avatar: str | None) -> str:
    if avatar and avatar.startswith("http"):
        return avatar
    return initials(name)


def average_rating(ratings) -> str:
    ratings = [r or 0 for r in ratings]
    if not ratings:
        return "0"
    average = Decimal(sum(ratings)) / Decimal(len(ratings))
    return str(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def date_label(value: datetime) -> str:
    return f"{value.day} {MONTHS_ID[value.month - 1]} {value.year}"


# -------- CONTACT LINKS --------
def whatsapp_number(raw: str | None) -> str:
    return re.sub(r"[^0-9+]", "", str(raw or ""))


def whatsapp_link(raw: str | None, text: str | None = None) -> str:
    link = f"https://wa.me/{whatsapp_number(raw)}"
    if text:
        link += f"?text={quote(text)}"
    return link


def booking_link(whatsapp: str | None, room_name: str, hotel_name: str) -> str:
    return whatsapp_link(whatsapp, f"Halo, saya ingin memesan {room_name} di {hotel_name}")


def directions_link(address: str | None) -> str:
    return f"https://www.google.com/maps/dir/?api=1&destination={quote(str(address or ''))}"
