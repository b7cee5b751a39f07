"""
Per-resource definitions: which table, which form fields, how blank form
values are turned into stored values, and how each resource is ordered and
filtered on the public site.

Forms send strings (an empty price input is ""), so every field knows how to
coerce a draft value and which message to show when it cannot.
"""
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from hotel_site.core.config import MAX_GALLERY_IMAGES
from hotel_site.models.facility import Facility
from hotel_site.models.footer_logo import FooterLogo
from hotel_site.models.review import Review
from hotel_site.models.room import Room
from hotel_site.models.service import Service
from hotel_site.resources.store import OrderBy

TEXT = "text"
DECIMAL = "decimal"
INTEGER = "integer"
RATING = "rating"
BOOLEAN = "boolean"
LIST = "list"

_DRAFT_DEFAULTS = {TEXT: "", DECIMAL: "", INTEGER: 0, RATING: "5", BOOLEAN: True, LIST: []}


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: str = TEXT
    label: str = ""
    required: bool = False
    required_message: Optional[str] = None
    default: Any = None
    max_items: Optional[int] = None

    def draft_default(self):
        if self.default is not None:
            return self.default
        value = _DRAFT_DEFAULTS[self.kind]
        return list(value) if isinstance(value, list) else value

    def to_draft(self, value):
        """Stored value -> form value (absent values show as blank)."""
        if value is None:
            return self.draft_default() if self.kind in (LIST, BOOLEAN) else ""
        if self.kind == LIST:
            return list(value)
        if self.kind in (DECIMAL, RATING):
            return str(value)
        return value

    def coerce(self, value):
        """Form value -> stored value. Raises ValueError with a user-facing message."""
        label = self.label or self.name

        if self.kind == BOOLEAN:
            if isinstance(value, str):
                return value.strip().lower() in ("true", "1", "on", "yes")
            return bool(value)

        if self.kind == LIST:
            if isinstance(value, str):
                value = [value]
            items = [str(v).strip() for v in (value or []) if not _is_blank(v)]
            if self.max_items is not None and len(items) > self.max_items:
                raise ValueError(f"Maksimal {self.max_items} gambar")
            return items or None

        if self.kind == INTEGER:
            # Behaves like parseInt(value) || 0
            try:
                return int(str(value).strip())
            except (TypeError, ValueError):
                return 0

        if _is_blank(value):
            if self.required:
                raise ValueError(self.required_message or f"{label} wajib diisi")
            return None

        if self.kind == DECIMAL:
            try:
                number = Decimal(str(value).strip())
            except InvalidOperation:
                raise ValueError(f"{label} harus berupa angka")
            if not number.is_finite():
                raise ValueError(f"{label} harus berupa angka")
            if number < 0:
                raise ValueError(f"{label} tidak boleh negatif")
            return number

        if self.kind == RATING:
            try:
                rating = int(str(value).strip())
            except ValueError:
                raise ValueError("Rating harus antara 1 sampai 5")
            if not 1 <= rating <= 5:
                raise ValueError("Rating harus antara 1 sampai 5")
            return rating

        return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class ResourceSpec:
    table: str
    model: type
    label: str
    fields: tuple
    admin_order: tuple = (OrderBy("sort_order"),)
    public_order: tuple = (OrderBy("sort_order"),)
    public_filters: dict = field(default_factory=lambda: {"is_active": True})
    public_limit: Optional[int] = None

    def get_field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def default_draft(self) -> dict:
        return {spec.name: spec.draft_default() for spec in self.fields}

    def draft_from_record(self, record: dict) -> dict:
        return {spec.name: spec.to_draft(record.get(spec.name)) for spec in self.fields}

    def build_record(self, draft: dict) -> tuple[dict, dict]:
        """Coerce a draft into a record. Returns (record, errors)."""
        record, errors = {}, {}
        for spec in self.fields:
            try:
                record[spec.name] = spec.coerce(draft.get(spec.name, spec.draft_default()))
            except ValueError as e:
                errors[spec.name] = str(e)
        return record, errors


# =====================================================================
#                           RESOURCES
# =====================================================================
ROOMS = ResourceSpec(
    table="rooms",
    model=Room,
    label="Kamar",
    fields=(
        FieldSpec("name", label="Nama Kamar", required=True),
        FieldSpec("price", DECIMAL, label="Harga per Malam", required=True),
        FieldSpec("description", label="Deskripsi"),
        FieldSpec("image_url", label="Gambar Utama"),
        FieldSpec("images", LIST, label="Galeri", max_items=MAX_GALLERY_IMAGES),
        FieldSpec("features", LIST, label="Fasilitas Kamar"),
        FieldSpec("capacity", label="Kapasitas"),
        FieldSpec("room_size", label="Luas Kamar"),
        FieldSpec("bed_type", label="Tipe Kasur"),
        FieldSpec("is_active", BOOLEAN, label="Aktif"),
        FieldSpec("sort_order", INTEGER, label="Urutan"),
    ),
)

FACILITIES = ResourceSpec(
    table="facilities",
    model=Facility,
    label="Fasilitas",
    fields=(
        FieldSpec("name", label="Nama Fasilitas", required=True),
        FieldSpec("description", label="Deskripsi"),
        FieldSpec("image_url", label="Gambar Utama"),
        FieldSpec("images", LIST, label="Galeri", max_items=MAX_GALLERY_IMAGES),
        FieldSpec("features", LIST, label="Fitur"),
        FieldSpec("operating_hours", label="Jam Operasional"),
        FieldSpec("capacity", label="Kapasitas"),
        FieldSpec("price", DECIMAL, label="Biaya"),
        FieldSpec("is_active", BOOLEAN, label="Aktif"),
        FieldSpec("sort_order", INTEGER, label="Urutan"),
    ),
)

SERVICES = ResourceSpec(
    table="services",
    model=Service,
    label="Layanan",
    fields=(
        FieldSpec("title", label="Nama Layanan", required=True),
        FieldSpec("description", label="Deskripsi"),
        FieldSpec("icon", label="Ikon"),
        FieldSpec("price", DECIMAL, label="Biaya"),
        FieldSpec("is_active", BOOLEAN, label="Aktif"),
        FieldSpec("sort_order", INTEGER, label="Urutan"),
    ),
)

REVIEWS = ResourceSpec(
    table="reviews",
    model=Review,
    label="Ulasan",
    fields=(
        FieldSpec("guest_name", label="Nama Tamu", required=True),
        FieldSpec("guest_avatar", label="Avatar"),
        FieldSpec("rating", RATING, label="Rating", required=True),
        FieldSpec("comment", label="Komentar"),
        FieldSpec("is_featured", BOOLEAN, label="Unggulan", default=False),
        FieldSpec("is_active", BOOLEAN, label="Aktif"),
    ),
    admin_order=(OrderBy("created_at", ascending=False),),
    public_order=(OrderBy("is_featured", ascending=False), OrderBy("created_at", ascending=False)),
    public_limit=6,
)

FOOTER_LOGOS = ResourceSpec(
    table="footer_logos",
    model=FooterLogo,
    label="Logo",
    fields=(
        FieldSpec("name", label="Nama"),
        FieldSpec("image_url", label="Gambar Logo", required=True,
                  required_message="Gambar logo harus diunggah"),
        FieldSpec("link_url", label="Link"),
        FieldSpec("is_active", BOOLEAN, label="Aktif"),
        FieldSpec("sort_order", INTEGER, label="Urutan"),
    ),
)

RESOURCES = {spec.table: spec for spec in (ROOMS, FACILITIES, SERVICES, REVIEWS, FOOTER_LOGOS)}


def get_resource(table: str) -> ResourceSpec:
    return RESOURCES[table]
