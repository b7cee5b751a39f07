"""
Site-wide settings stored as a sparse key/value table.

Reading folds whatever keys exist over a fully populated default object, so a
missing or malformed key only ever falls back to that key's default.
"""
import json
import re

from hotel_site.core.logging_config import get_logger
from hotel_site.resources.store import SettingsStore
from hotel_site.schemas.settings import HeroStat, SiteSettings, SocialMedia

logger = get_logger()

SCALAR_KEYS = (
    "hotel_name", "tagline", "description", "phone", "whatsapp", "email", "address",
    "google_maps_url", "star_rating", "check_in_time", "check_out_time",
    "hero_image_url", "hero_video_url", "hero_right_image_top", "hero_right_image_bottom",
    "logo_url",
)


def parse_value(value):
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def extract_map_url(value: str) -> str:
    """Accept either a maps URL or the whole <iframe> embed snippet."""
    if not value:
        return ""
    match = re.search(r"""src=["']([^"']+)["']""", value)
    return match.group(1) if match else value


def _hero_stats(value, default):
    if not isinstance(value, list):
        return default
    try:
        return [HeroStat.model_validate(item) for item in value]
    except ValueError:
        logger.warning("Ignoring malformed hero_stats setting")
        return default


def merge_settings(rows) -> SiteSettings:
    stored = {key: parse_value(value) for key, value in rows}
    defaults = SiteSettings()
    merged = {}

    for key in SCALAR_KEYS:
        value = stored.get(key)
        merged[key] = str(value) if value is not None else getattr(defaults, key)

    merged["hero_stats"] = _hero_stats(stored.get("hero_stats"), defaults.hero_stats)

    social = stored.get("social_media")
    if isinstance(social, dict):
        base = defaults.social_media.model_dump()
        base.update({k: str(v) for k, v in social.items() if k in base and v is not None})
        merged["social_media"] = SocialMedia(**base)
    else:
        merged["social_media"] = defaults.social_media

    return SiteSettings(**merged)


async def load_settings(store: SettingsStore) -> SiteSettings:
    return merge_settings(await store.rows())


async def save_settings(store: SettingsStore, values: dict) -> SiteSettings:
    """Upsert each provided key as JSON text and return the merged result."""
    if "google_maps_url" in values and values["google_maps_url"] is not None:
        values = {**values, "google_maps_url": extract_map_url(values["google_maps_url"])}

    for key, value in values.items():
        if value is None:
            continue
        await store.upsert(key, json.dumps(value))

    logger.bind(log_type="admin").info(f"SETTINGS SAVED: {', '.join(sorted(values))}")
    return await load_settings(store)
