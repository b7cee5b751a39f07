from typing import List, Optional

from pydantic import BaseModel, Field


class SocialMedia(BaseModel):
    facebook: str = ""
    instagram: str = ""
    twitter: str = ""
    youtube: str = ""
    tiktok: str = ""


class HeroStat(BaseModel):
    value: str
    label: str


def default_hero_stats() -> List[HeroStat]:
    return [
        HeroStat(value="50+", label="Kamar Nyaman"),
        HeroStat(value="4.5", label="Rating Tamu"),
        HeroStat(value="10+", label="Tahun Melayani"),
    ]


class SiteSettings(BaseModel):
    hotel_name: str = "Hotel Grand Master Purwodadi"
    tagline: str = "Pengalaman Menginap Tak Terlupakan"
    description: str = (
        "Nikmati kemewahan dan kenyamanan di jantung kota Purwodadi. Hotel Grand Master "
        "menawarkan layanan premium dengan sentuhan keramahan Jawa yang hangat."
    )
    phone: str = "(0292) 4273335"
    whatsapp: str = "+628112769959"
    email: str = "info@grandmasterpurwodadi.com"
    address: str = (
        "Jl. Gajah Mada No.10, Majenang, Kuripan, Kec. Purwodadi, "
        "Kabupaten Grobogan, Jawa Tengah, 58112"
    )
    google_maps_url: str = ""
    star_rating: str = "Hotel Bintang 3"
    check_in_time: str = "14:00 WIB"
    check_out_time: str = "12:00 WIB"
    hero_image_url: str = ""
    hero_video_url: str = "https://www.youtube.com/watch?v=olZku1LeaCw"
    hero_right_image_top: str = ""
    hero_right_image_bottom: str = ""
    hero_stats: List[HeroStat] = Field(default_factory=default_hero_stats)
    logo_url: str = ""
    social_media: SocialMedia = Field(default_factory=SocialMedia)


class SettingsUpdate(BaseModel):
    """Partial update from the admin settings screen; omitted keys keep their stored value."""

    hotel_name: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    google_maps_url: Optional[str] = None
    star_rating: Optional[str] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    hero_image_url: Optional[str] = None
    hero_video_url: Optional[str] = None
    hero_right_image_top: Optional[str] = None
    hero_right_image_bottom: Optional[str] = None
    hero_stats: Optional[List[HeroStat]] = None
    logo_url: Optional[str] = None
    social_media: Optional[SocialMedia] = None


class ContactInfo(BaseModel):
    phone: str
    email: str
    address: str
    whatsapp: str
    whatsapp_link: str
    directions_link: str
    google_maps_url: str
