# models/project.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from urllib.parse import urlparse

PLACEHOLDER_THUMBNAIL = "https://via.placeholder.com/600x400/2a2a2a/FFFFFF/?text=Project+Thumbnail"
PLACEHOLDER_IMAGE = "https://via.placeholder.com/1200x800/2a2a2a/FFFFFF/?text=Project+Image+{n}"


@dataclass
class Project:
    id: str
    title: str
    slug: str
    category: str
    description: str
    thumbnail_url: str = ""
    image_urls: list[str] = field(default_factory=list)
    full_description: str | None = None
    client: str | None = None
    date: str | None = None
    url: str | None = None
    services: list[str] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)
    featured: bool = False
    order: int = 0
    created_at: str | None = None
    updated_at: str | None = None

    def to_record(self) -> dict:
        """Stored (camelCase) form. Optional fields that are unset are left out."""
        record = {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "category": self.category,
            "description": self.description,
            "fullDescription": self.full_description,
            "client": self.client,
            "date": self.date,
            "services": list(self.services),
            "technologies": list(self.technologies),
            "thumbnailUrl": self.thumbnail_url,
            "imageUrls": list(self.image_urls),
            "url": self.url,
            "featured": self.featured,
            "order": self.order,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        return {k: v for k, v in record.items() if v is not None}


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def now_millis() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def parse_featured_flag(raw) -> bool:
    """Coerce a stored ``featured`` value into a strict boolean.

    Stores have held ``True``, ``"true"``/``"TRUE"``, ``"1"`` and ``1`` for
    the same meaning; anything else is not featured.
    """
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw == 1
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "1")
    return False


def normalize_record(record: dict) -> dict:
    normalized = dict(record)
    normalized["featured"] = parse_featured_flag(record.get("featured"))
    return normalized


def order_key(record: dict) -> int:
    try:
        return int(record.get("order") or 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def stamp_timestamps(record: dict) -> dict:
    stamped = dict(record)
    now = now_iso()
    stamped["createdAt"] = stamped.get("createdAt") or now
    stamped["updatedAt"] = stamped.get("updatedAt") or now
    return stamped


def is_valid_image_ref(value) -> bool:
    if not value or not isinstance(value, str):
        return False
    if value.startswith("data:image/"):
        return True
    if value.startswith("/"):
        return True
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def with_placeholder_images(record: dict) -> dict:
    # display only; never written back
    shown = dict(record)
    thumbnail = shown.get("thumbnailUrl") or shown.get("thumbnail") or ""
    shown["thumbnailUrl"] = thumbnail if is_valid_image_ref(thumbnail) else PLACEHOLDER_THUMBNAIL
    images = shown.get("imageUrls")
    images = [u for u in images if is_valid_image_ref(u)] if isinstance(images, list) else []
    if not images:
        images = [PLACEHOLDER_IMAGE.format(n=n) for n in range(1, 4)]
    shown["imageUrls"] = images
    return shown
