# storage/defaults.py
from models.project import Project

DEFAULT_THUMBNAIL = "/images/adhocthumb.png"

# Shown on the landing page when nothing is marked featured.
DEFAULT_CATALOG = [
    Project(
        id="marketing-agency-website",
        title="Marketing Agency Website",
        slug="marketing-agency-website",
        category="Web Development",
        description="A modern marketing agency website with responsive design and CMS integration.",
        full_description="Complete website solution for a marketing agency featuring modern design, responsive layout, and content management system.",
        client="Marketing Agency",
        date="2023",
        services=["Web Design", "Frontend Development", "CMS Integration"],
        technologies=["React", "Next.js", "Tailwind CSS"],
        thumbnail_url=DEFAULT_THUMBNAIL,
        image_urls=[DEFAULT_THUMBNAIL],
        url="https://example.com/marketing-agency",
        featured=True,
        order=1,
    ),
    Project(
        id="land-development",
        title="Land Development",
        slug="land-development",
        category="Web Development",
        description="Land development project with custom features and responsive design.",
        full_description="Comprehensive land development platform that provides tools for property developers and investors.",
        client="Land Development Client",
        date="2023",
        services=["Web Design", "Frontend Development", "CMS Integration"],
        technologies=["React", "Next.js", "Tailwind CSS"],
        thumbnail_url=DEFAULT_THUMBNAIL,
        image_urls=[DEFAULT_THUMBNAIL],
        url="https://example.com/land-development",
        featured=True,
        order=2,
    ),
    Project(
        id="architectural-visualization-studio",
        title="Architectural Visualization Studio",
        slug="architectural-visualization-studio",
        category="Design",
        description="Professional architectural visualization and 3D rendering services.",
        full_description="Specialized studio providing high-quality architectural visualization, 3D rendering, and design services for architects and developers.",
        client="Architecture Studio",
        date="2023",
        services=["3D Rendering", "Architectural Visualization", "Design"],
        technologies=["3ds Max", "V-Ray", "Photoshop"],
        thumbnail_url=DEFAULT_THUMBNAIL,
        image_urls=[DEFAULT_THUMBNAIL],
        url="https://example.com/arch-viz",
        featured=True,
        order=3,
    ),
]

# Placeholder entries from earlier seed data, matched against id/slug/title.
SAMPLE_IDENTIFIERS = [
    "luxury-real-estate",
    "skyline-properties",
    "Skyline Properties",
    "boutique-travel",
    "wanderlust-expeditions",
    "Wanderlust Expeditions",
    "creative-studio",
    "lumina-studios",
    "Lumina Studios",
    "luxury-brand",
    "elysian-collection",
    "Elysian Collection",
    "wellness-app",
    "serenity-wellness",
    "Serenity Wellness",
    "culinary-platform",
    "gastronome",
    "Gastronome",
    "marketing-agency-website",
    "Marketing Agency Website",
    "land-development",
    "Land Development",
    "architectural-visualization-studio",
    "Architectural Visualization Studio",
    "default-1",
    "test-project",
]

SAMPLE_SUBSTRINGS = ("test-project", "sample-project")

_SAMPLE_KEYS = {s.lower() for s in SAMPLE_IDENTIFIERS}


def default_catalog_records() -> list[dict]:
    return [p.to_record() for p in DEFAULT_CATALOG]


def is_sample_entry(record) -> bool:
    if not isinstance(record, dict):
        return False
    keys = [
        record.get(name).lower()
        for name in ("id", "slug", "title")
        if isinstance(record.get(name), str) and record.get(name)
    ]
    for key in keys:
        if key in _SAMPLE_KEYS:
            return True
        if any(sub in key for sub in SAMPLE_SUBSTRINGS):
            return True
    return False
