"""Tests for project record helpers."""
import pytest

from models.project import (
    PLACEHOLDER_THUMBNAIL,
    Project,
    is_valid_image_ref,
    normalize_record,
    order_key,
    parse_featured_flag,
    stamp_timestamps,
    with_placeholder_images,
)


@pytest.mark.parametrize("raw", [True, "true", "TRUE", "True", "1", 1, " true "])
def test_featured_truthy_representations(raw):
    assert parse_featured_flag(raw) is True


@pytest.mark.parametrize("raw", [False, "false", 0, None, "0", "", "yes", 2, [], {}])
def test_featured_other_values_are_false(raw):
    assert parse_featured_flag(raw) is False


def test_normalize_record_copies_and_keeps_extra_fields():
    record = {"id": "a", "featured": "1", "extra": {"k": 1}}
    normalized = normalize_record(record)
    assert normalized == {"id": "a", "featured": True, "extra": {"k": 1}}
    assert record["featured"] == "1"


def test_order_key_defaults_to_zero():
    assert order_key({}) == 0
    assert order_key({"order": None}) == 0
    assert order_key({"order": "3"}) == 3
    assert order_key({"order": "first"}) == 0


def test_stamp_timestamps_keeps_existing_values():
    stamped = stamp_timestamps({"id": "a", "createdAt": "2023-01-01T00:00:00Z"})
    assert stamped["createdAt"] == "2023-01-01T00:00:00Z"
    assert stamped["updatedAt"].endswith("Z")


def test_project_to_record_uses_camel_case_and_drops_unset_optionals():
    record = Project(
        id="p1", title="P1", slug="p1", category="Design", description="d",
        thumbnail_url="/images/p1.png", full_description="long",
    ).to_record()
    assert record["thumbnailUrl"] == "/images/p1.png"
    assert record["fullDescription"] == "long"
    assert record["featured"] is False
    assert "client" not in record
    assert "createdAt" not in record


def test_image_refs():
    assert is_valid_image_ref("data:image/png;base64,AAAA")
    assert is_valid_image_ref("https://cdn.example.com/a.jpg")
    assert is_valid_image_ref("/uploads/a.jpg")
    assert not is_valid_image_ref("ftp://example.com/a.jpg")
    assert not is_valid_image_ref("not a url")
    assert not is_valid_image_ref(None)


def test_placeholder_images_fill_missing_media():
    shown = with_placeholder_images({"id": "a", "imageUrls": ["", None]})
    assert shown["thumbnailUrl"] == PLACEHOLDER_THUMBNAIL
    assert len(shown["imageUrls"]) == 3

    kept = with_placeholder_images({"thumbnailUrl": "/a.png", "imageUrls": ["/b.png"]})
    assert kept["thumbnailUrl"] == "/a.png"
    assert kept["imageUrls"] == ["/b.png"]
