"""
Tests for stable cover image selection.
"""
import pytest
from tripmate.core.config import settings
from tripmate.core.errors import ValidationError
from tripmate.services.cover_service import select_cover_image, cover_image_url

CATALOG = ["img-0", "img-1", "img-2", "img-3"]


def test_same_trip_always_gets_same_image():
    first = select_cover_image("abc", CATALOG)
    assert all(select_cover_image("abc", CATALOG) == first for _ in range(1000))


def test_code_point_sum_modulo_catalog():
    # ord("a") + ord("b") + ord("c") = 294, 294 % 4 = 2
    assert select_cover_image("abc", CATALOG) == "img-2"
    assert select_cover_image("", CATALOG) == "img-0"


@pytest.mark.parametrize("trip_id", ["abd", "xbc", "abc1", "9f1c2e", "旅行"])
def test_any_trip_id_maps_into_catalog(trip_id):
    assert select_cover_image(trip_id, CATALOG) in CATALOG


def test_empty_catalog_rejected():
    with pytest.raises(ValidationError):
        select_cover_image("abc", [])


def test_cover_image_url_uses_configured_catalog():
    url = cover_image_url(42)
    image_id = select_cover_image("42", settings.COVER_IMAGE_IDS)
    assert url == settings.COVER_IMAGE_URL_TEMPLATE.format(image_id=image_id)
    assert url.startswith("https://images.unsplash.com/photo-")
