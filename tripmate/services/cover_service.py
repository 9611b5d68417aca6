"""
Stable cover image selection for trips.
"""
from typing import Optional, Sequence, TypeVar
from tripmate.core.config import settings
from tripmate.core.errors import ErrorCode, ValidationError

ImageRef = TypeVar("ImageRef")


def select_cover_image(trip_id: str, catalog: Sequence[ImageRef]) -> ImageRef:
    """
    Pick an image for a trip without persisting the choice.
    Sum of the id's code points modulo the catalog size: same id, same image.
    """
    if not catalog:
        raise ValidationError("Cover image catalog is empty", code=ErrorCode.EMPTY_CATALOG)
    hash_value = sum(ord(ch) for ch in str(trip_id))
    return catalog[hash_value % len(catalog)]


def cover_image_url(trip_id, catalog: Optional[Sequence[str]] = None) -> str:
    """Full image URL for a trip using the configured catalog."""
    image_id = select_cover_image(str(trip_id), settings.COVER_IMAGE_IDS if catalog is None else catalog)
    return settings.COVER_IMAGE_URL_TEMPLATE.format(image_id=image_id)
