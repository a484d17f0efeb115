"""
Records returned by the Pexels search endpoint.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import DecodeError


class PhotoSource(BaseModel):
    """Pre-rendered variants of a photo, keyed by name."""
    model_config = ConfigDict(frozen=True, strict=True)

    original: str = ""
    large2x: str = ""
    large: str = ""
    medium: str = ""
    small: str = ""
    portrait: str = ""
    landscape: str = ""
    tiny: str = ""


class Photo(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    id: int = 0
    width: int = 0
    height: int = 0
    url: str = ""
    photographer: str = ""
    photographer_url: str = ""
    photographer_id: int = 0
    liked: bool = False
    src: PhotoSource = PhotoSource()


class Page(BaseModel):
    """One page of search results.

    next_page is the server's cursor: an absolute URL for the following
    page, or an empty string once the results are exhausted.
    """
    model_config = ConfigDict(frozen=True, strict=True)

    total_results: int = 0
    page: int = 0
    per_page: int = 0
    photos: List[Photo] = []
    next_page: str = ""

    @field_validator('photos', mode='before')
    @classmethod
    def _null_photos(cls, value):
        return [] if value is None else value

    @field_validator('next_page', mode='before')
    @classmethod
    def _null_cursor(cls, value: Optional[str]):
        return "" if value is None else value

    @property
    def has_next(self) -> bool:
        return self.next_page != ""


def decode_page(body: bytes, url: Optional[str] = None) -> Page:
    """Decode a raw response body into a Page, raising DecodeError on any mismatch."""
    try:
        return Page.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"cannot decode page: {e.error_count()} error(s): {e.errors()[0]['msg']}",
                          url=url, body=body) from e
