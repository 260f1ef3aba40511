from pydantic import Field, field_validator
from typing import Optional, List

from config import DEFAULT_PROPERTY_PHOTO
from enums.property_status import PropertyStatus
from enums.property_type import PropertyType
from .base_schema import CamelModel


def _unique(values: List[str]) -> List[str]:
    seen = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.append(value)
    return seen


class LocationSchema(CamelModel):
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)


class LocationUpdate(CamelModel):
    city: Optional[str] = Field(default=None, min_length=1)
    state: Optional[str] = Field(default=None, min_length=1)
    zip_code: Optional[str] = Field(default=None, min_length=1)


class PropertyBase(CamelModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=1000)
    address: str = Field(min_length=1)
    location: LocationSchema
    price: float = Field(ge=0)
    bedrooms: int = Field(ge=0)
    bathrooms: float = Field(ge=0)
    area: float = Field(ge=0)
    photos: List[str] = Field(default_factory=lambda: [DEFAULT_PROPERTY_PHOTO])
    features: List[str] = Field(default_factory=list)
    property_type: PropertyType

    @field_validator("photos")
    @classmethod
    def at_least_one_photo(cls, photos: List[str]) -> List[str]:
        photos = [photo.strip() for photo in photos if photo and photo.strip()]
        return photos or [DEFAULT_PROPERTY_PHOTO]

    @field_validator("features")
    @classmethod
    def distinct_features(cls, features: List[str]) -> List[str]:
        return _unique(features)


class PropertyCreate(PropertyBase):
    # Accepted for compatibility, creation always publishes the listing
    status: Optional[PropertyStatus] = None
    is_approved: Optional[bool] = None


class PropertyUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    address: Optional[str] = Field(default=None, min_length=1)
    location: Optional[LocationUpdate] = None
    price: Optional[float] = Field(default=None, ge=0)
    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[float] = Field(default=None, ge=0)
    area: Optional[float] = Field(default=None, ge=0)
    photos: Optional[List[str]] = None
    features: Optional[List[str]] = None
    property_type: Optional[PropertyType] = None
    status: Optional[PropertyStatus] = None
    is_approved: Optional[bool] = None

    @field_validator("photos")
    @classmethod
    def at_least_one_photo(cls, photos: Optional[List[str]]) -> Optional[List[str]]:
        if photos is None:
            return None
        photos = [photo.strip() for photo in photos if photo and photo.strip()]
        return photos or [DEFAULT_PROPERTY_PHOTO]

    @field_validator("features")
    @classmethod
    def distinct_features(cls, features: Optional[List[str]]) -> Optional[List[str]]:
        return None if features is None else _unique(features)
