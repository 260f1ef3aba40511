from typing import List, Optional
from datetime import datetime

from enums.property_status import PropertyStatus
from enums.property_type import PropertyType
from .auth_schema import UserMinimumResponse
from .base_schema import CamelModel
from .property_schema import LocationSchema


class PropertyMinimumResponse(CamelModel):
    id: int
    title: str
    address: str
    location: LocationSchema
    price: float
    photos: Optional[List[str]] = None


class PropertyResponse(CamelModel):
    id: int
    title: str
    description: str
    address: str
    location: LocationSchema
    price: float
    bedrooms: int
    bathrooms: float
    area: float
    photos: List[str]
    features: List[str]
    property_type: PropertyType
    status: PropertyStatus
    is_approved: bool
    owner_id: int
    owner: Optional[UserMinimumResponse] = None
    created_at: Optional[datetime] = None


class ApprovalResult(CamelModel):
    matched: int
    modified: int
