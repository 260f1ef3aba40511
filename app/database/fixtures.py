"""Sample accounts and listings used by the seed commands and the memory data source."""

import logging

from config import (
    ADMIN_EMAIL,
    ADMIN_NAME,
    ADMIN_PASSWORD,
    SAMPLE_OWNER_EMAIL,
    SAMPLE_OWNER_PASSWORD,
)
from database.data_source import DataSource
from database.models import Property, User
from enums.property_status import PropertyStatus
from enums.user_role import UserRole
from utils.dependencies import hash_password

logger = logging.getLogger(__name__)

SAMPLE_PROPERTIES = [
    {
        "title": "Modern Apartment in Downtown",
        "description": "Beautiful modern apartment in the heart of downtown. "
        "Fully furnished with high-end appliances and amenities.",
        "address": "123 Main Street, Apt 4B",
        "city": "New York",
        "state": "NY",
        "zip_code": "10001",
        "price": 2500,
        "bedrooms": 2,
        "bathrooms": 2,
        "area": 1200,
        "photos": [
            "https://images.pexels.com/photos/1643384/pexels-photo-1643384.jpeg",
            "https://images.pexels.com/photos/1648776/pexels-photo-1648776.jpeg",
        ],
        "features": ["Air Conditioning", "In-unit Laundry", "Fitness Center", "Roof Deck"],
        "property_type": "Apartment",
    },
    {
        "title": "Spacious Family House with Garden",
        "description": "Large family home with beautiful garden. "
        "Perfect for families who need space and privacy.",
        "address": "456 Oak Avenue",
        "city": "Chicago",
        "state": "IL",
        "zip_code": "60601",
        "price": 3200,
        "bedrooms": 4,
        "bathrooms": 3,
        "area": 2400,
        "photos": [
            "https://images.pexels.com/photos/106399/pexels-photo-106399.jpeg",
            "https://images.pexels.com/photos/1029599/pexels-photo-1029599.jpeg",
        ],
        "features": ["Backyard", "Garage", "Fireplace", "Hardwood Floors"],
        "property_type": "House",
    },
    {
        "title": "Luxury Condo with Ocean View",
        "description": "High-end condo with stunning ocean views. Comes with access "
        "to building amenities including pool and gym.",
        "address": "789 Beachfront Drive, Unit 12",
        "city": "Miami",
        "state": "FL",
        "zip_code": "33101",
        "price": 4000,
        "bedrooms": 3,
        "bathrooms": 2.5,
        "area": 1800,
        "photos": [
            "https://images.pexels.com/photos/2096983/pexels-photo-2096983.jpeg",
            "https://images.pexels.com/photos/2119713/pexels-photo-2119713.jpeg",
        ],
        "features": ["Ocean View", "Pool", "Gym", "Doorman", "Balcony"],
        "property_type": "Condo",
    },
    {
        "title": "Cozy Studio in Historic District",
        "description": "Charming studio apartment in a historic building. Walking "
        "distance to restaurants, shops, and public transportation.",
        "address": "101 Heritage Lane, Unit 3",
        "city": "Boston",
        "state": "MA",
        "zip_code": "02108",
        "price": 1500,
        "bedrooms": 0,
        "bathrooms": 1,
        "area": 500,
        "photos": [
            "https://images.pexels.com/photos/1918291/pexels-photo-1918291.jpeg",
            "https://images.pexels.com/photos/1571458/pexels-photo-1571458.jpeg",
        ],
        "features": [
            "Historic Building",
            "High Ceilings",
            "Exposed Brick",
            "Updated Kitchen",
        ],
        "property_type": "Studio",
    },
]


def ensure_admin(data_source: DataSource) -> User:
    admin = data_source.get_user_by_email(ADMIN_EMAIL)
    if admin:
        logger.info("Admin user already exists")
        return admin

    admin = User(
        name=ADMIN_NAME,
        email=ADMIN_EMAIL.lower(),
        hashed_password=hash_password(ADMIN_PASSWORD),
        role=UserRole.ADMIN.value,
        is_approved=True,
    )
    admin = data_source.add_user(admin)
    logger.info("Admin user %s created", admin.email)
    return admin


def reset_admin_password(data_source: DataSource) -> bool:
    admin = data_source.get_user_by_email(ADMIN_EMAIL)
    if not admin:
        logger.warning("Admin user not found, run the admin seed first")
        return False

    admin.hashed_password = hash_password(ADMIN_PASSWORD)
    data_source.save_user(admin)
    logger.info("Admin password reset for %s", admin.email)
    return True


def ensure_sample_owner(data_source: DataSource) -> User:
    owner = data_source.get_user_by_email(SAMPLE_OWNER_EMAIL)
    if owner:
        return owner

    owner = User(
        name="John Property Owner",
        email=SAMPLE_OWNER_EMAIL.lower(),
        hashed_password=hash_password(SAMPLE_OWNER_PASSWORD),
        role=UserRole.OWNER.value,
        is_approved=True,
    )
    return data_source.add_user(owner)


def seed_sample_properties(data_source: DataSource) -> int:
    """Add the sample listings unless the sample owner already has some"""
    owner = ensure_sample_owner(data_source)
    if data_source.list_properties_by_owner(owner.id):
        logger.info("Sample properties already present")
        return 0

    for fields in SAMPLE_PROPERTIES:
        data_source.add_property(
            Property(
                **fields,
                status=PropertyStatus.AVAILABLE.value,
                is_approved=True,
                owner_id=owner.id,
            )
        )
    logger.info("Seeded %s sample properties", len(SAMPLE_PROPERTIES))
    return len(SAMPLE_PROPERTIES)


def load_fixtures(data_source: DataSource) -> None:
    ensure_admin(data_source)
    seed_sample_properties(data_source)
