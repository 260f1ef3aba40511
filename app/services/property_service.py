import logging
from typing import List, Optional

from database.data_source import DataSource
from database.models import Property, User
from enums.property_status import PropertyStatus
from enums.user_role import UserRole
from schemas.auth_schema import UserMinimumResponse
from schemas.property_response import PropertyResponse, ApprovalResult
from schemas.property_schema import PropertyCreate, PropertyUpdate
from utils.exceptions import NotFound
from utils.permissions import (
    authorize,
    ownership_check,
    require_owner_approved,
    role_check,
)

logger = logging.getLogger(__name__)

LISTING_ROLES = (UserRole.OWNER, UserRole.ADMIN)


def is_publicly_visible(property_obj: Property) -> bool:
    """A listing can be browsed and booked only once approved and available"""
    return bool(property_obj.is_approved) and (
        property_obj.status == PropertyStatus.AVAILABLE.value
    )


class PropertyService:
    def get(self, data_source: DataSource, property_id: int) -> Property:
        property_obj = data_source.get_property(property_id)
        if not property_obj:
            raise NotFound("Property not found")
        return property_obj

    def format_property_response(
        self, data_source: DataSource, property_obj: Property
    ) -> PropertyResponse:
        response = PropertyResponse.model_validate(property_obj)
        owner = data_source.get_user(property_obj.owner_id)
        response.owner = UserMinimumResponse.model_validate(owner) if owner else None
        return response

    def list_public(self, data_source: DataSource) -> List[PropertyResponse]:
        return [
            self.format_property_response(data_source, p)
            for p in data_source.list_public_properties()
            if is_publicly_visible(p)
        ]

    def get_property(self, data_source: DataSource, property_id: int) -> PropertyResponse:
        return self.format_property_response(data_source, self.get(data_source, property_id))

    def list_mine(self, data_source: DataSource, current_user: User) -> List[PropertyResponse]:
        authorize(
            current_user,
            role_check(*LISTING_ROLES, message="Only owners can view their properties"),
        )
        return [
            self.format_property_response(data_source, p)
            for p in data_source.list_properties_by_owner(current_user.id)
        ]

    def create_property(
        self, data_source: DataSource, current_user: User, payload: PropertyCreate
    ) -> PropertyResponse:
        authorize(
            current_user,
            role_check(*LISTING_ROLES, message="Only owners can create properties"),
            require_owner_approved,
        )

        # Approved owners publish straight away, whatever the payload says
        property_obj = Property(
            title=payload.title.strip(),
            description=payload.description,
            address=payload.address,
            city=payload.location.city,
            state=payload.location.state,
            zip_code=payload.location.zip_code,
            price=payload.price,
            bedrooms=payload.bedrooms,
            bathrooms=payload.bathrooms,
            area=payload.area,
            photos=list(payload.photos),
            features=list(payload.features),
            property_type=payload.property_type.value,
            status=PropertyStatus.AVAILABLE.value,
            is_approved=True,
            owner_id=current_user.id,
        )
        property_obj = data_source.add_property(property_obj)
        logger.info("User %s listed property %s", current_user.id, property_obj.id)
        return self.format_property_response(data_source, property_obj)

    def update_property(
        self,
        data_source: DataSource,
        current_user: User,
        property_id: int,
        payload: PropertyUpdate,
    ) -> PropertyResponse:
        property_obj = self.get(data_source, property_id)
        authorize(
            current_user,
            ownership_check(
                property_obj.owner_id,
                message="User not authorized to update this property",
            ),
        )

        update_data = payload.model_dump(exclude_unset=True)
        location = update_data.pop("location", None) or {}
        # Approval is an admin decision
        if not current_user.is_admin:
            update_data.pop("is_approved", None)

        for field, value in update_data.items():
            if value is None:
                continue
            if field in ("property_type", "status"):
                value = value.value
            setattr(property_obj, field, value)
        for field, value in location.items():
            if value is not None:
                setattr(property_obj, field, value)

        property_obj = data_source.save_property(property_obj)
        logger.info("User %s updated property %s", current_user.id, property_obj.id)
        return self.format_property_response(data_source, property_obj)

    def delete_property(
        self, data_source: DataSource, current_user: User, property_id: int
    ) -> None:
        property_obj = self.get(data_source, property_id)
        authorize(
            current_user,
            ownership_check(
                property_obj.owner_id,
                message="User not authorized to delete this property",
            ),
        )
        data_source.delete_property(property_obj)
        logger.info("User %s deleted property %s", current_user.id, property_id)

    def approve_all_pending(
        self, data_source: DataSource, current_user: Optional[User] = None
    ) -> ApprovalResult:
        if current_user is not None:
            authorize(current_user, role_check(UserRole.ADMIN))
        matched, modified = data_source.approve_all_pending()
        logger.info("Bulk approval published %s of %s properties", modified, matched)
        return ApprovalResult(matched=matched, modified=modified)
