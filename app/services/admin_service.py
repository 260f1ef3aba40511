import logging
from typing import List

from database.data_source import DataSource
from database.models import User
from enums.user_role import UserRole
from utils.exceptions import AlreadyApproved, InvalidState, NotFound

logger = logging.getLogger(__name__)


class AdminService:
    def list_pending_owners(self, data_source: DataSource) -> List[User]:
        return data_source.list_pending_owners()

    def approve_owner(self, data_source: DataSource, user_id: int) -> User:
        """Approve an owner account, which is a one-way change"""
        user = data_source.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        if user.role != UserRole.OWNER.value:
            raise InvalidState("User is not an owner")

        if user.is_approved:
            raise AlreadyApproved("Owner is already approved")

        user.is_approved = True
        user = data_source.save_user(user)
        logger.info("Owner %s approved", user.id)
        return user
