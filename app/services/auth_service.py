import logging
from typing import Tuple

from database.data_source import DataSource
from database.models import User
from enums.user_role import UserRole
from schemas.auth_schema import RegisterRequest, LoginRequest
from utils.dependencies import hash_password, verify_password, token_for
from utils.exceptions import DuplicateEmail, InvalidCredentials, InvalidRole

logger = logging.getLogger(__name__)


def resolve_registration_role(role) -> str:
    if role is None or role == "":
        return UserRole.RENTER.value
    if role == UserRole.ADMIN.value:
        raise InvalidRole("Cannot register as admin directly")
    if role not in UserRole.self_registrable():
        raise InvalidRole("Invalid role. Must be either renter or owner")
    return role


def create_user(
    data_source: DataSource,
    name: str,
    email: str,
    password: str,
    role: str = UserRole.RENTER.value,
    is_approved: bool = None,
) -> User:
    if data_source.get_user_by_email(email):
        raise DuplicateEmail("User already exists")

    if is_approved is None:
        is_approved = role != UserRole.OWNER.value

    user = User(
        name=name.strip(),
        email=email.lower(),
        hashed_password=hash_password(password),
        role=role,
        is_approved=is_approved,
    )
    return data_source.add_user(user)


def register(data_source: DataSource, payload: RegisterRequest) -> Tuple[User, str]:
    role = resolve_registration_role(payload.role)
    user = create_user(
        data_source, payload.name, payload.email, payload.password, role=role
    )
    logger.info("Registered user %s as %s", user.id, user.role)
    return user, token_for(user)


def authenticate(data_source: DataSource, payload: LoginRequest) -> Tuple[User, str]:
    user = data_source.get_user_by_email(payload.email)
    # Same answer for unknown email and wrong password
    if not user or not verify_password(payload.password, user.hashed_password):
        logger.warning("Failed login attempt for %s", payload.email)
        raise InvalidCredentials("Invalid credentials")
    return user, token_for(user)


def get_user_by_id(user_id: int, data_source: DataSource):
    return data_source.get_user(user_id)
