"""
Storage access for users, properties and bookings.

`SqlDataSource` wraps a SQLAlchemy session and is what the API runs on.
`MemoryDataSource` keeps the same entities in process memory and is used
for demos and tests (``DATA_SOURCE=memory``). The backend is picked once
when the process starts.
"""

import itertools
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.models import User, Property, Booking
from enums.property_status import PropertyStatus
from enums.user_role import UserRole
from utils.exceptions import DuplicateEmail


class DataSource(ABC):
    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def add_user(self, user: User) -> User: ...

    @abstractmethod
    def save_user(self, user: User) -> User: ...

    @abstractmethod
    def list_pending_owners(self) -> List[User]: ...

    # Properties
    @abstractmethod
    def get_property(self, property_id: int) -> Optional[Property]: ...

    @abstractmethod
    def list_public_properties(self) -> List[Property]: ...

    @abstractmethod
    def list_properties_by_owner(self, owner_id: int) -> List[Property]: ...

    @abstractmethod
    def add_property(self, property_obj: Property) -> Property: ...

    @abstractmethod
    def save_property(self, property_obj: Property) -> Property: ...

    @abstractmethod
    def delete_property(self, property_obj: Property) -> None: ...

    @abstractmethod
    def approve_all_pending(self) -> Tuple[int, int]:
        """Publish every property failing the visibility gate, returns (matched, modified)"""

    # Bookings
    @abstractmethod
    def get_booking(self, booking_id: int) -> Optional[Booking]: ...

    @abstractmethod
    def add_booking(self, booking: Booking) -> Booking: ...

    @abstractmethod
    def save_booking(self, booking: Booking) -> Booking: ...

    @abstractmethod
    def list_bookings(
        self,
        renter_id: Optional[int] = None,
        property_ids: Optional[Iterable[int]] = None,
    ) -> List[Booking]:
        """Bookings matching the filters, newest first"""


class SqlDataSource(DataSource):
    def __init__(self, db: Session):
        self.db = db

    def _persist(self, obj, is_new: bool = False):
        if is_new:
            self.db.add(obj)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(obj)
        return obj

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter_by(email=email.lower()).first()

    def add_user(self, user: User) -> User:
        try:
            return self._persist(user, is_new=True)
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise DuplicateEmail("User already exists")

    def save_user(self, user: User) -> User:
        return self._persist(user)

    def list_pending_owners(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.role == UserRole.OWNER.value, User.is_approved.is_(False))
            .order_by(User.created_at.asc(), User.id.asc())
            .all()
        )

    def get_property(self, property_id: int) -> Optional[Property]:
        return self.db.query(Property).filter(Property.id == property_id).first()

    def list_public_properties(self) -> List[Property]:
        return (
            self.db.query(Property)
            .filter(
                Property.is_approved.is_(True),
                Property.status == PropertyStatus.AVAILABLE.value,
            )
            .order_by(Property.created_at.desc(), Property.id.desc())
            .all()
        )

    def list_properties_by_owner(self, owner_id: int) -> List[Property]:
        return (
            self.db.query(Property)
            .filter(Property.owner_id == owner_id)
            .order_by(Property.created_at.desc(), Property.id.desc())
            .all()
        )

    def add_property(self, property_obj: Property) -> Property:
        return self._persist(property_obj, is_new=True)

    def save_property(self, property_obj: Property) -> Property:
        return self._persist(property_obj)

    def delete_property(self, property_obj: Property) -> None:
        # Bookings are kept; their property reference is cleared
        self.db.query(Booking).filter(Booking.property_id == property_obj.id).update(
            {Booking.property_id: None}, synchronize_session=False
        )
        self.db.delete(property_obj)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def approve_all_pending(self) -> Tuple[int, int]:
        failing_gate = or_(
            Property.is_approved.is_(False),
            Property.status != PropertyStatus.AVAILABLE.value,
        )
        try:
            modified = (
                self.db.query(Property)
                .filter(failing_gate)
                .update(
                    {
                        Property.is_approved: True,
                        Property.status: PropertyStatus.AVAILABLE.value,
                    },
                    synchronize_session=False,
                )
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return modified, modified

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def add_booking(self, booking: Booking) -> Booking:
        return self._persist(booking, is_new=True)

    def save_booking(self, booking: Booking) -> Booking:
        return self._persist(booking)

    def list_bookings(self, renter_id=None, property_ids=None) -> List[Booking]:
        query = self.db.query(Booking)
        if renter_id is not None:
            query = query.filter(Booking.renter_id == renter_id)
        if property_ids is not None:
            property_ids = list(property_ids)
            if not property_ids:
                return []
            query = query.filter(Booking.property_id.in_(property_ids))
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()


class MemoryDataSource(DataSource):
    """
    Process-local store holding detached model instances.

    Every operation runs under one re-entrant lock, which gives the same
    single-entity atomicity the database offers.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._users = {}
        self._properties = {}
        self._bookings = {}
        self._ids = {
            "users": itertools.count(1),
            "properties": itertools.count(1),
            "bookings": itertools.count(1),
        }

    def _insert(self, table: dict, name: str, obj):
        with self._lock:
            if obj.id is None:
                obj.id = next(self._ids[name])
            if getattr(obj, "created_at", None) is None:
                obj.created_at = datetime.now(timezone.utc)
            table[obj.id] = obj
            return obj

    @staticmethod
    def _newest_first(items):
        return sorted(items, key=lambda item: (item.created_at, item.id), reverse=True)

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def add_user(self, user: User) -> User:
        with self._lock:
            if self.get_user_by_email(user.email):
                raise DuplicateEmail("User already exists")
            return self._insert(self._users, "users", user)

    def save_user(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = user
            return user

    def list_pending_owners(self) -> List[User]:
        with self._lock:
            return [
                u
                for u in self._users.values()
                if u.role == UserRole.OWNER.value and not u.is_approved
            ]

    def get_property(self, property_id: int) -> Optional[Property]:
        with self._lock:
            return self._properties.get(property_id)

    def list_public_properties(self) -> List[Property]:
        with self._lock:
            return self._newest_first(
                p
                for p in self._properties.values()
                if p.is_approved and p.status == PropertyStatus.AVAILABLE.value
            )

    def list_properties_by_owner(self, owner_id: int) -> List[Property]:
        with self._lock:
            return self._newest_first(
                p for p in self._properties.values() if p.owner_id == owner_id
            )

    def add_property(self, property_obj: Property) -> Property:
        return self._insert(self._properties, "properties", property_obj)

    def save_property(self, property_obj: Property) -> Property:
        with self._lock:
            self._properties[property_obj.id] = property_obj
            return property_obj

    def delete_property(self, property_obj: Property) -> None:
        with self._lock:
            self._properties.pop(property_obj.id, None)
            for booking in self._bookings.values():
                if booking.property_id == property_obj.id:
                    booking.property_id = None

    def approve_all_pending(self) -> Tuple[int, int]:
        with self._lock:
            matched = [
                p
                for p in self._properties.values()
                if not (p.is_approved and p.status == PropertyStatus.AVAILABLE.value)
            ]
            for p in matched:
                p.is_approved = True
                p.status = PropertyStatus.AVAILABLE.value
            return len(matched), len(matched)

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        with self._lock:
            return self._bookings.get(booking_id)

    def add_booking(self, booking: Booking) -> Booking:
        return self._insert(self._bookings, "bookings", booking)

    def save_booking(self, booking: Booking) -> Booking:
        with self._lock:
            self._bookings[booking.id] = booking
            return booking

    def list_bookings(self, renter_id=None, property_ids=None) -> List[Booking]:
        if property_ids is not None:
            property_ids = set(property_ids)
        with self._lock:
            bookings = [
                b
                for b in self._bookings.values()
                if (renter_id is None or b.renter_id == renter_id)
                and (property_ids is None or b.property_id in property_ids)
            ]
            return self._newest_first(bookings)
