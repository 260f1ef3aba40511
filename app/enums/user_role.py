from enum import Enum


class UserRole(str, Enum):
    RENTER = "renter"
    OWNER = "owner"
    ADMIN = "admin"

    @classmethod
    def self_registrable(cls):
        return {cls.RENTER.value, cls.OWNER.value}
