from enum import Enum


class UserRole(str, Enum):
    """Staff roles. The value is the wire format used by the frontend."""

    DOCTOR = "DOCTOR"
    NURSE = "NURSE"
    RECEPTIONIST = "RECEPTIONIST"
    ADMINISTRATOR = "ADMINISTRATOR"
    PHARMACIST = "PHARMACIST"
