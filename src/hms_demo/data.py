"""Demo staff account definitions.

All data is fictional and used for demonstration purposes only.
"""

from dataclasses import dataclass
from typing import Optional

from hms.domain.user import UserRole


@dataclass(frozen=True)
class DemoUserDef:
    """Definition for a demo staff account."""

    username: str
    password: str
    role: UserRole
    name: str
    email: str
    phone: Optional[str] = None


DEMO_USERS: list[DemoUserDef] = [
    DemoUserDef(
        username="admin",
        password="admin123",  # NOQA: S106
        role=UserRole.ADMINISTRATOR,
        name="System Administrator",
        email="admin@hospital.com",
        phone="+1-555-0001",
    ),
    DemoUserDef(
        username="doctor",
        password="doctor123",  # NOQA: S106
        role=UserRole.DOCTOR,
        name="Dr. John Smith",
        email="doctor@hospital.com",
        phone="+1-555-0002",
    ),
    DemoUserDef(
        username="nurse",
        password="nurse123",  # NOQA: S106
        role=UserRole.NURSE,
        name="Nurse Mary Johnson",
        email="nurse@hospital.com",
        phone="+1-555-0003",
    ),
    DemoUserDef(
        username="reception",
        password="reception123",  # NOQA: S106
        role=UserRole.RECEPTIONIST,
        name="Sarah Wilson",
        email="reception@hospital.com",
        phone="+1-555-0004",
    ),
    DemoUserDef(
        username="pharmacist",
        password="pharmacist123",  # NOQA: S106
        role=UserRole.PHARMACIST,
        name="Mike Brown",
        email="pharmacist@hospital.com",
        phone="+1-555-0005",
    ),
]
