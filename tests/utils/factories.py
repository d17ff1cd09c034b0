from typing import Optional

import bcrypt

from src.domain.entities import Identity, IdentityStatus, Role

PASSWORD = "CorrectHorse1!"

# Low cost factor keeps the suite fast; checkpw reads the cost from the hash
_PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()


def make_identity(
    role: Role = Role.resident,
    building_id: Optional[str] = "building-a",
    email: Optional[str] = None,
    phone: Optional[str] = None,
    username: Optional[str] = None,
    status: IdentityStatus = IdentityStatus.active,
    can_login: bool = True,
) -> Identity:
    if not (email or phone or username):
        email = f"{role.value.lower()}@example.com"
    return Identity(
        role=role,
        email=email,
        phone=phone,
        username=username,
        password_hash=_PASSWORD_HASH,
        building_id=building_id,
        status=status,
        can_login=can_login,
    )

UNIT_SECRET = "unit-test-secret-0123456789abcdef0123456789"
