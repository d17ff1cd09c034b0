"""
Register Identity Use Case

Creates a login identity for a resident or staff member.
"""

from src.libs.result import Error, Result, Return
from src.app.services.credential_validator import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Identity, LoginIdentifier, Role
from src.domain.entities.login_identifier import (
    normalize_email,
    normalize_phone,
    normalize_username,
)
from .dtos import IdentityResponse, RegisterIdentityCommand


def to_identity_response(identity: Identity) -> IdentityResponse:
    return IdentityResponse(
        id=str(identity.id),
        role=identity.role.value,
        status=identity.status.value,
        can_login=identity.can_login,
        building_id=identity.building_id,
        email=identity.email,
        phone=identity.phone,
        username=identity.username,
    )


class RegisterIdentityUseCase:
    """
    Register Identity Use Case

    Business Logic:
    1. At least one of email/phone/username is required
    2. Every role except SUPER_ADMIN requires a building_id
    3. Password must be at least 8 characters
    4. Each identifier must not be used by another identity (in any field)
    5. Hash password with bcrypt cost factor 12
    6. Create Identity (active, can_login)
    7. Create AuditEvent with action=identity_registered
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def _validate(self, command: RegisterIdentityCommand) -> Result[None]:
        if not (command.email or command.phone or command.username):
            return Return.err(
                Error(
                    "IDENTIFIER_REQUIRED",
                    "At least one of email, phone or username is required",
                )
            )

        if command.role != Role.super_admin and not command.building_id:
            return Return.err(
                Error("BUILDING_REQUIRED", f"Role {command.role.value} requires a building_id")
            )

        if len(command.password) < 8:
            return Return.err(
                Error("INVALID_PASSWORD", "Password must be at least 8 characters long")
            )

        if len(command.password.encode()) > 72:
            return Return.err(Error("INVALID_PASSWORD", "Password must be at most 72 bytes"))

        return Return.ok(None)

    async def execute(self, command: RegisterIdentityCommand) -> Result[IdentityResponse]:
        """
        Execute register identity use case

        Errors:
            - IDENTIFIER_REQUIRED, BUILDING_REQUIRED, INVALID_PASSWORD
            - IDENTIFIER_ALREADY_EXISTS: An identifier is already taken
        """
        validation = self._validate(command)
        if validation.is_err():
            return Return.err(validation.error)

        email = normalize_email(command.email) if command.email else None
        phone = normalize_phone(command.phone) if command.phone else None
        username = normalize_username(command.username) if command.username else None

        async with self.uow:
            # Identifiers are unique across all three fields, so login by
            # "any" identifier can never be ambiguous for new identities
            for value in filter(None, (email, phone, username)):
                existing = await self.uow.identities.find_by_identifier(
                    LoginIdentifier.any(value)
                )
                if existing:
                    return Return.err(
                        Error("IDENTIFIER_ALREADY_EXISTS", "Identifier already registered")
                    )

            identity = Identity(
                role=command.role,
                email=email,
                phone=phone,
                username=username,
                password_hash=hash_password(command.password),
                building_id=command.building_id,
            )
            identity = await self.uow.identities.create(identity)

            audit = AuditEvent(
                identity_id=identity.id,
                building_id=identity.building_id,
                action="identity_registered",
                event_metadata={"role": identity.role.value},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(to_identity_response(identity))
