"""
Role Policy

Decides, per role, whether password login issues a token directly or must
pass an OTP challenge first. This is the only place that branches on role to
select the login flow.

Whether SUPER_ADMIN and BUILDING_ADMIN go through OTP is a deployment
decision: DEFAULT_OTP_REQUIREMENTS holds the default, OTP_REQUIRED_ROLES
overrides it.
"""

import logging
from typing import Iterable, Mapping, Optional, Union

from src.domain.entities import Role

logger = logging.getLogger(__name__)

DEFAULT_OTP_REQUIREMENTS: Mapping[Role, bool] = {
    Role.super_admin: True,
    Role.building_admin: False,
    Role.security: False,
    Role.resident: True,
}


class RolePolicy:
    """
    Total mapping role -> requires OTP.

    Business Rules:
    - Every known role has an explicit entry
    - Unknown or missing roles fail closed (OTP required)
    """

    def __init__(self, otp_requirements: Optional[Mapping[Role, bool]] = None):
        table = dict(DEFAULT_OTP_REQUIREMENTS)
        if otp_requirements is not None:
            table.update(otp_requirements)
        self._table = table

    @classmethod
    def from_required_roles(cls, roles: Optional[Iterable[str]]) -> "RolePolicy":
        """
        Build a policy from a configured list of role names requiring OTP.

        None keeps the default table. A list replaces it: listed roles require
        OTP, every other known role gets a direct token.

        Raises:
            ValueError: a listed role name is not a known role
        """
        if roles is None:
            return cls()
        required = {Role(name) for name in roles}
        return cls({role: role in required for role in Role})

    def requires_otp(self, role: Union[Role, str, None]) -> bool:
        try:
            role = Role(role)
        except ValueError:
            logger.warning(f"Unknown role {role!r}, requiring OTP")
            return True
        return self._table.get(role, True)

    def describe(self) -> dict:
        return {role.value: self._table[role] for role in Role}
