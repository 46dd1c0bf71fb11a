"""Domain entity describing the authenticated caller."""

from dataclasses import dataclass

ROLE_USER = "user"
ROLE_OWNER = "owner"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """Identity extracted from a verified access token."""

    id: str
    role: str = ROLE_USER

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the principal's role matches ``alias``."""

        return self.role.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the principal is an administrator."""

        return self.has_role(ROLE_ADMIN)
