"""Role aliases used to address staff groups."""

ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_RECEPTIONIST = "receptionist"
ROLE_HOUSEKEEPING = "housekeeping"
ROLE_MAINTENANCE = "maintenance"
ROLE_GUEST = "guest"

BROADCAST_ROLES = frozenset({ROLE_ADMIN, ROLE_MANAGER})


__all__ = [
    "BROADCAST_ROLES",
    "ROLE_ADMIN",
    "ROLE_GUEST",
    "ROLE_HOUSEKEEPING",
    "ROLE_MAINTENANCE",
    "ROLE_MANAGER",
    "ROLE_RECEPTIONIST",
]
