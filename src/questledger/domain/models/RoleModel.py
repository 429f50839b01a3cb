from __future__ import annotations

from enum import Enum


class Role(Enum):
    OWNER = "OWNER"
    BACKEND_AUTHORITY = "BACKEND_AUTHORITY"


# roles allowed to record completions and daily claims for users
RECORDING_ROLES = (Role.OWNER, Role.BACKEND_AUTHORITY)
