from collections.abc import Iterable

DEFAULT_MANAGER_ROLE = "mxpManager"


def is_privileged(caller_roles: Iterable[str], role_name: str = DEFAULT_MANAGER_ROLE) -> bool:
    """True if one of the caller's role names is exactly role_name (case-sensitive)."""
    return any(role == role_name for role in caller_roles)
