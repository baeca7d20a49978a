"""
Normalization of raw identity-directory profiles into Dino records.

A directory profile wraps each attribute as ``{"value": ...}`` and keeps the
HRIS identifiers under ``access_information.hris.values``. Display fields are
extracted best-effort: a missing or malformed field becomes None and is logged,
it never aborts the batch.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from .exceptions import ProfileError
from .models import Dino, DinoData

logger = logging.getLogger(__name__)

EMPLOYEE_ID_FIELD = "EmployeeID"
MANAGER_ID_FIELD = "WorkersManagersEmployeeID"


def get_staff_field(
    profile: Mapping[str, Any],
    field: str,
    log: logging.Logger | None = None,
) -> Any:
    """
    Read ``profile[field]["value"]``.

    Args:
        profile: Raw directory profile
        field: Attribute name
        log: Logger for extraction failures (default: module logger)

    Returns:
        The field value, or None if absent or unreadable
    """
    try:
        if field in profile:
            return profile[field]["value"]
    except (KeyError, TypeError, AttributeError):
        (log or logger).error(f"missing field {field}")
    return None


def _hris_value(
    profile: Mapping[str, Any],
    key: str,
    log: logging.Logger,
) -> Any:
    try:
        return profile["access_information"]["hris"]["values"][key]
    except (KeyError, TypeError):
        log.error(f"missing hris field {key}")
        return None


def _display_field(
    profile: Mapping[str, Any],
    field: str,
    log: logging.Logger | None,
) -> str | None:
    value = get_staff_field(profile, field, log)
    if value is not None and not isinstance(value, str):
        (log or logger).error(f"missing field {field}: expected text, got {type(value).__name__}")
        return None
    return value


def _as_id(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def slim_down_profile(
    profile: Mapping[str, Any],
    user_id: str,
    log: logging.Logger | None = None,
) -> DinoData:
    """
    Reduce a full profile to the display payload served by queries.

    Args:
        profile: Raw directory profile
        user_id: Already resolved user id
        log: Logger for extraction failures (default: module logger)

    Returns:
        DinoData with unresolvable or non-text fields set to None
    """
    return DinoData(
        user_id=user_id,
        first_name=_display_field(profile, "first_name", log),
        last_name=_display_field(profile, "last_name", log),
        picture=_display_field(profile, "picture", log),
        title=_display_field(profile, "business_title", log),
        fun_title=_display_field(profile, "fun_title", log),
        location=_display_field(profile, "location_preference", log),
    )


def dino_from_profile(
    profile: Mapping[str, Any],
    log: logging.Logger | None = None,
) -> Dino:
    """
    Normalize one directory profile.

    Args:
        profile: Raw directory profile
        log: Logger for extraction failures (default: module logger)

    Returns:
        Normalized Dino

    Raises:
        ProfileError: If the user id or employee id cannot be resolved
    """
    log = log or logger
    user_id = _as_id(get_staff_field(profile, "user_id", log))
    if user_id is None:
        raise ProfileError("Profile has no user_id")

    employee_id = _as_id(_hris_value(profile, EMPLOYEE_ID_FIELD, log))
    if employee_id is None:
        raise ProfileError(f"Profile '{user_id}' has no {EMPLOYEE_ID_FIELD}")

    manager_id = _as_id(_hris_value(profile, MANAGER_ID_FIELD, log))

    try:
        return Dino(
            user_id=user_id,
            employee_id=employee_id,
            manager_id=manager_id,
            data=slim_down_profile(profile, user_id, log),
        )
    except ValidationError as e:
        raise ProfileError(f"Profile '{user_id}' failed validation: {e}") from e


def dinos_from_profiles(
    profiles: Iterable[Mapping[str, Any]],
    log: logging.Logger | None = None,
) -> list[Dino]:
    """
    Normalize a whole directory payload, skipping profiles without identity.

    Args:
        profiles: Raw directory profiles
        log: Logger for extraction failures (default: module logger)

    Returns:
        Normalized Dinos in payload order
    """
    log = log or logger
    dinos: list[Dino] = []
    skipped = 0
    for profile in profiles:
        try:
            dinos.append(dino_from_profile(profile, log))
        except ProfileError as e:
            skipped += 1
            log.warning(f"Skipping profile: {e}")

    log.info(f"Normalized {len(dinos)} profiles ({skipped} skipped)")
    return dinos
