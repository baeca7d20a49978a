"""
Pytest configuration and shared fixtures.

This module provides:
- Factories for Dino records and raw directory profiles
- The four-person A/B/C/D roster
- A wider roster with several roots and unreachable records
"""

from typing import Any, Callable

import pytest

from dino_tree.models import Dino, DinoData


def _make_dino(
    user_id: str,
    employee_id: str,
    manager_id: str | None,
    first_name: str | None,
    last_name: str | None = None,
    **data: Any,
) -> Dino:
    return Dino(
        user_id=user_id,
        employee_id=employee_id,
        manager_id=manager_id,
        data=DinoData(
            user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            picture=data.pop("picture", f"https://pictures.example/{user_id}.png"),
            **data,
        ),
    )


def _make_profile(
    user_id: str | None,
    employee_id: str | int | None,
    manager_id: str | int | None = None,
    first_name: str | None = "Pat",
    **fields: Any,
) -> dict[str, Any]:
    profile: dict[str, Any] = {
        "first_name": {"value": first_name},
        "picture": {"value": f"https://pictures.example/{user_id}.png"},
        "access_information": {
            "hris": {
                "values": {
                    "EmployeeID": employee_id,
                    "WorkersManagersEmployeeID": manager_id,
                }
            }
        },
    }
    if user_id is not None:
        profile["user_id"] = {"value": user_id}
    for name, value in fields.items():
        profile[name] = {"value": value}
    return profile


@pytest.fixture
def make_dino() -> Callable[..., Dino]:
    """Factory for Dino records."""
    return _make_dino


@pytest.fixture
def make_profile() -> Callable[..., dict[str, Any]]:
    """Factory for raw directory profiles."""
    return _make_profile


# ============================================================================
# Rosters
# ============================================================================


@pytest.fixture
def abcd_roster() -> list[Dino]:
    """
    A manages B and C, B manages D.

    Given out of order so construction has to sort.
    """
    return [
        _make_dino("u-d", "e-d", "e-b", "D"),
        _make_dino("u-c", "e-c", "e-a", "C"),
        _make_dino("u-a", "e-a", None, "A"),
        _make_dino("u-b", "e-b", "e-a", "B"),
    ]


@pytest.fixture
def wide_roster() -> list[Dino]:
    """
    Two roots, a three-level branch, and four records that never reach a root.

    Expected layout:
        0 Alice (root)   1 Zed (root, manager outside roster)
        2 Aaron  3 Bob  4 Carol   (Alice's reports)
        5 Eve                     (Zed's report)
        6 Dave                    (Carol's report)
    Left out: Olga and Oscar manage each other, Sam manages himself,
    Hank reports to Olga.
    """
    return [
        _make_dino("u1", "e1", None, "Alice", "Adams", title="CEO"),
        _make_dino("u2", "e2", "e999", "Zed", "Zulu", title="Advisor"),
        _make_dino("u3", "e3", "e1", "Bob", "Brown"),
        _make_dino("u4", "e4", "e1", "Carol", "Clark", title="VP"),
        _make_dino("u5", "e5", "e1", "Aaron", "Abbot"),
        _make_dino("u6", "e6", "e4", "Dave", "Doe"),
        _make_dino("u7", "e7", "e2", "Eve", "Evans"),
        _make_dino("u8", "e8", "e9", "Olga", "Olsen"),
        _make_dino("u9", "e9", "e8", "Oscar", "Ortiz"),
        _make_dino("u10", "e10", "e10", "Sam", "Self"),
        _make_dino("u11", "e11", "e8", "Hank", "Hill"),
    ]


@pytest.fixture
def wide_reachable() -> list[str]:
    """user_ids of wide_roster in expected flat order."""
    return ["u1", "u2", "u5", "u3", "u4", "u7", "u6"]
