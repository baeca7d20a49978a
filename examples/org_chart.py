#!/usr/bin/env python3
"""
Example: Org chart from a directory payload

This example normalizes a small identity-directory payload, builds the tree,
and runs every query against it.
"""

import json
import logging

from dino_tree import DinoTree, dinos_from_profiles, roster_report


def profile(user_id, employee_id, manager_id, first_name, last_name, title):
    return {
        "user_id": {"value": user_id},
        "first_name": {"value": first_name},
        "last_name": {"value": last_name},
        "picture": {"value": f"https://pictures.example/{user_id}.png"},
        "business_title": {"value": title},
        "access_information": {
            "hris": {
                "values": {
                    "EmployeeID": employee_id,
                    "WorkersManagersEmployeeID": manager_id,
                }
            }
        },
    }


PAYLOAD = [
    profile("ceo", 1, None, "Casey", "Ng", "CEO"),
    profile("vp_eng", 2, 1, "Robin", "Ito", "VP Engineering"),
    profile("vp_sales", 3, 1, "Morgan", "Diaz", "VP Sales"),
    profile("eng_manager", 4, 2, "Jamie", "Roe", "Engineering Manager"),
    profile("engineer_1", 5, 4, "Alex", "Kim", "Software Engineer"),
    profile("sales_rep_1", 6, 3, "Sam", "Lee", "Account Executive"),
    profile("contractor", 7, 99, "Taylor", "Fox", "Contractor"),
]


def main():
    """Build the chart and print each query."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    dinos = dinos_from_profiles(PAYLOAD)
    tree = DinoTree(dinos)
    print(f"Built {tree!r}")
    print(f"Roster report: {roster_report(dinos).to_dict()}")

    print("\nFull org chart:")
    print(json.dumps(tree.full_orgchart(), indent=2))

    print("\nRelated to Jamie:")
    print(json.dumps(tree.related("eng_manager"), indent=2))

    print("\nBreadcrumb for Alex:")
    print(json.dumps(tree.expanded("engineer_1"), indent=2))

    trace = tree.trace("engineer_1")
    print(f"\nTrace for Alex: {trace}")
    print(f"Located back: {tree.locate(trace['trace'])['first_name']}")

    print(f"\nUnknown user: {tree.directs('nobody')}")


if __name__ == "__main__":
    main()
