from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

# -------- Data models --------
@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str


@dataclass(frozen=True)
class Plan:
    name: str
    product_id: str
    unit_amount: int  # cents
    currency: str = "usd"


# Cover-letter sections, in the order the model is asked to produce them
SECTIONS = ("Experience", "Skills", "Motivation", "Closing")

CLOSING_FALLBACK = "Thank you for considering my application."

PLAN_PRICES = {
    "basic": 1999,
    "pro": 4999,
}


def build_plans(product_ids: Mapping[str, str]) -> Dict[str, Plan]:
    return {
        name: Plan(name=name, product_id=product_ids.get(name, ""), unit_amount=amount)
        for name, amount in PLAN_PRICES.items()
    }


# -------- Loose record access --------
def group(record: Mapping[str, Any], key: str) -> Dict[str, Any]:
    """Return a nested object group, or {} when it is absent or not an object."""
    value = record.get(key)
    return value if isinstance(value, dict) else {}


def has_group(record: Mapping[str, Any], key: str) -> bool:
    return isinstance(record.get(key), dict)


def entries(record: Mapping[str, Any], key: str) -> List[Dict[str, Any]]:
    """Return the object entries of a list group, skipping anything else."""
    value = record.get(key)
    if not isinstance(value, list):
        return []
    return [e for e in value if isinstance(e, dict)]
