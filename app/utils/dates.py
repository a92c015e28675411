"""
Month name lookup for history table dates
"""
from types import MappingProxyType
from typing import Mapping, Optional

UNKNOWN_MONTH = -1

_MONTH_NAMES = (
    ("Jan", "January"),
    ("Feb", "February"),
    ("Mar", "March"),
    ("Apr", "April"),
    ("May", "May"),
    ("Jun", "June"),
    ("Jul", "July"),
    ("Aug", "August"),
    ("Sep", "September"),
    ("Oct", "October"),
    ("Nov", "November"),
    ("Dec", "December"),
)

# Case-sensitive: "Feb" and "February" resolve, "feb" and "FEB" do not
MONTHS: Mapping[str, int] = MappingProxyType({
    name: number
    for number, names in enumerate(_MONTH_NAMES, start=1)
    for name in names
})


def month_to_number(name: Optional[str]) -> int:
    """Return 1-12 for a known month name, otherwise UNKNOWN_MONTH"""
    if name is None:
        return UNKNOWN_MONTH
    return MONTHS.get(name, UNKNOWN_MONTH)
