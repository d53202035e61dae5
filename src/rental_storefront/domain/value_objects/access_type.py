from typing import Literal

AccessType = Literal["time", "film", "category"]

ACCESS_TYPES: tuple[str, ...] = ("time", "film", "category")

# value carried by every time-based grant
FULL_ACCESS = "all"


def is_access_type(value: object) -> bool:
    return isinstance(value, str) and value in ACCESS_TYPES
