import math
from typing import Any, Optional


def is_blank(value: Any) -> bool:
    """True for None and for strings with no visible characters"""
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def parse_number(value: Any) -> Optional[float]:
    """Coerce a JSON number or numeric string; None when it is not a number"""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number
