"""
Coercion

Strict conversion of scalar variables to the scalar type a factory
parameter is annotated with.

The rules accept a value only when the conversion is lossless and the
textual form is canonical:

==========  ==============================================================
target      accepted
==========  ==============================================================
``str``     any scalar; non-strings are rendered as JSON keeping ``.0``
``int``     ints, bools, whole floats, canonical decimal strings
``float``   floats, ints, bools, strings that render back unchanged
``bool``    ``0``/``1`` and ``false/0/no/off/""``, ``true/1/yes/on``
==========  ==============================================================

Anything else is returned unchanged, and the caller reports a type
mismatch when ``type(result) is not target``.
"""

import json
from typing import Any, Callable, Dict, Optional

_FALSE_STRINGS = frozenset(("false", "0", "no", "off", ""))
_TRUE_STRINGS = frozenset(("true", "1", "yes", "on"))


def render(value: Any) -> Optional[str]:
    """Render a scalar the way JSON does, keeping the zero fraction of floats.

    Returns ``None`` for values without a JSON form (``nan``, ``inf``).
    """
    try:
        return json.dumps(value, allow_nan=False)
    except ValueError:
        return None


def to_str(value: Any) -> Any:
    if isinstance(value, str):
        return value
    rendered = render(value)
    return value if rendered is None else rendered


def to_int(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        try:
            number = int(value)
        except ValueError:
            return value
        # rejects whitespace, signs like "+1", leading zeros and "1_000"
        return number if str(number) == value else value
    return value


def to_float(value: Any) -> Any:
    if isinstance(value, float):
        return value
    if isinstance(value, (bool, int)):
        return float(value)
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return value
        rendered = render(number)
        if rendered is None:
            return value
        if value == rendered:
            return number
        # "1" renders as "1.0" once parsed, accept the short form too
        if number.is_integer() and rendered.endswith(".0") and value == rendered[:-2]:
            return number
        return value
    return value


def to_bool(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value == 0:
            return False
        if value == 1:
            return True
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered in _FALSE_STRINGS:
            return False
        if lowered in _TRUE_STRINGS:
            return True
    return value


COERCERS: Dict[type, Callable[[Any], Any]] = {
    str: to_str,
    int: to_int,
    float: to_float,
    bool: to_bool,
}


def coerce(value: Any, target: type) -> Any:
    """Coerce ``value`` towards ``target``.

    Args:
        value: A scalar (str, int, float or bool)
        target: One of ``str``, ``int``, ``float``, ``bool``

    Returns:
        The coerced value, or ``value`` unchanged when the rules reject it

    Example::

        coerce(1.0, str)     # "1.0"
        coerce("42", int)    # 42
        coerce("00", int)    # "00" (rejected, left as is)
        coerce("off", bool)  # False
    """
    return COERCERS[target](value)
