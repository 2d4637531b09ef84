"""
Native identifier format checks.
"""

import string
from typing import Any

_HEX_DIGITS = frozenset(string.hexdigits)
OBJECT_ID_LENGTH = 24


class ObjectIdValidator:
    """Recognises the string form of a 12-byte object id.

    A legal object id string is exactly 24 hexadecimal characters, in
    either case. Anything that is not a string is never legal.
    """

    def is_legal(self, value: Any) -> bool:
        if not isinstance(value, str) or len(value) != OBJECT_ID_LENGTH:
            return False
        return all(char in _HEX_DIGITS for char in value)
