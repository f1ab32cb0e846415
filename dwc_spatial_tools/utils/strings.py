"""Defines helper functions for comparing names"""


def std_key(val):
    """Standardizes a name for case-insensitive comparison

    Only case is normalized. Whitespace and diacritics are significant, so
    "Travis " and "Travis" remain different names.
    """
    return val.casefold()


def same_name(val, other):
    """Tests if two names match, ignoring case"""
    if val is None or other is None:
        return False
    return std_key(val) == std_key(other)
