import logging

from .parsing import UnexpectedCharacter, as_text, parse_version, scan, DEFAULT_MAX_DEPTH
from .types import (
    SetVersion,
    PartialOrdering,
    canonical_sort_key,
    structurally_equal,
    subset_of,
)

logger = logging.getLogger("setver.versioning")

INTEGRALTERNATIVE_DIGITS = {
    "{": "2",
    "}": "3",
}

# The text of natural number n is 2**(n+1) braces long, so implicit
# conversion of ints stays well below where rendering it becomes impractical.
MAX_COERCED_NATURAL = 16


def as_version(version, max_depth=DEFAULT_MAX_DEPTH):
    """Takes a string and parses it into a :class:`SetVersion` instance. The
    input is also allowed to be an instance of :class:`SetVersion`, in which
    case it is returned unmodified, or an int up to ``MAX_COERCED_NATURAL``,
    which is turned into the version of that natural number.

    Args: version (str | bytes | int | SetVersion): The value to convert

    Raises: ValueError: If the input is of an unknown type or an int out of range

    Returns: :class:`SetVersion`: The parsed version
    """

    if isinstance(version, SetVersion):
        return version

    if isinstance(version, (str, bytes, bytearray)):
        return parse_version(version, max_depth=max_depth)

    if isinstance(version, int) and not isinstance(version, bool):
        if not 0 <= version <= MAX_COERCED_NATURAL:
            raise ValueError(
                f"Natural number {version} is outside 0..{MAX_COERCED_NATURAL}, "
                "call from_natural() explicitly."
            )
        return from_natural(version)

    raise ValueError(f"Invalid version type '{type(version)}'.")


def to_string(version):
    return str(as_version(version))


#
# Relations
#

def is_subset(a, b):
    """True if every element of `a` is also an element of `b`."""
    return subset_of(as_version(a), as_version(b))


def is_superset(a, b):
    return is_subset(b, a)


def equals(a, b):
    return structurally_equal(as_version(a), as_version(b))


def partial_compare(a, b):
    """Places `a` relative to `b` in the subset partial order.

    Returns:
        :class:`PartialOrdering`: ``EQUAL``, ``LESS`` (strict subset),
        ``GREATER`` (strict superset) or ``INCOMPARABLE``.
    """
    a = as_version(a)
    b = as_version(b)

    if structurally_equal(a, b):
        return PartialOrdering.EQUAL

    # A strict subset is necessarily smaller, so only one direction can hold.
    if len(a) < len(b) and subset_of(a, b):
        return PartialOrdering.LESS

    if len(a) > len(b) and subset_of(b, a):
        return PartialOrdering.GREATER

    return PartialOrdering.INCOMPARABLE


def sort_versions(versions):
    return sorted([as_version(v) for v in versions], key=canonical_sort_key)


def maximal_versions(versions):
    """Versions that are not a strict subset of any other given version.

    Duplicates are reported once, in canonical order.
    """
    candidates = sort_versions(versions)

    unique = []
    for v in candidates:
        if not unique or not structurally_equal(unique[-1], v):
            unique.append(v)

    return [v for v in unique if not any(v < other for other in unique)]


#
# Building
#

def add_child_version(parent, child):
    """Returns a new version holding the children of `parent` plus `child`.

    Adding a child that is already present returns an equal version.
    """
    return add_child_versions(parent, child)


def add_child_versions(parent, *children):
    parent = as_version(parent)
    children = [as_version(c) for c in children]

    missing = [c for c in children if c not in parent]
    if not missing:
        return parent

    return SetVersion.from_children([*parent.children, *missing])


def from_natural(number):
    """The von Neumann encoding of `number`: 0 is ``{}`` and n+1 is n | {n}."""
    if not isinstance(number, int) or isinstance(number, bool):
        raise ValueError(f"Invalid natural number type '{type(number)}'.")

    if number < 0:
        raise ValueError(f"Natural numbers cannot be negative, got {number}.")

    version = SetVersion.empty()
    for _ in range(number):
        version = add_child_version(version, version)

    logger.debug(f"Built natural number {number}")

    return version


#
# Integralternative
#
"""
The integralternative of a version writes its braces as digits, '{' as 2 and
'}' as 3, leaving out the separators. `{{},{{}}}` becomes 22322333.

Integralternatives of deep versions run to thousands of digits, past the
interpreter's limit on int/str conversion, so they are built and taken apart
digit by digit.
"""

def _braces_to_digits(braces):
    return "".join([INTEGRALTERNATIVE_DIGITS[c] for c in braces if c != ","])


def _digits_to_integer(digits):
    number = 0
    for digit in digits:
        number = number * 10 + ord(digit) - ord("0")

    return number


def _integer_to_digits(number):
    digits = []
    while number:
        number, digit = divmod(number, 10)
        digits.append(chr(ord("0") + digit))

    return "".join(reversed(digits)) or "0"


def to_integralternative_digits(version):
    return _braces_to_digits(str(as_version(version)))


def string_to_integralternative_digits(string, max_depth=DEFAULT_MAX_DEPTH):
    """Integralternative digits of `string` as written, without canonicalizing it."""
    compact, _ = scan(as_text(string), max_depth)

    return _braces_to_digits(compact)


def to_integralternative(version):
    return _digits_to_integer(to_integralternative_digits(version))


def string_to_integralternative(string, max_depth=DEFAULT_MAX_DEPTH):
    return _digits_to_integer(string_to_integralternative_digits(string, max_depth))


def from_integralternative(number, max_depth=DEFAULT_MAX_DEPTH):
    """Takes an integralternative, as an int or a digit string, back to a version."""
    if isinstance(number, int) and not isinstance(number, bool):
        if number < 0:
            raise ValueError("Integralternatives cannot be negative.")
        digits = _integer_to_digits(number)
    elif isinstance(number, str):
        digits = number
    else:
        raise ValueError(f"Invalid integralternative type '{type(number)}'.")

    braces = {d: b for b, d in INTEGRALTERNATIVE_DIGITS.items()}

    for offset, digit in enumerate(digits):
        if digit not in braces:
            raise UnexpectedCharacter(offset, digit, digits)

    # Every "}{" pair separates two siblings.
    text = "".join([braces[d] for d in digits]).replace("}{", "},{")

    return parse_version(text, max_depth=max_depth)
