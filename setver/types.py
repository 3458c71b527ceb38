import enum
import functools


GREATER = 1
LESSER = -1
EQUAL = 0


class PartialOrdering(enum.Enum):
    """Outcome of comparing two versions under the subset relation."""

    EQUAL = "equal"
    LESS = "less"
    GREATER = "greater"
    INCOMPARABLE = "incomparable"

    def __str__(self):
        return self.value


class SetVersion:
    """A SetVer version: a hereditarily finite set of other versions.

    Children are always held deduplicated and in canonical order, so two
    structurally equal versions have identical child tuples. Instances are
    immutable; every transformation returns a new instance.

    The rich comparison operators follow the subset partial order, the same
    way Python's ``frozenset`` does. Use :func:`canonical_sort_key` to sort
    versions in a deterministic total order.
    """

    __slots__ = ("_children", "_hash")

    def __init__(self, children=()):
        self._children = canonicalize(children)
        self._hash = None

    @classmethod
    def _from_canonical(cls, children):
        # Caller guarantees `children` is already a canonical tuple.
        version = cls.__new__(cls)
        version._children = children
        version._hash = None
        return version

    @staticmethod
    def empty():
        return _EMPTY

    @staticmethod
    def from_children(children):
        return SetVersion(children)

    @property
    def children(self):
        return self._children

    def cardinality(self):
        return len(self._children)

    def __len__(self):
        return len(self._children)

    def __iter__(self):
        return iter(self._children)

    def __contains__(self, version):
        if not isinstance(version, SetVersion):
            return False

        return _index_of(self._children, version) is not None

    def __eq__(self, other):
        if not isinstance(other, SetVersion):
            return NotImplemented

        return structurally_equal(self, other)

    def __ne__(self, other):
        if not isinstance(other, SetVersion):
            return NotImplemented

        return not structurally_equal(self, other)

    def __le__(self, other):
        if not isinstance(other, SetVersion):
            return NotImplemented

        return subset_of(self, other)

    def __lt__(self, other):
        if not isinstance(other, SetVersion):
            return NotImplemented

        return len(self) < len(other) and subset_of(self, other)

    def __ge__(self, other):
        if not isinstance(other, SetVersion):
            return NotImplemented

        return subset_of(other, self)

    def __gt__(self, other):
        if not isinstance(other, SetVersion):
            return NotImplemented

        return len(self) > len(other) and subset_of(other, self)

    def __hash__(self):
        if self._hash is None:
            self._hash = hash((len(self._children), *[hash(c) for c in self._children]))

        return self._hash

    def __str__(self):
        return "{" + ",".join([str(c) for c in self._children]) + "}"

    def __repr__(self):
        return f"SetVersion('{self}')"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (SetVersion, (self._children,))


def compare_canonical(a, b):
    """Canonical total order: cardinality first, then children pairwise.

    Returns ``LESSER``, ``EQUAL`` or ``GREATER``. Two versions compare
    ``EQUAL`` exactly when they are structurally equal.
    """
    if a is b:
        return EQUAL

    if len(a._children) != len(b._children):
        return LESSER if len(a._children) < len(b._children) else GREATER

    for a_child, b_child in zip(a._children, b._children):
        c = compare_canonical(a_child, b_child)
        if c != EQUAL:
            return c

    return EQUAL


canonical_sort_key = functools.cmp_to_key(compare_canonical)


def structurally_equal(a, b):
    if a is b:
        return True

    if len(a._children) != len(b._children):
        return False

    if a._hash is not None and b._hash is not None and a._hash != b._hash:
        return False

    return all(structurally_equal(x, y) for x, y in zip(a._children, b._children))


def subset_of(a, b):
    """Two-pointer merge over both canonical child sequences."""
    a_children = a._children
    b_children = b._children

    i = j = 0
    while i < len(a_children):
        if len(a_children) - i > len(b_children) - j:
            return False

        c = compare_canonical(a_children[i], b_children[j])

        if c == EQUAL:
            i += 1
            j += 1
        elif c == GREATER:
            j += 1
        else:
            # b has already passed the slot where a_children[i] would sit.
            return False

    return True


def canonicalize(children):
    """Sorts `children` into canonical order and drops structural duplicates."""
    children = list(children)

    for child in children:
        if not isinstance(child, SetVersion):
            raise ValueError(f"Invalid child type '{type(child)}'.")

    ordered = sorted(children, key=canonical_sort_key)

    unique = []
    for child in ordered:
        if unique and compare_canonical(unique[-1], child) == EQUAL:
            continue
        unique.append(child)

    return tuple(unique)


def _index_of(children, version):
    lo, hi = 0, len(children)

    while lo < hi:
        mid = (lo + hi) // 2
        c = compare_canonical(children[mid], version)

        if c == EQUAL:
            return mid

        if c == LESSER:
            lo = mid + 1
        else:
            hi = mid

    return None


_EMPTY = SetVersion._from_canonical(())
