
__version__ = '0.1.0'

from .versioning import (
    as_version as version,
    to_string,
    is_subset,
    is_superset,
    equals,
    partial_compare,
    add_child_version,
    add_child_versions,
    from_natural,
    sort_versions,
    maximal_versions,
    to_integralternative,
    string_to_integralternative,
    from_integralternative,
    to_integralternative_digits,
    string_to_integralternative_digits,
    MAX_COERCED_NATURAL,
)
from .parsing import (
    parse_version,
    as_text,
    DEFAULT_MAX_DEPTH,

    SetVerParseError,
    UnexpectedCharacter,
    UnbalancedBraces,
    TrailingData,
    EmptyInput,
    DepthExceeded,
)

from .types import (
    SetVersion,
    PartialOrdering,
    compare_canonical,
    canonical_sort_key,
)
