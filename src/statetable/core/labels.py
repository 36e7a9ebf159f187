"""
Label helpers shared by the builder, the table and the analysis module.

- label_key: natural sort key for a state or transition label
- label_text: text used for a label in renderings and error messages
- check_label: precondition check applied when a label is declared

Enum members order by declaration position and render by name. Any other
hashable, mutually orderable value (int, str, ...) orders by itself and
renders with str().
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Hashable, Optional


def label_key(label: Hashable) -> Any:
    if isinstance(label, Enum):
        return type(label)._member_names_.index(label.name)
    return label


def label_text(label: Hashable) -> str:
    if isinstance(label, Enum):
        return label.name
    return str(label)


def check_label(label: Any, domain: Optional[type], what: str) -> None:
    """
    Validate a label at the call that introduces it.

    Args:
        label: The label being declared.
        domain: Expected label type, or None to accept any hashable value.
        what: Argument name used in the error message.

    Raises:
        TypeError: If label is None, unhashable, or not a member of domain.
    """
    if label is None:
        raise TypeError(f"{what} must not be None")
    if domain is not None and not isinstance(label, domain):
        raise TypeError(
            f"{what} must be a {domain.__name__}, got {type(label).__name__}"
        )
    try:
        hash(label)
    except TypeError:
        raise TypeError(f"{what} must be hashable, got {type(label).__name__}") from None
