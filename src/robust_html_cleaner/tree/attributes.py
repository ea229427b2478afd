"""Ordered, normalizing attribute storage for tag nodes."""

import re
from typing import Dict, Iterator, Mapping, Optional, Tuple

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
# Trimmed from both ends of names and values: space and everything below it
_TRIM_CHARS = "".join(chr(code) for code in range(0x21))


def normalize_attribute_name(name: Optional[str]) -> str:
    """Trim and lowercase an attribute name; ``None`` becomes ``""``."""
    if name is None:
        return ""
    return name.strip(_TRIM_CHARS).lower()


def normalize_attribute_value(value: Optional[str]) -> str:
    """Replace every control character with a space, then trim."""
    if value is None:
        return ""
    return _CONTROL_CHARS.sub(" ", value).strip(_TRIM_CHARS)


class AttributeStore:
    """Per-node mapping from normalized attribute name to sanitized value.

    Insertion order is kept. Setting an existing key overwrites the value in
    its original position. Malformed names are absorbed: a blank or ``None``
    name makes ``set``/``remove`` no-ops and ``get``/``has`` report absence.
    """

    __slots__ = ("_values",)

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._values: Dict[str, str] = {}
        if initial:
            self.update(initial)

    def set(self, name: Optional[str], value: Optional[str]) -> None:
        key = normalize_attribute_name(name)
        if not key:
            return
        self._values[key] = normalize_attribute_value(value)

    def get(self, name: Optional[str], default: Optional[str] = None) -> Optional[str]:
        if name is None:
            return default
        return self._values.get(name.lower(), default)

    def remove(self, name: Optional[str]) -> None:
        if name is None or not name.strip(_TRIM_CHARS):
            return
        self._values.pop(name.lower(), None)

    def has(self, name: Optional[str]) -> bool:
        if name is None:
            return False
        return name.lower() in self._values

    def update(self, mapping: Mapping[str, str]) -> None:
        """Set every pair of ``mapping`` in its iteration order."""
        for name, value in mapping.items():
            self.set(name, value)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._values.items()))

    def copy(self) -> "AttributeStore":
        clone = AttributeStore()
        clone._values = dict(self._values)
        return clone

    def to_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __getitem__(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeStore):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeStore({self._values!r})"
