"""Specialization tree built from a parsed template document."""

from dataclasses import dataclass
from typing import cast

import yaml

# Type aliases for parsed YAML data
type YAMLPrimitive = str | int | float | bool | None
type YAMLKey = str | int | float | bool | None
type YAMLValue = YAMLPrimitive | list[YAMLValue] | dict[YAMLKey, YAMLValue]

type SpecializationNode = Leaf | Branch


@dataclass(frozen=True, slots=True)
class Leaf:
    """A non-mapping value. Lists are leaves and are never searched for keys."""

    value: YAMLValue


@dataclass(frozen=True, slots=True)
class Branch:
    """A mapping, with entries kept in document order."""

    entries: tuple[tuple[str, SpecializationNode], ...]

    def get(self, key: str) -> SpecializationNode | None:
        """Return the last node stored under key, or None."""
        found: SpecializationNode | None = None
        for entry_key, node in self.entries:
            if entry_key == key:
                found = node
        return found


def parse_document(text: str) -> YAMLValue:
    """Parse raw template text.

    Raises:
        yaml.YAMLError: If the text is not a well-formed YAML document.
    """
    return cast("YAMLValue", yaml.safe_load(text))


def _key_to_str(key: YAMLKey) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def build_tree(data: YAMLValue) -> SpecializationNode:
    """Convert parsed YAML data into a specialization tree."""
    if isinstance(data, dict):
        return Branch(
            entries=tuple(
                (_key_to_str(key), build_tree(value)) for key, value in data.items()
            )
        )
    return Leaf(value=data)


def is_present(node: SpecializationNode | None) -> bool:
    """Return whether a node counts as a match for the fallback chain.

    Null, empty-string, false and zero leaves are absent. Mappings and lists
    are always present, even when empty.
    """
    if node is None:
        return False
    if isinstance(node, Branch) or isinstance(node.value, list):
        return True
    return bool(node.value)
