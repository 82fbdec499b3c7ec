"""Specialization resolver.

Selects, from a specialization tree, the one section matching a
(language, model) context.

Root entries are visited in document order:

- ``lang-<lang>`` / ``lang-default`` selects its value. When that value is a
  mapping, each nested ``llm-<llm>`` / ``llm-default`` / ``default`` key
  replaces the selection in turn.
- ``llm-<llm>`` / ``llm-default`` at the root selects its value.
- ``default`` at the root is kept aside as the root default.

When several keys match at the same level the one appearing later in the
document wins. If nothing usable was selected the root default is used,
and failing that the whole document is treated as the section.
"""

import re
from dataclasses import dataclass
from typing import Self

from pydantic import ValidationError

from polyprompt.exceptions import InvalidTemplateSectionError

from ._models import (
    MessagesSection,
    RenderableSection,
    Resolution,
    ResolutionContext,
    TextSection,
)
from ._tree import Branch, Leaf, SpecializationNode, is_present

LANG_PREFIX = "lang"
LLM_PREFIX = "llm"
DEFAULT_KEY = "default"
MESSAGES_KEY = "messages"


@dataclass(frozen=True, slots=True)
class KeyMatcher:
    """Case-insensitive matcher for one dimension's keys."""

    pattern: re.Pattern[str]

    @classmethod
    def for_dimension(cls, prefix: str, value: str | None) -> Self:
        """Build a matcher accepting ``<prefix>-<value>`` or ``<prefix>-default``.

        An unset or empty value accepts only ``<prefix>-default``.
        """
        alternatives = [re.escape(value)] if value else []
        alternatives.append(DEFAULT_KEY)
        return cls(
            re.compile(
                rf"{re.escape(prefix)}-(?:{'|'.join(alternatives)})", re.IGNORECASE
            )
        )

    def matches(self, key: str) -> bool:
        """Return whether key belongs to this dimension and context value."""
        return self.pattern.fullmatch(key) is not None


def select_node(
    tree: SpecializationNode,
    context: ResolutionContext,
) -> tuple[SpecializationNode, tuple[str, ...]]:
    """Pick the node for a context, without checking its shape.

    Returns:
        The selected node and the keys leading to it.
    """
    lang_matcher = KeyMatcher.for_dimension(LANG_PREFIX, context.lang)
    llm_matcher = KeyMatcher.for_dimension(LLM_PREFIX, context.llm)

    selected: SpecializationNode | None = None
    selected_path: tuple[str, ...] = ()
    root_default: SpecializationNode | None = None

    if isinstance(tree, Branch):
        for key, node in tree.entries:
            if lang_matcher.matches(key):
                selected, selected_path = node, (key,)
                if isinstance(node, Branch):
                    for nested_key, nested_node in node.entries:
                        if llm_matcher.matches(nested_key) or nested_key == DEFAULT_KEY:
                            selected = nested_node
                            selected_path = (key, nested_key)
            elif llm_matcher.matches(key):
                selected, selected_path = node, (key,)
            elif key == DEFAULT_KEY:
                root_default = node

    if selected is not None and is_present(selected):
        return selected, selected_path
    if root_default is not None and is_present(root_default):
        return root_default, (DEFAULT_KEY,)
    return tree, ()


def to_section(
    node: SpecializationNode,
    path: tuple[str, ...] = (),
) -> RenderableSection:
    """Interpret a node as a renderable section.

    A mapping with a ``messages`` list becomes a MessagesSection and a string
    becomes a TextSection.

    Raises:
        InvalidTemplateSectionError: If the node has neither shape, or a
            message lacks a string role or content.
    """
    if isinstance(node, Branch):
        messages = node.get(MESSAGES_KEY)
        if is_present(messages):
            if isinstance(messages, Leaf) and isinstance(messages.value, list):
                try:
                    return MessagesSection.model_validate({"messages": messages.value})
                except ValidationError as e:
                    detail = e.errors()[0]
                    location = ".".join(str(part) for part in detail["loc"])
                    msg = f"Invalid template section: {location}: {detail['msg']}"
                    raise InvalidTemplateSectionError(msg, path=path) from e
            raise InvalidTemplateSectionError(
                "Invalid template section: messages must be a list", path=path
            )
    elif isinstance(node.value, str):
        return TextSection(template=node.value)

    raise InvalidTemplateSectionError(path=path)


def resolve_section(
    tree: SpecializationNode,
    context: ResolutionContext,
) -> Resolution:
    """Select and validate the section for a context.

    Raises:
        InvalidTemplateSectionError: If the selected node is not renderable.
    """
    node, path = select_node(tree, context)
    return Resolution(section=to_section(node, path), path=path)
