"""Enumeration types for polyprompt."""

from enum import StrEnum


class MessageRole(StrEnum):
    """Recognized chat message roles.

    Roles outside this set are accepted and passed through verbatim as
    plain strings.
    """

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    DEVELOPER = "developer"
    MEMORY = "memory"


class TemplateEngine(StrEnum):
    """Variable substitution engines."""

    MUSTACHE = "mustache"
    JINJA = "jinja"


class SectionKind(StrEnum):
    """Output shape of a resolved template section."""

    TEXT = "text"
    MESSAGES = "messages"
