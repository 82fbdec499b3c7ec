"""Models for template sections, chat messages and resolution context."""

from dataclasses import dataclass
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, field_validator

from polyprompt.config import PromptConfig
from polyprompt.enums import MessageRole, SectionKind


def coerce_role(value: object) -> object:
    """Map recognized role strings to MessageRole, leaving others untouched."""
    if isinstance(value, str) and not isinstance(value, MessageRole):
        try:
            return MessageRole(value)
        except ValueError:
            return value
    return value


class _RoleMessage(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    role: MessageRole | str

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, value: object) -> object:
        return coerce_role(value)


class MessageTemplate(_RoleMessage):
    """A role-tagged message whose content is a template string."""

    content: str


class ChatMessage(_RoleMessage):
    """A rendered role-tagged message."""

    content: str


class TextSection(BaseModel):
    """A section rendered to a single string."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    kind: ClassVar[SectionKind] = SectionKind.TEXT

    template: str


class MessagesSection(BaseModel):
    """A section rendered to an ordered list of chat messages."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    kind: ClassVar[SectionKind] = SectionKind.MESSAGES

    messages: tuple[MessageTemplate, ...]


type RenderableSection = TextSection | MessagesSection


@dataclass(frozen=True, slots=True)
class ResolutionContext:
    """The (language, model) pair used to pick a specialization branch.

    Attributes:
        lang: Target language, e.g. "en". None or empty means unset.
        llm: Target model, e.g. "gpt-4o". None or empty means unset.
    """

    lang: str | None = None
    llm: str | None = None

    def with_defaults(self, prompt: PromptConfig) -> Self:
        """Fill unset fields from the configured prompt defaults."""
        return type(self)(
            lang=self.lang or prompt.lang or None,
            llm=self.llm or prompt.llm or None,
        )


@dataclass(frozen=True, slots=True)
class Resolution:
    """A selected section and the document keys that led to it.

    Attributes:
        section: The renderable section.
        path: Keys from the document root to the section. Empty when the
            whole document is the section.
    """

    section: RenderableSection
    path: tuple[str, ...] = ()

    @property
    def kind(self) -> SectionKind:
        """Return the output shape of the selected section."""
        return self.section.kind
