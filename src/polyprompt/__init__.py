"""polyprompt: specialization-aware prompt templates.

Select the variant of a prompt written for a target language and model from
a single YAML document, then render it to text or chat messages.
"""

from polyprompt.config import Config, get_settings, reset_settings, set_settings
from polyprompt.enums import MessageRole, SectionKind, TemplateEngine
from polyprompt.exceptions import (
    ConfigError,
    InvalidTemplateSectionError,
    PolypromptError,
    TemplateError,
    TemplateRenderError,
)
from polyprompt.prompts import (
    ChatMessage,
    MessagesSection,
    MessageTemplate,
    PromptTemplate,
    Resolution,
    ResolutionContext,
    TextSection,
)

__all__ = [
    "ChatMessage",
    "Config",
    "ConfigError",
    "InvalidTemplateSectionError",
    "MessageRole",
    "MessageTemplate",
    "MessagesSection",
    "PolypromptError",
    "PromptTemplate",
    "Resolution",
    "ResolutionContext",
    "SectionKind",
    "TemplateEngine",
    "TemplateError",
    "TemplateRenderError",
    "TextSection",
    "get_settings",
    "reset_settings",
    "set_settings",
]
