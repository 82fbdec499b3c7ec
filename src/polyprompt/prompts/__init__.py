r"""Specialization-aware prompt templates.

A template document is YAML keyed by target language (``lang-<code>``) and
target model (``llm-<name>``), with ``default`` fallbacks:

    lang-default: Hi {{name}}
    lang-en:
      default: Hello {{name}}
      llm-gpt-4o:
        messages:
          - role: system
            content: You are {{persona}}.

When several keys match at the same level the later one wins, so defaults
are written first.

Basic usage:
    from polyprompt.prompts import PromptTemplate, ResolutionContext

    template = PromptTemplate.from_file(Path("greeting.yaml"))
    template.format({"name": "Ada"}, ResolutionContext(lang="en"))
    # Returns: "Hello Ada"

Lower-level pieces:
    tree = build_tree(parse_document(text))
    resolution = resolve_section(tree, ResolutionContext(lang="en", llm="gpt-4o"))
    render_section(resolution.section, {"persona": "a tutor"})
"""

from ._binding import bind_mustache
from ._environment import EnvironmentConfig, create_environment
from ._models import (
    ChatMessage,
    MessagesSection,
    MessageTemplate,
    RenderableSection,
    Resolution,
    ResolutionContext,
    TextSection,
    coerce_role,
)
from ._renderer import render_section, render_string
from ._resolver import (
    DEFAULT_KEY,
    KeyMatcher,
    resolve_section,
    select_node,
    to_section,
)
from ._template import PromptTemplate
from ._tree import (
    Branch,
    Leaf,
    SpecializationNode,
    YAMLValue,
    build_tree,
    is_present,
    parse_document,
)

__all__ = [
    "DEFAULT_KEY",
    "Branch",
    "ChatMessage",
    "EnvironmentConfig",
    "KeyMatcher",
    "Leaf",
    "MessageTemplate",
    "MessagesSection",
    "PromptTemplate",
    "RenderableSection",
    "Resolution",
    "ResolutionContext",
    "SpecializationNode",
    "TextSection",
    "YAMLValue",
    "bind_mustache",
    "build_tree",
    "coerce_role",
    "create_environment",
    "is_present",
    "parse_document",
    "render_section",
    "render_string",
    "resolve_section",
    "select_node",
    "to_section",
]
