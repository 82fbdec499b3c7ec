"""The PromptTemplate entity."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict

from polyprompt.config import Config, get_settings
from polyprompt.exceptions import InvalidTemplateSectionError
from polyprompt.utils import get_logger

from ._models import ChatMessage, Resolution, ResolutionContext
from ._renderer import render_section, render_string
from ._resolver import resolve_section
from ._tree import Branch, build_tree, parse_document


class PromptTemplate(BaseModel):
    """A template document holding language and model variants of one prompt.

    Only the raw text is stored. Every call parses it afresh, so a template
    can be shared between threads and serializes as ``{"template": text}``.

    Example:
        template = PromptTemplate(
            "lang-en: Hello {{name}}\\nlang-fr: Bonjour {{name}}\\n"
        )
        template.format({"name": "Ada"}, ResolutionContext(lang="fr"))
        # Returns: "Bonjour Ada"
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    template: str

    def __init__(self, template: str) -> None:
        """Wrap raw template text."""
        super().__init__(template=template)

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Read a template document from a UTF-8 file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        return cls(path.read_text(encoding="utf-8"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:  # pyright: ignore[reportExplicitAny]
        """Rebuild a template from its serialized form."""
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, str]:
        """Return the serialized form, ``{"template": <raw text>}``."""
        return {"template": self.template}

    def resolve(
        self,
        context: ResolutionContext | None = None,
        *,
        config: Config | None = None,
    ) -> Resolution:
        """Select the section for a context without rendering it.

        Args:
            context: Explicit language and model. Unset fields fall back to
                ``config.prompt``.
            config: Settings to resolve against. Defaults to the process-wide
                settings, read once per call.

        Raises:
            yaml.YAMLError: If the template text is not valid YAML.
            InvalidTemplateSectionError: If no renderable section is found.
        """
        settings = config if config is not None else get_settings()
        return self._resolve(context, settings)

    def _resolve(
        self, context: ResolutionContext | None, settings: Config
    ) -> Resolution:
        logger = get_logger(settings.logging)
        effective = (context or ResolutionContext()).with_defaults(settings.prompt)

        tree = build_tree(parse_document(self.template))
        logger.debug(
            "template_parsed",
            root="mapping" if isinstance(tree, Branch) else "scalar",
        )
        try:
            resolution = resolve_section(tree, effective)
        except InvalidTemplateSectionError as e:
            logger.debug(
                "invalid_template_section",
                lang=effective.lang,
                llm=effective.llm,
                path=list(e.path),
                error=str(e),
            )
            raise

        logger.debug(
            "section_resolved",
            lang=effective.lang,
            llm=effective.llm,
            path=list(resolution.path),
            kind=resolution.kind.value,
        )
        return resolution

    def format(
        self,
        inputs: Mapping[str, str] | None = None,
        context: ResolutionContext | None = None,
        *,
        config: Config | None = None,
    ) -> str | list[ChatMessage]:
        """Resolve the section for a context and render it.

        Args:
            inputs: Variable values. Missing variables render empty.
            context: Explicit language and model.
            config: Settings to use instead of the process-wide settings.

        Returns:
            A string for text sections, or a list of ChatMessage for message
            sections.

        Raises:
            yaml.YAMLError: If the template text is not valid YAML.
            InvalidTemplateSectionError: If no renderable section is found.
            TemplateRenderError: If the engine rejects the selected section.
        """
        settings = config if config is not None else get_settings()
        resolution = self._resolve(context, settings)
        result = render_section(
            resolution.section, inputs or {}, engine=settings.prompt.engine
        )
        get_logger(settings.logging).debug(
            "template_rendered",
            kind=resolution.kind.value,
            variables=sorted(inputs or {}),
        )
        return result

    def partial(
        self,
        inputs: Mapping[str, str],
        *,
        config: Config | None = None,
    ) -> Self:
        """Substitute some variables into the raw text.

        With the mustache engine, tags and section blocks for names not in
        inputs are left exactly as written, so formatting the returned
        template with the remaining variables gives the same text as
        formatting this one with all of them. With the jinja engine only
        undefined variables are kept; ``{% if %}`` and other blocks are
        evaluated now. Values are not checked for template syntax.

        Returns:
            A new template; this one is unchanged.
        """
        settings = config if config is not None else get_settings()
        text = render_string(
            self.template,
            inputs,
            engine=settings.prompt.engine,
            keep_missing=True,
        )
        get_logger(settings.logging).debug(
            "template_partially_bound", variables=sorted(inputs)
        )
        return type(self)(text)
