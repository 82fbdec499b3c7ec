"""Template rendering.

Variable substitution is delegated to an external engine. With the default
mustache engine (chevron) missing variables render empty, ``{{name}}`` is
HTML-escaped (``&``, ``<``, ``>`` and ``"`` only), ``{{{name}}}`` and
``{{&name}}`` are raw, and sections and inverted sections follow mustache
semantics. Partials are never loaded, so ``{{> name}}`` renders empty.
"""

from collections.abc import Mapping
from typing import cast

from polyprompt.enums import TemplateEngine
from polyprompt.exceptions import TemplateRenderError

from ._binding import bind_mustache
from ._environment import EnvironmentConfig, create_environment
from ._models import ChatMessage, MessagesSection, RenderableSection


def _render_mustache(
    template: str,
    inputs: Mapping[str, str],
    *,
    keep_missing: bool,
) -> str:
    import chevron  # noqa: PLC0415

    if keep_missing:
        return bind_mustache(template, inputs)

    try:
        return chevron.render(template, dict(inputs), partials_path=None)
    except chevron.ChevronError as e:
        msg = f"Failed to render mustache template: {e}"
        raise TemplateRenderError(msg, engine=TemplateEngine.MUSTACHE.value) from e


def _render_jinja(
    template: str,
    inputs: Mapping[str, str],
    *,
    keep_missing: bool,
) -> str:
    from jinja2 import TemplateError as JinjaTemplateError  # noqa: PLC0415

    env = create_environment(EnvironmentConfig(keep_undefined=keep_missing))
    try:
        return cast("str", env.from_string(template).render(dict(inputs)))
    except JinjaTemplateError as e:
        msg = f"Failed to render jinja template: {e}"
        raise TemplateRenderError(msg, engine=TemplateEngine.JINJA.value) from e


def render_string(
    template: str,
    inputs: Mapping[str, str],
    *,
    engine: TemplateEngine = TemplateEngine.MUSTACHE,
    keep_missing: bool = False,
) -> str:
    """Substitute variables into a template string.

    Args:
        template: Template text.
        inputs: Flat mapping of variable names to values.
        engine: Substitution engine.
        keep_missing: Leave tags for variables absent from inputs in the
            output so they can be filled in later. Mustache keeps such tags
            and their section blocks as written. Jinja keeps undefined
            variables as ``{{ name }}`` but evaluates ``{% %}`` blocks.

    Returns:
        Rendered string.

    Raises:
        TemplateRenderError: If the engine rejects the template.

    Example:
        render_string("Hi {{name}}", {"name": "Ada"})
        # Returns: "Hi Ada"
    """
    if engine is TemplateEngine.JINJA:
        return _render_jinja(template, inputs, keep_missing=keep_missing)
    return _render_mustache(template, inputs, keep_missing=keep_missing)


def render_section(
    section: RenderableSection,
    inputs: Mapping[str, str],
    *,
    engine: TemplateEngine = TemplateEngine.MUSTACHE,
) -> str | list[ChatMessage]:
    """Render a resolved section.

    Message sections produce one message per template, in order, with roles
    unchanged. Text sections produce a single string.
    """
    if isinstance(section, MessagesSection):
        return [
            ChatMessage(
                role=message.role,
                content=render_string(message.content, inputs, engine=engine),
            )
            for message in section.messages
        ]
    return render_string(section.template, inputs, engine=engine)
