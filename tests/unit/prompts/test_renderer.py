from pathlib import Path

import pytest

from polyprompt.enums import MessageRole, TemplateEngine
from polyprompt.exceptions import TemplateRenderError
from polyprompt.prompts import (
    ChatMessage,
    EnvironmentConfig,
    MessagesSection,
    MessageTemplate,
    TextSection,
    create_environment,
    render_section,
    render_string,
)


class TestRenderStringMustache:
    def test_substitutes_variables(self):
        assert render_string("Hi {{name}}", {"name": "Ada"}) == "Hi Ada"

    def test_missing_variable_renders_empty(self):
        assert render_string("Hi {{name}}!", {}) == "Hi !"

    def test_escapes_html_in_double_braces(self):
        assert render_string("{{v}}", {"v": "<b>"}) == "&lt;b&gt;"

    def test_triple_braces_are_raw(self):
        assert render_string("{{{v}}}", {"v": "<b>"}) == "<b>"

    def test_ampersand_tag_is_raw(self):
        assert render_string("{{&v}}", {"v": "<b>"}) == "<b>"

    def test_escapes_only_html_metacharacters(self):
        value = "Ada's <a/b> `x`=y \"q\" & co"
        assert render_string("{{v}}", {"v": value}) == (
            "Ada's &lt;a/b&gt; `x`=y &quot;q&quot; &amp; co"
        )

    def test_partials_are_not_loaded_from_disk(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        _ = (tmp_path / "header.mustache").write_text("SECRET")
        _ = (tmp_path / "abs.mustache").write_text("SECRET")
        monkeypatch.chdir(tmp_path)

        assert render_string("A{{> header}}B", {}) == "AB"
        absolute = "A{{> " + str(tmp_path / "abs") + "}}B"
        assert render_string(absolute, {}) == "AB"

    def test_keep_missing_leaves_partial_tags(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        _ = (tmp_path / "header.mustache").write_text("SECRET")
        monkeypatch.chdir(tmp_path)

        result = render_string("A{{> header}}B", {}, keep_missing=True)
        assert result == "A{{> header}}B"

    def test_section_renders_when_truthy(self):
        template = "{{#formal}}Dear {{/formal}}{{name}}"
        assert render_string(template, {"formal": "yes", "name": "Ada"}) == "Dear Ada"
        assert render_string(template, {"name": "Ada"}) == "Ada"

    def test_inverted_section(self):
        template = "{{^name}}stranger{{/name}}"
        assert render_string(template, {}) == "stranger"
        assert render_string(template, {"name": "Ada"}) == ""

    def test_keep_missing_leaves_tags(self):
        result = render_string(
            "Name: {{n}} and {{m}}", {"n": "X"}, keep_missing=True
        )
        assert result == "Name: X and {{m}}"

    def test_mismatched_section_raises_render_error(self):
        with pytest.raises(TemplateRenderError) as exc_info:
            _ = render_string("{{#a}}x{{/b}}", {})
        assert exc_info.value.engine == "mustache"
        assert exc_info.value.__cause__ is not None

    def test_text_without_tags_is_unchanged(self):
        assert render_string("plain text\n", {"x": "y"}) == "plain text\n"


class TestRenderStringJinja:
    def test_substitutes_variables(self):
        result = render_string(
            "Hi {{ name }}", {"name": "Ada"}, engine=TemplateEngine.JINJA
        )
        assert result == "Hi Ada"

    def test_missing_variable_renders_empty(self):
        result = render_string("Hi {{ name }}!", {}, engine=TemplateEngine.JINJA)
        assert result == "Hi !"

    def test_does_not_escape_html(self):
        result = render_string("{{ v }}", {"v": "<b>"}, engine=TemplateEngine.JINJA)
        assert result == "<b>"

    def test_keeps_trailing_newline(self):
        result = render_string("line\n", {}, engine=TemplateEngine.JINJA)
        assert result == "line\n"

    def test_keep_missing_leaves_tags(self):
        result = render_string(
            "{{ n }} and {{ m }}",
            {"n": "X"},
            engine=TemplateEngine.JINJA,
            keep_missing=True,
        )
        assert result == "X and {{ m }}"

    def test_keep_missing_evaluates_blocks(self):
        result = render_string(
            "{% if flag %}Dear {% endif %}{{ name }}",
            {"name": "Ada"},
            engine=TemplateEngine.JINJA,
            keep_missing=True,
        )
        assert result == "Ada"

    def test_syntax_error_raises_render_error(self):
        with pytest.raises(TemplateRenderError) as exc_info:
            _ = render_string("{% if %}", {}, engine=TemplateEngine.JINJA)
        assert exc_info.value.engine == "jinja"


class TestCreateEnvironment:
    def test_is_cached_per_config(self):
        config = EnvironmentConfig()
        assert create_environment(config) is create_environment(EnvironmentConfig())

    def test_distinct_configs_get_distinct_environments(self):
        plain = create_environment(EnvironmentConfig())
        keeping = create_environment(EnvironmentConfig(keep_undefined=True))
        assert plain is not keeping

    def test_autoescape_disabled_by_default(self):
        assert create_environment().autoescape is False


class TestRenderSection:
    def test_text_section_renders_to_string(self):
        section = TextSection(template="Hello {{name}}")
        assert render_section(section, {"name": "Ada"}) == "Hello Ada"

    def test_messages_render_in_order_with_roles(self):
        section = MessagesSection(
            messages=(
                MessageTemplate(role="system", content="You help {{name}}."),
                MessageTemplate(role="user", content="Hi"),
                MessageTemplate(role="critic", content="{{name}}?"),
            )
        )

        result = render_section(section, {"name": "Ada"})

        assert result == [
            ChatMessage(role=MessageRole.SYSTEM, content="You help Ada."),
            ChatMessage(role=MessageRole.USER, content="Hi"),
            ChatMessage(role="critic", content="Ada?"),
        ]

    def test_empty_message_list(self):
        assert render_section(MessagesSection(messages=()), {}) == []

    def test_jinja_engine(self):
        section = TextSection(template="{{ a }}-{{ b }}")
        result = render_section(
            section, {"a": "1", "b": "2"}, engine=TemplateEngine.JINJA
        )
        assert result == "1-2"

    def test_does_not_modify_section(self):
        section = TextSection(template="Hello {{name}}")
        _ = render_section(section, {"name": "Ada"})
        assert section.template == "Hello {{name}}"
