"""Integration tests for the render, resolve and partial commands."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from polyprompt.cli._shared import ExitCode
from tests.conftest import GREETING, write_template


@pytest.fixture
def greeting_file(isolated_project: Path) -> Path:
    return write_template(isolated_project, "greeting.yaml", GREETING)


class TestRender:
    def test_renders_text_for_language(
        self,
        polyprompt_cli: Callable[..., int],
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = polyprompt_cli(
            "--lang", "fr", "render", str(greeting_file), "--var", "name=Ada"
        )

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == "Bonjour Ada\n"

    def test_renders_messages_as_text(
        self,
        polyprompt_cli: Callable[..., int],
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = polyprompt_cli(
            "--lang",
            "en",
            "--llm",
            "gpt-4o",
            "render",
            str(greeting_file),
            "--var",
            "name=Ada",
        )

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == (
            "system: You are talking to Ada.\nuser: Say hello.\n"
        )

    def test_renders_messages_as_json(
        self,
        polyprompt_cli: Callable[..., int],
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = polyprompt_cli(
            "--lang",
            "en",
            "--llm",
            "gpt-4o",
            "render",
            str(greeting_file),
            "--var",
            "name=Ada",
            "--format",
            "json",
        )

        assert code == ExitCode.SUCCESS
        assert json.loads(capsys.readouterr().out) == [
            {"role": "system", "content": "You are talking to Ada."},
            {"role": "user", "content": "Say hello."},
        ]

    def test_uses_project_config(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _ = (isolated_project / "polyprompt.toml").write_text(
            '[prompt]\nlang = "fr"\n'
        )

        code = polyprompt_cli("render", str(greeting_file), "--var", "name=Ada")

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == "Bonjour Ada\n"

    def test_cli_option_beats_config(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _ = (isolated_project / "polyprompt.toml").write_text(
            '[prompt]\nlang = "fr"\n'
        )

        code = polyprompt_cli(
            "--lang", "de", "render", str(greeting_file), "--var", "name=Ada"
        )

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == "Hi Ada\n"

    def test_jinja_engine(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = write_template(
            isolated_project, "shout.yaml", "default: Hello {{ name | upper }}\n"
        )

        code = polyprompt_cli(
            "--engine", "jinja", "render", str(path), "--var", "name=ada"
        )

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == "Hello ADA\n"

    def test_missing_file(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = polyprompt_cli("render", str(isolated_project / "missing.yaml"))

        assert code == ExitCode.NOT_FOUND
        assert "Template file not found" in capsys.readouterr().err

    def test_invalid_section(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = write_template(isolated_project, "bad.yaml", "lang-en: 42\n")

        code = polyprompt_cli("--lang", "en", "render", str(path))

        assert code == ExitCode.VALIDATION_ERROR
        assert "Invalid template section" in capsys.readouterr().err

    def test_malformed_document(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = write_template(isolated_project, "bad.yaml", "lang-en: [unclosed\n")

        code = polyprompt_cli("render", str(path))

        assert code == ExitCode.LOAD_ERROR
        assert "Malformed template document" in capsys.readouterr().err

    def test_bad_variable_assignment(
        self,
        polyprompt_cli: Callable[..., int],
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = polyprompt_cli("render", str(greeting_file), "--var", "name")

        assert code == ExitCode.VALIDATION_ERROR
        assert "Expected KEY=VALUE" in capsys.readouterr().err

    def test_rejects_toml_format(
        self,
        polyprompt_cli: Callable[..., int],
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = polyprompt_cli("render", str(greeting_file), "--format", "toml")

        assert code == ExitCode.VALIDATION_ERROR
        captured = capsys.readouterr()
        assert "Unsupported format: toml" in captured.err
        assert captured.out == ""

    def test_verbose_logs_resolution(
        self,
        polyprompt_cli: Callable[..., int],
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = polyprompt_cli(
            "--verbose", "--lang", "fr", "render", str(greeting_file)
        )

        assert code == ExitCode.SUCCESS
        err = capsys.readouterr().err
        assert "config_loaded" in err
        assert "section_resolved" in err


class TestResolve:
    def test_shows_path_and_section(
        self,
        polyprompt_cli: Callable[..., int],
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = polyprompt_cli(
            "--lang", "en", "--llm", "gpt-4o", "resolve", str(greeting_file)
        )

        assert code == ExitCode.SUCCESS
        assert yaml.safe_load(capsys.readouterr().out) == {
            "path": ["lang-en", "llm-gpt-4o"],
            "kind": "messages",
            "section": {
                "messages": [
                    {"role": "system", "content": "You are talking to {{name}}."},
                    {"role": "user", "content": "Say hello."},
                ]
            },
        }

    def test_json_output(
        self,
        polyprompt_cli: Callable[..., int],
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = polyprompt_cli(
            "--lang", "de", "resolve", str(greeting_file), "--format", "json"
        )

        assert code == ExitCode.SUCCESS
        assert json.loads(capsys.readouterr().out) == {
            "path": ["lang-default"],
            "kind": "text",
            "section": {"template": "Hi {{name}}"},
        }

    def test_whole_document(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = write_template(isolated_project, "plain.yaml", "Hello {{name}}\n")

        code = polyprompt_cli("resolve", str(path), "--format", "json")

        assert code == ExitCode.SUCCESS
        assert json.loads(capsys.readouterr().out)["path"] == []

    @pytest.mark.parametrize("fmt", ["text", "toml"])
    def test_rejects_other_formats(
        self,
        polyprompt_cli: Callable[..., int],
        greeting_file: Path,
        capsys: pytest.CaptureFixture[str],
        fmt: str,
    ) -> None:
        code = polyprompt_cli("resolve", str(greeting_file), "--format", fmt)

        assert code == ExitCode.VALIDATION_ERROR
        captured = capsys.readouterr()
        assert f"Unsupported format: {fmt}" in captured.err
        assert captured.out == ""


class TestPartial:
    def test_prints_bound_template(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = write_template(
            isolated_project, "t.yaml", "lang-en: Hello {{name}} from {{place}}\n"
        )

        code = polyprompt_cli("partial", str(path), "--var", "name=Ada")

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == "lang-en: Hello Ada from {{place}}\n"

    def test_keeps_unbound_sections(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        content = "default: '{{#formal}}Dear {{/formal}}{{name}}'\n"
        path = write_template(isolated_project, "t.yaml", content)

        code = polyprompt_cli("partial", str(path), "--var", "name=Ada")

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == (
            "default: '{{#formal}}Dear {{/formal}}Ada'\n"
        )

    def test_writes_output_file(
        self,
        polyprompt_cli: Callable[..., int],
        isolated_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = write_template(
            isolated_project, "t.yaml", "lang-en: Hello {{name}} from {{place}}\n"
        )
        output = isolated_project / "bound.yaml"

        code = polyprompt_cli(
            "partial", str(path), "--var", "name=Ada", "--output", str(output)
        )

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == ""
        assert output.read_text() == "lang-en: Hello Ada from {{place}}\n"

        code = polyprompt_cli(
            "--lang", "en", "render", str(output), "--var", "place=London"
        )

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == "Hello Ada from London\n"
