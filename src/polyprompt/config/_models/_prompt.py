"""Prompt resolution configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from polyprompt.enums import TemplateEngine


class PromptConfig(BaseModel):
    """Process-wide prompt defaults.

    Attributes:
        lang: Language used when a call does not name one.
        llm: Model used when a call does not name one.
        engine: Variable substitution engine.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, extra="ignore", coerce_numbers_to_str=True
    )

    lang: str = ""
    llm: str = ""
    engine: TemplateEngine = TemplateEngine.MUSTACHE
