"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, the config table only contains
overrides. Values are checked when settings are built, so a bad
``valgen.toml`` fails before any source file is read.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

# --- valgen.toml sections ---


class GenerateConfig(BaseModel):
    """[generate] section.

    ``tag_key`` is the ``field(metadata=...)`` key rule annotations are read
    from; ``output_suffix`` names the default module beside the source.
    """

    model_config = {"frozen": True}

    locale: str = "en"
    tag_key: str = "rules"
    output_suffix: str = "_schema.py"

    @field_validator("locale", "tag_key")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("output_suffix")
    @classmethod
    def _python_module(cls, v: str) -> str:
        if not v.endswith(".py") or "/" in v or "\\" in v:
            raise ValueError(f"{v!r} must be a file name suffix ending in '.py'")
        return v


class MessagesConfig(BaseModel):
    """[messages] section.

    ``catalog`` points at a JSON catalog layered over the packaged one.
    Relative paths resolve against the project root.
    """

    model_config = {"frozen": True}

    catalog: str | None = None
