"""Shared Jinja2 template loading with per-project override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, project_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``.valgen/templates/`` inside the project.
    Both a namespaced directory (for example ``.valgen/templates/codegen/``)
    and the shared root are supported.

    Templates render Python source, so autoescaping stays off and block tags
    do not leave blank lines behind.
    """

    loaders: list[BaseLoader] = []
    if project_root is not None:
        template_root = project_root / ".valgen" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("valgen", f"templates/{group}"))
    env = Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["pyrepr"] = repr
    return env
