"""GenerateService — the end-to-end compile pipeline.

Pipeline: DISCOVER -> PARSE -> GENERATE -> CHECK -> WRITE.

The module is assembled completely in memory; nothing is written unless
every earlier stage succeeded.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from valgen.codegen.generator import Generator
from valgen.domain.errors import ValgenError
from valgen.domain.parser import parse_schemas
from valgen.domain.rules import RecordDescriptor, Schema
from valgen.infrastructure.filesystem import check_source, default_output_path, write_source
from valgen.infrastructure.introspect import discover_records
from valgen.infrastructure.templates import build_template_environment
from valgen.services.base import BaseService
from valgen.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

STDOUT = "-"


@dataclass(frozen=True)
class CompiledModule:
    """An in-memory generated module and what went into it."""

    source: str
    schemas: list[Schema]
    emitted: list[str]


class GenerateService(BaseService):
    """Compile annotated record types into a validation module."""

    def compile(
        self,
        records: Sequence[RecordDescriptor],
        *,
        locale: str | None = None,
        source: str = "",
    ) -> CompiledModule:
        """Parse and generate in memory.

        Raises:
            ValgenError: Any parse or generation failure; nothing is returned.
        """
        schemas = parse_schemas(records)
        resolved = self.locale(locale)
        generator = Generator(
            schemas,
            self.catalog.templates(resolved),
            locale=resolved,
            source=source,
            env=build_template_environment("codegen", project_root=self._settings.project_root),
        )
        source_text = generator.generate()
        logger.debug(
            "Generated %d validators for %s",
            len(generator.emitted),
            ", ".join(schema.type_name for schema in schemas),
        )
        return CompiledModule(source_text, schemas, generator.emitted)

    def generate(
        self,
        type_names: Sequence[str],
        paths: Sequence[Path],
        *,
        output: str | None = None,
        locale: str | None = None,
    ) -> ServiceResult:
        """Discover *type_names* in *paths* and write their validation module.

        *output* of ``"-"`` returns the source in ``data["source"]`` instead
        of writing a file. The default file is ``<first type>_schema.py``
        beside the first source path.
        """
        op = "generate"
        warnings: list[str] = []
        resolved = self.locale(locale)
        try:
            records = discover_records(
                paths, type_names, tag_key=self._settings.generate.tag_key
            )
            if not records:
                return ServiceResult.failure(
                    op,
                    ServiceError(
                        code="NO_TYPES_FOUND",
                        message="no types found",
                        detail={"types": list(type_names), "paths": [str(p) for p in paths]},
                    ),
                )
            found = list(dict.fromkeys(record.name for record in records))
            for name in dict.fromkeys(type_names):
                if name not in found:
                    warnings.append(f"Type {name} not found")
            if resolved not in self.catalog.locales:
                warnings.append(f"Unknown locale {resolved!r}: messages will be empty")
            compiled = self.compile(
                records,
                locale=resolved,
                source=" ".join(str(p) for p in paths),
            )
        except ValgenError as exc:
            return self._failure(op, exc)

        syntax_error = check_source(compiled.source)
        if syntax_error:
            warnings.append(f"Generated module does not parse: {syntax_error}")

        data: dict[str, object] = {
            "types": found,
            "rules": sum(len(schema.rules) for schema in compiled.schemas),
            "validators": compiled.emitted,
            "locale": resolved,
        }
        if output == STDOUT:
            data["source"] = compiled.source
        else:
            path = Path(output) if output else self._default_path(paths, found[0])
            write_source(path, compiled.source)
            data["output"] = str(path)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _default_path(self, paths: Sequence[Path], type_name: str) -> Path:
        first = paths[0] if paths else Path(".")
        directory = first if first.is_dir() else first.parent
        return default_output_path(
            directory, type_name, suffix=self._settings.generate.output_suffix
        )
