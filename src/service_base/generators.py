"""
Scaffolding generators for host applications.

Two conventional files anchor service_base in an application:

  app/services/application_service.py   class ApplicationService(Service)
  app/models/types.py                   class Type(Types)

Each generator creates its file when missing, rewrites the class line of
an existing file that declares the class with a different base (keeping
the body), and leaves a correct file untouched. install() runs both.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

from service_base.config import ServiceBaseSettings, get_settings

log = structlog.get_logger(__name__)


class GeneratorAction(Enum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass(frozen=True, slots=True)
class GeneratedFile:
    path: Path
    action: GeneratorAction


@dataclass(frozen=True, slots=True)
class _ClassScaffold:
    """How one conventional class is declared, located and rewritten."""

    class_name: str
    base_name: str
    import_line: str
    docstring: str

    @property
    def class_block(self) -> str:
        return f'{self.declaration}\n    """{self.docstring}"""\n'

    @property
    def template(self) -> str:
        return f"{self.import_line}\n\n\n{self.class_block}"

    @property
    def declaration(self) -> str:
        return f"class {self.class_name}({self.base_name}):"

    @property
    def class_line(self) -> re.Pattern[str]:
        return re.compile(rf"^class {re.escape(self.class_name)}\b.*:[ \t]*$", re.MULTILINE)

    def apply(self, content: str) -> str:
        """Return content with the class declared on the expected base."""
        if self.declaration in content:
            return content
        updated, count = self.class_line.subn(self.declaration, content, count=1)
        if count == 0:
            updated = f"{content.rstrip()}\n\n\n{self.class_block}" if content.strip() else self.template
        if self.import_line not in updated:
            separator = "\n" if updated.startswith(("from ", "import ")) else "\n\n\n"
            updated = f"{self.import_line}{separator}{updated}"
        return updated


APPLICATION_SERVICE = _ClassScaffold(
    class_name="ApplicationService",
    base_name="Service",
    import_line="from service_base import Service",
    docstring="Base class for the application's services.",
)

TYPES = _ClassScaffold(
    class_name="Type",
    base_name="Types",
    import_line="from service_base import Types",
    docstring="Argument types shared by the application's services.",
)


def _generate(path: Path, scaffold: _ClassScaffold) -> GeneratedFile:
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(scaffold.template, encoding="utf-8")
        log.info("generator.file_created", path=str(path))
        return GeneratedFile(path, GeneratorAction.CREATED)

    content = path.read_text(encoding="utf-8")
    updated = scaffold.apply(content)
    if updated == content:
        log.info("generator.file_unchanged", path=str(path))
        return GeneratedFile(path, GeneratorAction.UNCHANGED)

    path.write_text(updated, encoding="utf-8")
    log.info("generator.file_updated", path=str(path))
    return GeneratedFile(path, GeneratorAction.UPDATED)


def create_application_service_file(
    root: Path | str = ".",
    settings: ServiceBaseSettings | None = None,
) -> GeneratedFile:
    settings = settings or get_settings()
    return _generate(Path(root) / settings.application_service_path, APPLICATION_SERVICE)


def create_types_file(
    root: Path | str = ".",
    settings: ServiceBaseSettings | None = None,
) -> GeneratedFile:
    settings = settings or get_settings()
    return _generate(Path(root) / settings.types_path, TYPES)


def install(root: Path | str = ".", settings: ServiceBaseSettings | None = None) -> list[GeneratedFile]:
    """Run every generator: the application service first, then the types module."""
    return [
        create_application_service_file(root, settings),
        create_types_file(root, settings),
    ]
