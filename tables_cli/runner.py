"""One generation run: load the schema, build the structs, write the files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List

from .codegen import StructGenerator, Struct, get_taggers
from .config import Settings
from .database import SchemaLoader, create_introspector, get_dialect
from .errors import NameCollisionError

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Structs of one run and their rendered sources, keyed by file name."""
    structs: List[Struct] = field(default_factory=list)
    sources: Dict[str, str] = field(default_factory=dict)


def _check_unique(structs: List[Struct], kind: str, name_of: Callable[[Struct], str]):
    """Raise NameCollisionError if two structs share ``name_of(struct)``."""
    seen = {}
    for struct in structs:
        name = name_of(struct)
        if name in seen:
            raise NameCollisionError(kind, name, [seen[name], struct.table])
        seen[name] = struct.table


def generate(settings: Settings) -> GenerationResult:
    """Introspect the configured database and render one Go file per table.

    The database type and tag generators are resolved before any query
    is made. Nothing is rendered when loading fails or when two tables
    would produce the same struct name or file.
    """
    dialect = get_dialect(settings.db_type)
    taggers = get_taggers(settings.tags)
    introspector = create_introspector(settings)

    logger.debug("Loading schema from %s via %s", settings.db_type, dialect.driver)
    tables = SchemaLoader(introspector).load(settings.tables)

    generator = StructGenerator(
        introspector,
        taggers,
        naming=settings.naming,
        null_type=settings.null_type,
        package_name=settings.package_name,
        prefix=settings.prefix,
        suffix=settings.suffix,
    )
    structs = generator.generate_structs(tables)
    _check_unique(structs, "struct name", lambda s: s.name)
    _check_unique(structs, "file", generator.file_name)

    result = GenerationResult()
    for struct in structs:
        result.structs.append(struct)
        result.sources[generator.file_name(struct)] = generator.render(struct)
    return result


def write_sources(sources: Dict[str, str], output_dir: str) -> List[Path]:
    """Write rendered sources into ``output_dir``, creating it if needed."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for file_name, source in sources.items():
        path = directory / file_name
        path.write_text(source, encoding="utf-8")
        logger.debug("Wrote %s", path)
        written.append(path)
    return written
