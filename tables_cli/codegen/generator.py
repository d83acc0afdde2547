"""Go struct generator for introspected database schemas."""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from ..database.base import DatabaseIntrospector
from ..database.models import Column, Table, TypeCategory
from .naming import get_naming_convention
from .taggers import Tagger

logger = logging.getLogger(__name__)

# category -> (not null, nullable as sql.NullX, nullable as pointer)
GO_TYPES = {
    TypeCategory.STRING: ("string", "sql.NullString", "*string"),
    TypeCategory.TEXT: ("string", "sql.NullString", "*string"),
    TypeCategory.INTEGER: ("int", "sql.NullInt64", "*int"),
    TypeCategory.FLOAT: ("float64", "sql.NullFloat64", "*float64"),
    TypeCategory.TEMPORAL: ("time.Time", "sql.NullTime", "*time.Time"),
}
UNKNOWN_GO_TYPE = "interface{}"

IMPORTS_BY_QUALIFIER = {
    "sql.": "database/sql",
    "time.": "time",
}


@dataclass
class Field:
    """One generated struct field."""
    name: str
    type: str
    tag: str


@dataclass
class Struct:
    """One generated struct, built from one table."""
    table: str
    name: str
    fields: List[Field] = field(default_factory=list)

    @property
    def imports(self) -> List[str]:
        """Packages the field types refer to, sorted."""
        packages = set()
        for f in self.fields:
            for qualifier, package in IMPORTS_BY_QUALIFIER.items():
                if qualifier in f.type:
                    packages.add(package)
        return sorted(packages)


class StructGenerator:
    """Generates Go structs from introspected tables.

    Output depends only on the tables, the taggers and the options, so
    regenerating an unchanged schema yields identical text.
    """

    def __init__(
        self,
        introspector: DatabaseIntrospector,
        taggers: Sequence[Tagger] = (),
        naming: str = "camel",
        null_type: str = "sql",
        package_name: str = "dto",
        prefix: str = "",
        suffix: str = "",
    ):
        if null_type not in ("sql", "native", "primitive"):
            raise ValueError(f"Unknown null type '{null_type}' (available: sql, native, primitive)")
        self.introspector = introspector
        self.taggers = list(taggers)
        self.to_identifier = get_naming_convention(naming)
        self.null_type = null_type
        self.package_name = package_name
        self.prefix = prefix
        self.suffix = suffix

    def go_type(self, table: Table, column: Column) -> str:
        """Choose the Go type of a column from its semantic category."""
        category = self.introspector.classify(column)
        if category is TypeCategory.UNKNOWN:
            logger.warning(
                "Unknown type %r of column %s.%s, using %s",
                column.data_type, table.name, column.name, UNKNOWN_GO_TYPE,
            )
            return UNKNOWN_GO_TYPE

        not_null, sql_null, pointer = GO_TYPES[category]
        if not self.introspector.is_nullable(column) or self.null_type == "primitive":
            return not_null
        if self.null_type == "native":
            return pointer
        return sql_null

    def tag(self, column: Column) -> str:
        """Join the fragments of all active taggers, in tagger order."""
        fragments = (tagger.generate_tag(self.introspector, column) for tagger in self.taggers)
        return " ".join(fragment for fragment in fragments if fragment)

    def generate_struct(self, table: Table) -> Struct:
        """Build the struct for one table, one field per column in ordinal order."""
        struct = Struct(
            table=table.name,
            name=f"{self.prefix}{self.to_identifier(table.name)}{self.suffix}",
        )
        for column in sorted(table.columns, key=lambda c: c.ordinal_position):
            struct.fields.append(Field(
                name=self.to_identifier(column.name),
                type=self.go_type(table, column),
                tag=self.tag(column),
            ))
        return struct

    def generate_structs(self, tables: Sequence[Table]) -> List[Struct]:
        """Build one struct per table, keeping the table order."""
        return [self.generate_struct(table) for table in tables]

    def render(self, struct: Struct) -> str:
        """Render a struct as a Go source file."""
        lines = [f"package {self.package_name}", ""]

        imports = struct.imports
        if imports:
            lines.append("import (")
            for package in imports:
                lines.append(f'\t"{package}"')
            lines.append(")")
            lines.append("")

        lines.append(f"// {struct.name} represents the {struct.table} table.")
        lines.append(f"type {struct.name} struct {{")

        name_width = max((len(f.name) for f in struct.fields), default=0)
        type_width = max((len(f.type) for f in struct.fields), default=0)
        for f in struct.fields:
            line = f"\t{f.name.ljust(name_width)} {f.type.ljust(type_width)}"
            if f.tag:
                line += f" `{f.tag}`"
            lines.append(line.rstrip())

        lines.append("}")
        return "\n".join(lines) + "\n"

    def file_name(self, struct: Struct) -> str:
        """Name of the file a struct is written to."""
        return f"{struct.table.lower()}.go"
