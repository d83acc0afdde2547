"""Go code generation module for tables-cli.

This module turns introspected tables into Go structs whose fields
carry struct tags from the active tag generators.
"""

from .generator import StructGenerator, Struct, Field
from .naming import NAMING_CONVENTIONS, get_naming_convention
from .taggers import (
    Tagger,
    DbTagger,
    StblTagger,
    JsonTagger,
    TAGGERS,
    get_taggers,
)

__all__ = [
    "StructGenerator",
    "Struct",
    "Field",
    "NAMING_CONVENTIONS",
    "get_naming_convention",
    "Tagger",
    "DbTagger",
    "StblTagger",
    "JsonTagger",
    "TAGGERS",
    "get_taggers",
]
