"""Struct tag generators."""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import List, Mapping, Sequence

from ..database.base import DatabaseIntrospector
from ..database.models import Column
from ..errors import UnknownTagGeneratorError


class Tagger(ABC):
    """Abstract base class for generating one struct tag fragment per field."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the identifier used to activate this tagger."""
        pass

    @abstractmethod
    def generate_tag(self, introspector: DatabaseIntrospector, column: Column) -> str:
        """Generate the tag fragment for a column.

        Args:
            introspector: Backend the column was loaded from
            column: Column the field is generated for

        Returns:
            A tag fragment such as ``db:"customer_id"``
        """
        pass


class DbTagger(Tagger):
    """The standard ``db`` tag used by sqlx."""

    @property
    def name(self) -> str:
        return "db"

    def generate_tag(self, introspector: DatabaseIntrospector, column: Column) -> str:
        return f'db:"{column.name}"'


class StblTagger(Tagger):
    """The ``stbl`` tag used by structable, marking primary key and serial columns."""

    @property
    def name(self) -> str:
        return "stbl"

    def generate_tag(self, introspector: DatabaseIntrospector, column: Column) -> str:
        options = ""
        if introspector.is_primary_key(column):
            options += ",PRIMARY_KEY"
        if introspector.is_auto_increment(column):
            options += ",SERIAL,AUTO_INCREMENT"
        return f'stbl:"{column.name}{options}"'


class JsonTagger(Tagger):
    """The ``json`` tag, with ``omitempty`` on nullable columns."""

    @property
    def name(self) -> str:
        return "json"

    def generate_tag(self, introspector: DatabaseIntrospector, column: Column) -> str:
        if introspector.is_nullable(column):
            return f'json:"{column.name},omitempty"'
        return f'json:"{column.name}"'


TAGGERS: Mapping[str, Tagger] = MappingProxyType({
    tagger.name: tagger for tagger in (DbTagger(), StblTagger(), JsonTagger())
})


def get_taggers(names: Sequence[str]) -> List[Tagger]:
    """Resolve tagger names, keeping their order.

    Raises:
        UnknownTagGeneratorError: A name is not registered
    """
    taggers = []
    for name in names:
        if name not in TAGGERS:
            raise UnknownTagGeneratorError(name, sorted(TAGGERS))
        taggers.append(TAGGERS[name])
    return taggers
