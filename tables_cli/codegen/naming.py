"""Naming conventions for generated Go identifiers."""

import re
from types import MappingProxyType
from typing import Callable, Mapping

# Words golint expects to be written in upper case.
COMMON_INITIALISMS = frozenset({
    "acl", "api", "ascii", "cpu", "css", "dns", "eof", "guid", "html", "http",
    "https", "id", "ip", "json", "lhs", "qps", "ram", "rhs", "rpc", "sla",
    "smtp", "sql", "ssh", "tcp", "tls", "ttl", "udp", "ui", "uid", "uuid",
    "uri", "url", "utf8", "vm", "xml", "xmpp", "xsrf", "xss",
})

_WORD_SEPARATORS = re.compile(r"[\W_]+")


def _exported(name: str) -> str:
    # Go exports an identifier only when it starts with an upper-case letter.
    name = name[:1].upper() + name[1:]
    if not name[:1].isupper():
        return "X" + name
    return name


def camel_case(name: str) -> str:
    """``customer_id`` -> ``CustomerID``, ``ORDER_LINES`` -> ``OrderLines``."""
    words = []
    for word in _WORD_SEPARATORS.split(name):
        if not word:
            continue
        if word.lower() in COMMON_INITIALISMS:
            words.append(word.upper())
        elif word.isupper() or word.islower():
            words.append(word.capitalize())
        else:
            words.append(word[0].upper() + word[1:])
    return _exported("".join(words))


def original_case(name: str) -> str:
    """Keep the name, only upper-casing the first letter: ``customer_id`` -> ``Customer_id``."""
    return _exported(_WORD_SEPARATORS.sub("_", name))


NAMING_CONVENTIONS: Mapping[str, Callable[[str], str]] = MappingProxyType({
    "camel": camel_case,
    "original": original_case,
})


def get_naming_convention(name: str) -> Callable[[str], str]:
    """Look up a naming convention by name."""
    try:
        return NAMING_CONVENTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown naming convention '{name}' (available: {', '.join(NAMING_CONVENTIONS)})"
        ) from None
