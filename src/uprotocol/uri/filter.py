""" Wildcard matching of addresses. A pattern field holding the wildcard
    sentinel matches any value; the :data:`uprotocol.uri.model.ANY`
    address matches everything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .model import ANY, UUri, WILDCARD_ID, WILDCARD_VERSION


def matches(pattern: UUri, candidate: Optional[UUri]) -> bool:
    """ Return True if *candidate* is matched by *pattern*. Numeric ids are
        compared when both addresses carry them; otherwise the names are
        compared.
    """

    if candidate is None:
        return pattern == ANY

    return _authority_matches(pattern.authority, candidate.authority) and \
           _entity_matches(pattern.entity, candidate.entity) and \
           _resource_matches(pattern.resource, candidate.resource)



def _authority_matches(pattern, candidate):
    if pattern is not None and pattern.is_wildcard():
        return True

    if pattern is None or candidate is None:
        return pattern is None and candidate is None

    if pattern.name and candidate.name:
        return pattern.name == candidate.name

    return pattern.ip == candidate.ip and pattern.id == candidate.id



def _entity_matches(pattern, candidate):
    if pattern.id == WILDCARD_ID:
        pass
    elif pattern.id is not None and candidate.id is not None:
        if pattern.id != candidate.id:
            return False
    elif pattern.name != candidate.name:
        return False

    if pattern.version_major == WILDCARD_VERSION:
        return True

    return pattern.version_major == candidate.version_major



def _resource_matches(pattern, candidate):
    if pattern is not None and pattern.id == WILDCARD_ID:
        return True

    if pattern is None or candidate is None:
        return pattern is None and candidate is None

    if pattern.id is not None and candidate.id is not None:
        return pattern.id == candidate.id

    return pattern.name == candidate.name and pattern.instance == candidate.instance



@dataclass(frozen=True)
class UriFilter:
    """ Select messages by their source and sink addresses. A message with
        no sink is only selected by a filter whose sink is :data:`ANY`.
    """

    source: UUri = ANY
    sink: UUri = ANY

    def matches(self, source, sink) -> bool:
        return matches(self.source, source) and matches(self.sink, sink)

# end of class UriFilter


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
