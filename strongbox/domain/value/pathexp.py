"""Path expressions: the six segment address of a credential.

A path expression names an org, project, environment, service, identity and
instance, in that fixed order of precedence. Its text form is::

    /org/project/environment/service/identity/instance

Segments other than the org may be the wildcard ``*``. Full expressions are
parsed with :func:`parse_full`; user-typed prefixes with :func:`parse_partial`,
which leaves omitted trailing segments as wildcards. Flag-driven addressing
goes through :func:`construct`, which expands sets of alternatives into one
expression per combination.
"""

import itertools
import re
from typing import Any, Sequence

from pydantic import model_serializer, model_validator

from strongbox.domain.error import ParseError, ValidationError
from strongbox.domain.value.common import ValueObject

WILDCARD = "*"
SEPARATOR = "/"
SEGMENTS = ("org", "project", "environment", "service", "identity", "instance")

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9-]{1,64}$")
_CREDENTIAL_NAME_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def _check_segment(position: int, value: str, partial: bool = False) -> str:
    """Check one segment against the segment grammar.

    The org is always concrete. The project is concrete except in a partial
    expression, where an omitted project resolves to the wildcard.
    """
    name = SEGMENTS[position]
    if not value:
        raise ParseError(f"Empty {name} segment")
    if value == WILDCARD:
        if position == 0 or (position == 1 and not partial):
            raise ParseError(f"The {name} cannot be a wildcard")
        return value
    if not _SEGMENT_RE.match(value):
        raise ParseError(f"Invalid {name} segment: {value!r}")
    return value


class PathExp(ValueObject):
    """Six segment path expression.

    Serializes to and validates from its canonical text form.
    """

    org: str
    project: str
    environment: str = WILDCARD
    service: str = WILDCARD
    identity: str = WILDCARD
    instance: str = WILDCARD

    @model_validator(mode="before")
    @classmethod
    def from_text(cls, data: Any) -> Any:
        """Accept the canonical text form wherever a PathExp is expected."""
        if isinstance(data, str):
            try:
                return dict(zip(SEGMENTS, _split_full(data, partial=True)))
            except ParseError as e:
                raise ValueError(str(e)) from e
        return data

    @model_validator(mode="after")
    def validate_segments(self) -> "PathExp":
        for position, value in enumerate(self.segments()):
            try:
                _check_segment(position, value, partial=True)
            except ParseError as e:
                raise ValueError(str(e)) from e
        return self

    @model_serializer
    def to_text(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return SEPARATOR + SEPARATOR.join(self.segments())

    def segments(self) -> tuple[str, ...]:
        """Segments in precedence order."""
        return (
            self.org,
            self.project,
            self.environment,
            self.service,
            self.identity,
            self.instance,
        )

    def matches(self, pattern: "PathExp") -> bool:
        """Whether this expression is matched by ``pattern``.

        Matching is segment-wise: every pattern segment must be the wildcard
        or equal to the corresponding segment here.
        """
        return all(
            wanted == WILDCARD or wanted == value
            for value, wanted in zip(self.segments(), pattern.segments())
        )

    def require_concrete(self, *segments: str) -> "PathExp":
        """Ensure the named segments hold concrete names.

        Raises:
            ValidationError: If any named segment is the wildcard
        """
        for name in segments:
            if getattr(self, name) == WILDCARD:
                raise ValidationError(f"A concrete {name} is required in {self}")
        return self


def _split_full(text: str, partial: bool = False) -> list[str]:
    if not text.startswith(SEPARATOR):
        raise ParseError(f"Path expression must start with '/': {text!r}")

    parts = text[1:].split(SEPARATOR)
    if len(parts) != len(SEGMENTS):
        raise ParseError(
            f"Path expression must have {len(SEGMENTS)} segments, got {len(parts)}"
        )
    for position, value in enumerate(parts):
        _check_segment(position, value, partial=partial)
    return parts


def parse_full(text: str) -> PathExp:
    """Parse a full path expression.

    Raises:
        ParseError: Unless exactly six well-formed segments are present
    """
    return PathExp(**dict(zip(SEGMENTS, _split_full(text))))


def parse_partial(text: str) -> PathExp:
    """Parse a path expression prefix.

    The leading slash is optional. Omitted trailing segments default to the
    wildcard, so ``org/proj/env`` equals ``org/proj/env/*/*/*``.

    Raises:
        ParseError: On malformed segments or more than six segments
    """
    body = text[1:] if text.startswith(SEPARATOR) else text
    parts = body.split(SEPARATOR)
    if len(parts) > len(SEGMENTS):
        raise ParseError(
            f"Path expression has too many segments ({len(parts)}): {text!r}"
        )
    for position, value in enumerate(parts):
        _check_segment(position, value, partial=True)

    parts += [WILDCARD] * (len(SEGMENTS) - len(parts))
    return PathExp(**dict(zip(SEGMENTS, parts)))


def construct(
    org: str,
    project: str,
    environments: Sequence[str],
    services: Sequence[str],
    identities: Sequence[str],
    instances: Sequence[str],
) -> list[PathExp]:
    """Build one path expression per combination of alternatives.

    Every dimension must carry at least one value; callers fill omitted flags
    with a default (usually the wildcard) before calling.

    Raises:
        ValidationError: If org or project is empty, or any set is empty
        ParseError: If any supplied value is malformed
    """
    if not org:
        raise ValidationError("An org must be supplied")
    if not project:
        raise ValidationError("A project must be supplied")
    _check_segment(0, org)
    _check_segment(1, project)

    dimensions = []
    for position, values in enumerate(
        (environments, services, identities, instances), start=2
    ):
        if not values:
            raise ValidationError(f"At least one {SEGMENTS[position]} is required")
        unique = list(dict.fromkeys(values))
        for value in unique:
            _check_segment(position, value)
        dimensions.append(unique)

    return [
        PathExp(
            org=org,
            project=project,
            environment=environment,
            service=service,
            identity=identity,
            instance=instance,
        )
        for environment, service, identity, instance in itertools.product(
            *dimensions
        )
    ]


def validate_credential_name(name: str) -> str:
    """Check a credential name.

    Names and path segments are disjoint: the wildcard is never a name.

    Raises:
        ValidationError: If the name is empty or the wildcard
        ParseError: If the name contains illegal characters
    """
    if not name:
        raise ValidationError("A secret must have a name")
    if name == WILDCARD:
        raise ValidationError("Secret name cannot be wildcard")
    if not _CREDENTIAL_NAME_RE.match(name):
        raise ParseError(f"Invalid secret name: {name!r}")
    return name
