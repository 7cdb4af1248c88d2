"""Content path router.

Patterns are made of literal segments and ``:name`` parameter segments::

    "/services"                                   -> [services]
    "/services/:serviceName"                      -> [services, {serviceName}]
    "/services/:serviceName/revisions/:revisionName"

A path matches a pattern when it has the same number of segments and every
literal segment is equal. Routes are tried in registration order and the
first match wins, so literal routes such as ``/services/_new`` must be added
before the parameter routes they overlap with.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One segment of a route pattern."""

    value: str
    is_param: bool = False

    @property
    def param_name(self) -> str:
        return self.value[1:] if self.is_param else ""


def split_path(path: str) -> list[str]:
    """Split a content path into its non-empty segments."""
    return [part for part in path.strip("/").split("/") if part]


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into segments."""
    segments = []
    for part in split_path(pattern):
        if part.startswith(":"):
            if len(part) == 1:
                raise ValueError(f"Unnamed parameter in pattern {pattern!r}")
            segments.append(PathSegment(part, is_param=True))
        else:
            segments.append(PathSegment(part))
    return tuple(segments)


def pattern_shape(segments: tuple[PathSegment, ...]) -> tuple[str | None, ...]:
    """Return the segments with parameter names erased, so ``:a`` equals ``:b``."""
    return tuple(None if segment.is_param else segment.value for segment in segments)


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A pattern and the handler it dispatches to."""

    name: str
    pattern: str
    handler: Callable[..., Any]
    segments: tuple[PathSegment, ...] = field(default=())

    def match(self, parts: list[str]) -> dict[str, str] | None:
        """Return the bound parameters if ``parts`` matches this pattern."""
        if len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for segment, part in zip(self.segments, parts, strict=True):
            if segment.is_param:
                params[segment.param_name] = part
            elif segment.value != part:
                return None
        return params


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of resolving a path."""

    entry: RouteEntry
    params: dict[str, str]

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def handler(self) -> Callable[..., Any]:
        return self.entry.handler


class Router:
    """Ordered route table with first-registered-wins matching.

    Usage::

        router = Router()
        router.add("/services", list_services, name="service-listing")
        router.add("/services/:serviceName", show_service, name="service-detail")
        router.freeze()
        match = router.resolve("/services/hello")
    """

    __slots__ = ("_entries", "_frozen")

    def __init__(self) -> None:
        self._entries: list[RouteEntry] = []
        self._frozen = False

    @property
    def routes(self) -> list[RouteEntry]:
        """Return the registered routes in registration order."""
        return list(self._entries)

    def add(self, pattern: str, handler: Callable[..., Any], name: str | None = None) -> RouteEntry:
        """Register a route. Must be called before freeze()."""
        if self._frozen:
            raise RuntimeError("Cannot add routes after the router is frozen.")

        segments = parse_pattern(pattern)
        for entry in self._entries:
            if pattern_shape(entry.segments) == pattern_shape(segments):
                raise ValueError(f"Pattern {pattern!r} is already registered as {entry.name!r}")

        entry = RouteEntry(
            name=name or pattern,
            pattern=pattern,
            handler=handler,
            segments=segments,
        )
        self._entries.append(entry)
        return entry

    def freeze(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._frozen = True

    def resolve(self, path: str) -> RouteMatch | None:
        """Find the first route matching ``path``.

        The empty path never matches; callers decide what it means.
        """
        if not path:
            return None

        parts = split_path(path)
        for entry in self._entries:
            params = entry.match(parts)
            if params is not None:
                logger.debug(f"Resolved {path!r} to {entry.name} with {params}")
                return RouteMatch(entry=entry, params=params)

        logger.debug(f"No route matches {path!r}")
        return None
