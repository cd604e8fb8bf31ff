"""Path resolution — the lookup-and-redirect dispatch rule.

A ``PathResolver`` holds a read-only ``RedirectTable`` plus a shared
fallback responder. ``resolve()`` is pure: a table hit with a non-empty
URL yields ``Redirect(url)``, anything else yields ``Delegate(fallback)``.

The table is built once, before serving, and never mutated afterwards,
so any number of concurrent requests can read it without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, field_validator

from urlshort._internal.invoke import invoke
from urlshort.http.request import Request
from urlshort.http.response import Redirect, Response
from urlshort.protocol import Responder


class PathEntry(BaseModel):
    """One ``{path, url}`` record.

    Strict: unknown keys and non-string values are validation errors
    rather than being coerced or ignored. A missing or null field is an
    empty string, so an entry without a URL falls through to the fallback.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    path: str = ""
    url: str = ""

    @field_validator("path", "url", mode="before")
    @classmethod
    def null_is_empty(cls, v: object) -> object:
        """Read a null field as an empty string."""
        if v is None:
            return ""
        return v


class JSONPathEntry(PathEntry):
    """A ``{path, url}`` record from a JSON document.

    Same as ``PathEntry`` except unknown keys are ignored, matching how
    JSON redirect files are usually produced by other tools.
    """

    model_config = ConfigDict(extra="ignore")


class RedirectTable(Mapping[str, str]):
    """Read-only ``path -> url`` mapping.

    Never holds an empty URL: those entries are dropped while folding,
    since lookup treats an empty URL as absent anyway.
    """

    __slots__ = ("_urls",)

    def __init__(self, urls: Mapping[str, str] | None = None) -> None:
        object.__setattr__(
            self, "_urls", {path: url for path, url in (urls or {}).items() if url}
        )

    def __setattr__(self, name: str, value: object) -> None:
        msg = "RedirectTable is read-only"
        raise AttributeError(msg)

    def __getitem__(self, path: str) -> str:
        return self._urls[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    def __repr__(self) -> str:
        return f"RedirectTable({self._urls!r})"

    @classmethod
    def from_entries(cls, entries: Iterable[PathEntry]) -> RedirectTable:
        """Fold *entries* into a table. Later duplicates overwrite earlier ones."""
        return cls(fold_entries(entries))


def fold_entries(entries: Iterable[PathEntry]) -> dict[str, str]:
    """Fold entries into a plain dict, last write wins, empty URLs skipped.

    An empty URL still removes an earlier entry for the same path: the
    last record for a path decides what that path does.
    """
    urls: dict[str, str] = {}
    for entry in entries:
        if entry.url:
            urls[entry.path] = entry.url
        else:
            urls.pop(entry.path, None)
    return urls


@dataclass(frozen=True, slots=True)
class Delegate:
    """Outcome for a miss: hand the unmodified request to *fallback*."""

    fallback: Responder


type Outcome = Redirect | Delegate


@dataclass(frozen=True, slots=True)
class PathResolver:
    """Redirects known paths, delegates everything else.

    A resolver is itself a responder, so it can be the fallback of
    another resolver. The fallback is shared, never closed or mutated.
    """

    table: RedirectTable
    fallback: Responder

    def resolve(self, path: str) -> Outcome:
        """Look up *path* verbatim. Never raises."""
        url = self.table.get(path)
        if url:
            return Redirect(url)
        return Delegate(self.fallback)

    async def __call__(self, request: Request) -> Response:
        outcome = self.resolve(request.path)
        if isinstance(outcome, Redirect):
            return outcome.to_response()
        return await invoke(outcome.fallback, request)

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, path: object) -> bool:
        return path in self.table
