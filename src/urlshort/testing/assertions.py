"""Assertion helpers for redirect responses.

Usage::

    response = await client.get("/urlshort")
    assert_redirect(response, "https://github.com/gophercises/urlshort")
"""

from urlshort.http.response import Response


def assert_redirect(response: Response, url: str, *, status: int = 302) -> None:
    """Assert *response* redirects to *url* with *status*."""
    assert response.status == status, (
        f"Expected redirect status {status}, got {response.status}"
    )
    location = response.location
    assert location == url, f"Expected Location {url!r}, got {location!r}"


def assert_not_redirect(response: Response) -> None:
    """Assert *response* is not a redirect (the request fell through)."""
    location = response.location
    assert location is None, (
        f"Expected no redirect, got {response.status} with Location {location!r}"
    )
