"""urlshort — redirect request paths to URLs from a static table.

Tables come from a mapping, a YAML document, a JSON document or a
key-value store collection. Unknown paths fall through to a fallback
responder, which may itself be another resolver.

Basic usage::

    from urlshort import App, from_table, from_yaml, text_responder

    hello = text_responder("Hello, world!")
    table = from_table({"/urlshort-godoc": "https://godoc.org/github.com/gophercises/urlshort"}, hello)
    app = App(from_yaml(yaml_bytes, fallback=table))

Store-backed::

    from urlshort import KeyValueStore, from_store

    async with KeyValueStore("links.db") as store:
        resolver = await from_store(store)
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "ConfigurationError",
    "Delegate",
    "FormatError",
    "HTTPError",
    "KeyValueStore",
    "NotFound",
    "PathEntry",
    "PathResolver",
    "Redirect",
    "RedirectTable",
    "Request",
    "Responder",
    "Response",
    "ShortenerConfig",
    "StoreError",
    "UrlshortError",
    "from_json",
    "from_store",
    "from_table",
    "from_yaml",
    "load_responder",
    "not_found",
    "text_responder",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import urlshort`` fast (no pydantic/yaml import) while
    providing a clean top-level API.
    """
    if name == "App":
        from urlshort.app import App

        return App

    if name == "ShortenerConfig":
        from urlshort.config import ShortenerConfig

        return ShortenerConfig

    if name == "Request":
        from urlshort.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from urlshort.http import response as _resp

        return getattr(_resp, name)

    if name in ("Delegate", "PathEntry", "PathResolver", "RedirectTable"):
        from urlshort import resolver as _resolver

        return getattr(_resolver, name)

    if name in ("from_json", "from_store", "from_table", "from_yaml"):
        from urlshort import builders as _builders

        return getattr(_builders, name)

    if name == "load_responder":
        from urlshort.loader import load_responder

        return load_responder

    if name == "KeyValueStore":
        from urlshort.store import KeyValueStore

        return KeyValueStore

    if name == "Responder":
        from urlshort.protocol import Responder

        return Responder

    if name in ("not_found", "text_responder"):
        from urlshort import fallback as _fallback

        return getattr(_fallback, name)

    if name in (
        "ConfigurationError",
        "FormatError",
        "HTTPError",
        "NotFound",
        "StoreError",
        "UrlshortError",
    ):
        from urlshort import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
