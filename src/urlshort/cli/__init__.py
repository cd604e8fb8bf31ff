"""urlshort CLI — load redirect sources and serve them.

Entry point registered as ``urlshort`` in ``pyproject.toml``::

    [project.scripts]
    urlshort = "urlshort.cli:main"
"""

import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="urlshort",
        description="urlshort: redirect request paths to URLs from YAML, JSON or a store file.",
    )
    sources = parser.add_argument_group("redirect sources (at least one)")
    sources.add_argument("--yaml", default=None, help="Path to a YAML redirect file")
    sources.add_argument("--json", default=None, help="Path to a JSON redirect file")
    sources.add_argument("--db", default=None, help="Path to a key-value store file")
    sources.add_argument(
        "--collection",
        default="urlshort",
        help="Store collection holding the redirects (default: urlshort)",
    )

    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument("--port", type=int, default=None, help="Bind port number")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: info)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Load and validate every source, then exit without serving",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``urlshort`` command."""
    args = build_parser().parse_args(argv)

    from urlshort.cli._run import run_server

    run_server(args)
