"""Tests for urlshort.loader: layering sources from a ShortenerConfig."""

import logging

import pytest

from urlshort.config import ShortenerConfig
from urlshort.errors import ConfigurationError, FormatError, StoreError
from urlshort.http.request import Request
from urlshort.loader import load_responder, read_source
from urlshort.resolver import PathResolver


async def _get(responder, path: str):
    return await responder(Request(method="GET", path=path))


class TestLoadResponder:
    @pytest.mark.anyio
    async def test_no_source(self) -> None:
        with pytest.raises(ConfigurationError, match="Must provide one source"):
            await load_responder(ShortenerConfig())

    @pytest.mark.anyio
    async def test_redirects_only(self) -> None:
        responder = await load_responder(ShortenerConfig(redirects={"/a": "https://a.example"}))
        assert isinstance(responder, PathResolver)
        assert (await _get(responder, "/a")).location == "https://a.example"
        assert (await _get(responder, "/b")).status == 404

    @pytest.mark.anyio
    async def test_outermost_source_wins(self, tmp_path, make_store) -> None:
        yaml_path = tmp_path / "paths.yaml"
        yaml_path.write_text(
            "- path: /shared\n  url: https://yaml.example\n"
            "- path: /yaml-only\n  url: https://yaml.example/only\n"
        )
        json_path = tmp_path / "paths.json"
        json_path.write_text('[{"path": "/shared", "url": "https://json.example"}]')
        db_path = make_store(urlshort={b"/db-only": b"https://db.example"})

        config = ShortenerConfig(
            redirects={"/shared": "https://table.example", "/table-only": "https://table.example"},
            yaml_path=yaml_path,
            json_path=json_path,
            db_path=db_path,
        )
        responder = await load_responder(config)

        assert (await _get(responder, "/shared")).location == "https://json.example"
        assert (await _get(responder, "/yaml-only")).location == "https://yaml.example/only"
        assert (await _get(responder, "/table-only")).location == "https://table.example"
        assert (await _get(responder, "/db-only")).location == "https://db.example"
        assert (await _get(responder, "/none")).status == 404

    @pytest.mark.anyio
    async def test_custom_fallback(self, hello) -> None:
        responder = await load_responder(ShortenerConfig(redirects={"/a": "u"}), hello)
        assert (await _get(responder, "/b")).text == "Hello, world!"

    @pytest.mark.anyio
    async def test_custom_collection(self, make_store) -> None:
        config = ShortenerConfig(
            db_path=make_store(links={b"/a": b"https://a.example"}),
            collection="links",
        )
        responder = await load_responder(config)
        assert (await _get(responder, "/a")).location == "https://a.example"

    @pytest.mark.anyio
    async def test_missing_yaml_file(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="could not read"):
            await load_responder(ShortenerConfig(yaml_path=tmp_path / "nope.yaml"))

    @pytest.mark.anyio
    async def test_bad_json(self, tmp_path) -> None:
        json_path = tmp_path / "paths.json"
        json_path.write_text("foo")
        with pytest.raises(FormatError):
            await load_responder(ShortenerConfig(json_path=json_path))

    @pytest.mark.anyio
    async def test_missing_store(self, tmp_path) -> None:
        with pytest.raises(StoreError):
            await load_responder(ShortenerConfig(db_path=tmp_path / "nope.db"))

    @pytest.mark.anyio
    async def test_store_without_collection(self, make_store) -> None:
        with pytest.raises(FormatError):
            await load_responder(ShortenerConfig(db_path=make_store(other={})))

    @pytest.mark.anyio
    async def test_logs_counts(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="urlshort.loader"):
            await load_responder(ShortenerConfig(redirects={"/a": "u", "/b": "v"}))
        assert "loaded 2 redirects from config" in caplog.text


class TestReadSource:
    @pytest.mark.anyio
    async def test_reads_bytes(self, tmp_path) -> None:
        path = tmp_path / "doc.yaml"
        path.write_bytes(b"- path: /a\n  url: u\n")
        assert await read_source(path) == b"- path: /a\n  url: u\n"

    @pytest.mark.anyio
    async def test_directory_is_configuration_error(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError):
            await read_source(tmp_path)
