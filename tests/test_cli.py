"""Tests for the urlshort CLI: flag parsing and startup validation."""

import pytest

from urlshort.cli import build_parser, main
from urlshort.cli._run import config_from_args


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.yaml is None
        assert args.json is None
        assert args.db is None
        assert args.collection == "urlshort"
        assert args.log_level == "info"
        assert args.check is False

    def test_config_from_args(self) -> None:
        args = build_parser().parse_args(
            ["--yaml", "a.yaml", "--db", "x.db", "--port", "9000", "--collection", "links"]
        )
        config = config_from_args(args)
        assert config.yaml_path == "a.yaml"
        assert config.json_path is None
        assert config.db_path == "x.db"
        assert config.port == 9000
        assert config.host == "127.0.0.1"
        assert config.collection == "links"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--log-level", "loud"])


class TestRun:
    def test_check_with_valid_sources(self, tmp_path, make_store) -> None:
        yaml_path = tmp_path / "paths.yaml"
        yaml_path.write_text("- path: /a\n  url: https://a.example\n")
        db_path = make_store(urlshort={b"/b": b"https://b.example"})

        main(["--yaml", str(yaml_path), "--db", str(db_path), "--check"])

    def test_no_source_exits_1(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--check"])
        assert exc_info.value.code == 1

    def test_invalid_yaml_exits_1(self, tmp_path) -> None:
        yaml_path = tmp_path / "paths.yaml"
        yaml_path.write_text("foo")
        with pytest.raises(SystemExit) as exc_info:
            main(["--yaml", str(yaml_path), "--check"])
        assert exc_info.value.code == 1

    def test_missing_collection_exits_1(self, make_store) -> None:
        db_path = make_store(other={})
        with pytest.raises(SystemExit) as exc_info:
            main(["--db", str(db_path), "--check"])
        assert exc_info.value.code == 1

    def test_serves_after_loading(self, tmp_path, monkeypatch) -> None:
        yaml_path = tmp_path / "paths.yaml"
        yaml_path.write_text("- path: /a\n  url: https://a.example\n")
        served: list[tuple[object, str, int]] = []

        def fake_run_dev_server(app, host, port) -> None:
            served.append((app, host, port))

        monkeypatch.setattr("urlshort.server.dev.run_dev_server", fake_run_dev_server)
        main(["--yaml", str(yaml_path), "--port", "9001"])

        assert len(served) == 1
        app, host, port = served[0]
        assert (host, port) == ("127.0.0.1", 9001)
        assert app.started is True
