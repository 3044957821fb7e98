"""Tests for building a Config from manifest data and files."""

import json
import logging
import os

import pytest

from manifest.loader import load_config, new_config_from_data, new_config_from_file
from manifest.models import Config
from versioning.models import Version


MANIFEST = {
    "name": "acme/service",
    "description": "Acme service",
    "version": "v1.4.0-beta",
    "type": "project",
    "require": {"php": ">=8.1", "acme/core": "^2.0"},
    "require-dev": {"phpunit/phpunit": "^10"},
    "repositories": [
        {"type": "path", "url": "../core"},
        {"type": "vcs", "url": "https://github.com/acme/legacy"},
    ],
    "autoload": {"psr-4": {"Acme\\Service\\": "src/"}, "files": ["src/helpers.php"]},
    "autoload-dev": {"psr-4": {"Acme\\Service\\Tests\\": "tests/"}},
    "extra": {"ignored": True},
}


class TestNewConfigFromData:
    """Decoding manifest contents."""

    def test_fields_mapped(self, tmp_path):
        path = tmp_path / "service" / "composer.json"
        config, errors = new_config_from_data(json.dumps(MANIFEST).encode(), str(path))

        assert errors is None
        assert config.name == "acme/service"
        assert config.description == "Acme service"
        assert config.raw_version == "v1.4.0-beta"
        assert config.version == Version(1, 4, 0, is_beta=True)
        assert config.type == "project"
        assert config.require == {"php": ">=8.1", "acme/core": "^2.0"}
        assert config.require_dev == {"phpunit/phpunit": "^10"}
        assert [(r.type, r.url, r.resolved) for r in config.repositories] == [
            ("path", "../core", False),
            ("vcs", "https://github.com/acme/legacy", False),
        ]
        assert config.autoload.psr4 == {"Acme\\Service\\": "src/"}
        assert config.autoload.files == ["src/helpers.php"]
        assert config.autoload_dev.psr4 == {"Acme\\Service\\Tests\\": "tests/"}
        assert config.path == str(path)
        assert config.root_dir == str(tmp_path / "service")

    def test_relative_path_made_absolute(self):
        config, _ = new_config_from_data(b'{"version": "1.0.0"}', "composer.json")
        assert config.path == os.path.abspath("composer.json")
        assert config.root_dir == os.getcwd()

    def test_str_data_accepted(self, tmp_path):
        config, errors = new_config_from_data('{"name": "a/b", "version": "1.0.0"}', str(tmp_path / "composer.json"))
        assert errors is None
        assert config.name == "a/b"

    def test_missing_sections_default_empty(self, tmp_path):
        config, _ = new_config_from_data(b'{"version": "1.0.0"}', str(tmp_path / "composer.json"))
        assert config.require == {}
        assert config.repositories == []
        assert config.autoload.psr4 == {}
        assert config.autoload_dev.files == []

    def test_bad_version_is_not_critical(self, tmp_path):
        data = dict(MANIFEST, version="1.0.0-alpha3")
        config, errors = new_config_from_data(json.dumps(data), str(tmp_path / "composer.json"))

        assert config.version is None
        assert config.name == "acme/service"
        assert config.path == str(tmp_path / "composer.json")
        assert len(errors) == 1
        assert errors.errors[0].critical is False
        assert errors.errors[0].msg == "unknown version suffix 'alpha3'"
        assert errors.config is config
        assert str(errors) == (
            f"config {tmp_path / 'composer.json'}: unknown version suffix 'alpha3'\n"
        )

    @pytest.mark.parametrize("component", ["1" * 5000, "99999999999999999999"])
    def test_oversized_version_component_is_not_critical(self, tmp_path, component):
        data = dict(MANIFEST, version=f"{component}.0.0")
        config, errors = new_config_from_data(json.dumps(data), str(tmp_path / "composer.json"))

        assert config.version is None
        assert config.name == "acme/service"
        assert len(errors) == 1
        assert errors.errors[0].critical is False
        assert errors.errors[0].msg.startswith("part 1 (")

    def test_missing_version_reported(self, tmp_path):
        config, errors = new_config_from_data(b'{"name": "a/b"}', str(tmp_path / "composer.json"))
        assert config.version is None
        assert [e.msg for e in errors] == ["version is empty"]
        assert not errors.has_critical()

    @pytest.mark.parametrize(
        "data",
        [
            b"{",
            b"",
            b"not json",
            b'{"name": "acme/app", "version": "1.0.0",}',
            b"[1, 2, 3]",
            b"null",
            b'{"name": 42, "version": "1.0.0"}',
            b'{"require": {"php": 8}}',
            b'{"repositories": {"type": "path"}}',
            b'{"autoload": {"psr-4": ["src"]}}',
            b"\xff\xfe",
        ],
    )
    def test_decode_failure_is_critical(self, tmp_path, data):
        config, errors = new_config_from_data(data, str(tmp_path / "composer.json"))

        assert config == Config()
        assert len(errors) == 1
        assert errors.errors[0].critical is True
        assert errors.has_critical()
        assert str(errors).startswith(f"config {tmp_path / 'composer.json'}: <critical> ")

    def test_decode_failure_logged(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="manifest.loader"):
            new_config_from_data(b"{", str(tmp_path / "composer.json"))
        assert "Failed to decode manifest" in caplog.text


class TestNewConfigFromFile:
    """Reading manifests from disk."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "composer.json"
        path.write_text(json.dumps(MANIFEST), encoding="utf-8")

        config, errors = new_config_from_file(path)

        assert errors is None
        assert config.name == "acme/service"
        assert config.path == str(path)

    def test_missing_file_is_critical(self, tmp_path):
        config, errors = new_config_from_file(str(tmp_path / "nope.json"))
        assert config == Config()
        assert errors.has_critical()
        assert len(errors) == 1


class TestLoadConfig:
    """load_config dispatch."""

    def test_path(self, tmp_path):
        path = tmp_path / "composer.json"
        path.write_text('{"name": "a/b", "version": "2.0.0"}', encoding="utf-8")
        config, errors = load_config(str(path))
        assert errors is None
        assert config.version == Version(2, 0, 0)

    def test_bytes_with_path(self, tmp_path):
        config, errors = load_config(b'{"version": "2.0.0"}', str(tmp_path / "composer.json"))
        assert errors is None
        assert config.root_dir == str(tmp_path)

    def test_bytes_default_path(self):
        config, _ = load_config(b'{"version": "2.0.0"}')
        assert config.path == os.path.abspath("composer.json")
