"""Tests for InstallConfig parsing and descriptor loading."""

import json
from pathlib import Path

import pytest

from npm_handler.config import (
    DEFAULT_NPM_PATH,
    DESCRIPTOR_PATH_ENV_VAR,
    ConfigError,
    InstallConfig,
    load_extra,
    normalise_relative_path,
)


def test_defaults_when_section_missing() -> None:
    config = InstallConfig.from_extra({})

    assert config.exclude_packages == ()
    assert config.npm_path == DEFAULT_NPM_PATH == "npm"
    assert config.dev_mode is True
    assert config.verbose is False


def test_reads_section_and_host_flags() -> None:
    extra = {"npm-handler": {"exclude-packages": ["web", "./tools/"], "npm-path": "bin/npm"}}

    config = InstallConfig.from_extra(extra, dev_mode=False, verbose=True)

    assert config.exclude_packages == ("web", "tools")
    assert config.npm_path == "bin/npm"
    assert config.dev_mode is False
    assert config.verbose is True


@pytest.mark.parametrize(
    "extra",
    [
        None,
        {"npm-handler": None},
        {"npm-handler": "npm"},
        {"npm-handler": ["web"]},
        {"npm-handler": {"exclude-packages": "web", "npm-path": 42}},
        {"npm-handler": {"exclude-packages": {"web": True}, "npm-path": "   "}},
    ],
)
def test_malformed_entries_fall_back_to_defaults(extra: object) -> None:
    config = InstallConfig.from_extra(extra)  # type: ignore[arg-type]

    assert config.exclude_packages == ()
    assert config.npm_path == DEFAULT_NPM_PATH


def test_non_string_excludes_are_dropped() -> None:
    extra = {"npm-handler": {"exclude-packages": ["web", 3, None, "web/", "."]}}

    assert InstallConfig.from_extra(extra).exclude_packages == ("web",)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("web", "web"),
        ("./web/", "web"),
        ("web\\admin", "web/admin"),
        ("a//b/./c", "a/b/c"),
        (".", ""),
    ],
)
def test_normalise_relative_path(value: str, expected: str) -> None:
    assert normalise_relative_path(value) == expected


def test_load_extra_from_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\n\n'
        '[tool.npm-handler]\nexclude-packages = ["web"]\nnpm-path = "/usr/bin/npm"\n',
        encoding="utf-8",
    )

    extra = load_extra(tmp_path)

    assert extra["npm-handler"] == {"exclude-packages": ["web"], "npm-path": "/usr/bin/npm"}


def test_load_extra_from_json_extra_object(tmp_path: Path) -> None:
    descriptor = tmp_path / "composer.json"
    descriptor.write_text(
        json.dumps({"name": "demo", "extra": {"npm-handler": {"npm-path": "npm"}}}),
        encoding="utf-8",
    )

    assert load_extra(tmp_path, "composer.json") == {"npm-handler": {"npm-path": "npm"}}


def test_load_extra_from_yaml_document(tmp_path: Path) -> None:
    (tmp_path / "project.yaml").write_text(
        "npm-handler:\n  exclude-packages:\n    - web\n", encoding="utf-8"
    )

    extra = load_extra(tmp_path, "project.yaml")

    assert extra == {"npm-handler": {"exclude-packages": ["web"]}}


def test_load_extra_uses_environment_variable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "alt.json").write_text(json.dumps({"npm-handler": {}}), encoding="utf-8")
    monkeypatch.setenv(DESCRIPTOR_PATH_ENV_VAR, "alt.json")

    assert load_extra(tmp_path) == {"npm-handler": {}}


def test_missing_default_descriptor_means_no_extra(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DESCRIPTOR_PATH_ENV_VAR, raising=False)

    assert load_extra(tmp_path) == {}


def test_missing_explicit_descriptor_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_extra(tmp_path, "missing.json")


@pytest.mark.parametrize(
    ("name", "content", "match"),
    [
        ("pyproject.toml", "[tool\n", "Invalid TOML"),
        ("broken.json", "{", "Invalid JSON"),
        ("broken.yaml", "a: [b", "Invalid YAML"),
        ("list.json", "[1, 2]", "must contain a mapping"),
    ],
)
def test_broken_descriptor_raises(tmp_path: Path, name: str, content: str, match: str) -> None:
    (tmp_path / name).write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=match):
        load_extra(tmp_path, name)


def test_absolute_exclusions_are_dropped() -> None:
    extra = {"npm-handler": {"exclude-packages": ["/abs/web", "web"]}}

    assert InstallConfig.from_extra(extra).exclude_packages == ("web",)
    assert normalise_relative_path("/abs/web") == ""
