from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tagver import __version__
from tagver.cli.app import app
from tagver.core.errors import ErrorCode
from tagver.git.repository import Repository
from tagver.git.runner import FakeGitRunner

SHA = "4c1e8b2d9f0a7e6b5c4d3e2f1a0b9c8d7e6f5a4b"

runner = CliRunner()


def _git(**overrides: str | None) -> FakeGitRunner:
    responses: dict[str, str | None] = {
        "rev-parse HEAD": SHA,
        "rev-parse --abbrev-ref HEAD": "main",
        "config --get remote.origin.url": "git@github.com:acme/widget.git",
        "describe": None,
        "cat-file": None,
        "tag -l": "v1.0.0\nv1.1.0-rc1\nv1.1.0",
    }
    responses.update(overrides)
    return FakeGitRunner(responses)


def _patch_git(monkeypatch: pytest.MonkeyPatch, git: FakeGitRunner) -> None:
    import tagver.cli.commands.show as show_cmd
    from tagver.versioning.current import resolve_version_info

    def fake_resolve(*args: object, **kwargs: object) -> object:
        return resolve_version_info(*args, runner=git, **kwargs)  # type: ignore[arg-type]

    monkeypatch.setattr(show_cmd, "resolve_version_info", fake_resolve)


def _package(tmp_path: Path, **extra: str) -> Path:
    path = tmp_path / "package.json"
    path.write_text(json.dumps({"name": "widget", "version": "1.2.0", **extra}), encoding="utf-8")
    return path


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_show_snapshot_json(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _package(tmp_path)
    _patch_git(monkeypatch, _git())
    monkeypatch.delenv("TRAVIS_BUILD_NUMBER", raising=False)

    result = runner.invoke(app, ["show", "--path", str(tmp_path), "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["currentVersion"]["version"] == "1.2.0-local"
    assert data["currentVersion"]["isSnapshot"] is True
    assert data["currentVersion"]["codeName"] == "snapshot"
    assert data["previousVersions"] == ["1.0.0", "1.1.0-rc1", "1.1.0"]
    assert data["gitRepoInfo"]["repo"] == "widget"


def test_show_build_number_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _package(tmp_path)
    _patch_git(monkeypatch, _git())
    monkeypatch.setenv("CI_PIPELINE_IID", "10")

    result = runner.invoke(
        app,
        ["show", "--path", str(tmp_path), "--json", "--build-number-env", "CI_PIPELINE_IID"],
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["currentVersion"]["prerelease"] == ["build", "10"]


def test_show_bad_build_number_falls_back_to_local(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _package(tmp_path)
    _patch_git(monkeypatch, _git())
    monkeypatch.setenv("TRAVIS_BUILD_NUMBER", "007")

    result = runner.invoke(app, ["show", "--path", str(tmp_path), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["currentVersion"]["version"] == "1.2.0-local"


def test_show_release_text(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _package(tmp_path)
    _patch_git(monkeypatch, _git(describe="v1.2.0", **{"cat-file": "v1.2.0 codename(koala)\n"}))

    result = runner.invoke(app, ["show", "--path", str(tmp_path)])

    assert result.exit_code == 0
    assert "1.2.0" in result.stdout
    assert "koala" in result.stdout
    assert "release" in result.stdout


def test_show_branch_mismatch(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _package(tmp_path, branchVersion="^2.0.0")
    _patch_git(monkeypatch, _git(describe="v1.2.0"))

    result = runner.invoke(app, ["show", "--path", str(tmp_path), "--json"])

    assert result.exit_code == int(ErrorCode.VERSION_ERROR)


def test_show_no_commit(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _package(tmp_path)
    _patch_git(monkeypatch, _git(**{"rev-parse HEAD": None}))

    result = runner.invoke(app, ["show", "--path", str(tmp_path)])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_show_without_package_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["show", "--path", str(tmp_path)])
    assert result.exit_code == int(ErrorCode.USER_ERROR)


def test_show_unreadable_package_file(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["show", "--path", str(tmp_path)])

    assert result.exit_code == int(ErrorCode.USER_ERROR)


def test_show_explicit_package_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    descriptor = tmp_path / "meta" / "tagver.toml"
    descriptor.parent.mkdir()
    descriptor.write_text('[package]\nname = "docs"\nversion = "4.0.0"\n', encoding="utf-8")
    _patch_git(monkeypatch, _git())

    result = runner.invoke(
        app, ["show", "--path", str(tmp_path), "--package", str(descriptor), "--json"]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["currentPackage"]["name"] == "docs"


def test_previous(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import tagver.cli.commands.previous as previous_cmd

    git = _git(**{"tag -l": "v0.1.1\nv0.1.1-rc1\nnightly"})
    monkeypatch.setattr(
        previous_cmd,
        "Repository",
        lambda root, timeout: Repository(root, git, timeout=timeout),
    )

    result = runner.invoke(app, ["previous", "--path", str(tmp_path)])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["0.1.1-rc1", "0.1.1"]
