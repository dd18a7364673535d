"""Tests for git/repository.py and git/runner.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from tagver.core.result import Err, Ok
from tagver.git.repository import Repository
from tagver.git.runner import FakeGitRunner, GitCall, SubprocessGitRunner


def make_completed_process(
    stdout: str = "",
    stderr: str = "",
    returncode: int = 0,
) -> subprocess.CompletedProcess[str]:
    """Create a mock CompletedProcess."""
    return subprocess.CompletedProcess(
        args=["git"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


# =============================================================================
# SubprocessGitRunner - mocked subprocess
# =============================================================================


class TestSubprocessGitRunner:
    @patch("subprocess.run")
    def test_runs_git_in_path(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="v1.0.0\n")

        result = SubprocessGitRunner(tmp_path).run("tag", ["-l"])

        assert result == Ok("v1.0.0\n")
        cmd = mock_run.call_args.args[0]
        assert tuple(cmd) == ("git", "-C", str(tmp_path), "tag", "-l")

    @patch("subprocess.run")
    def test_non_zero_exit(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=128,
            stderr="fatal: No names found, cannot describe anything.\n",
        )

        result = SubprocessGitRunner(tmp_path).run("describe", ["--exact-match"])

        assert isinstance(result, Err)
        assert result.error.command == "describe"
        assert result.error.returncode == 128
        assert result.error.message == "fatal: No names found, cannot describe anything."

    @patch("subprocess.run")
    def test_git_not_installed(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "git")

        result = SubprocessGitRunner(tmp_path).run("tag", ["-l"])

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert result.error.command == "tag"

    @patch("subprocess.run")
    def test_custom_git_and_timeout(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        SubprocessGitRunner(tmp_path, git="/opt/git/bin/git", timeout=3.0).run("tag", ["-l"])

        assert mock_run.call_args.args[0][0] == "/opt/git/bin/git"
        assert mock_run.call_args.kwargs["timeout"] == 3.0


class TestFakeGitRunner:
    def test_full_key_wins_over_subcommand(self) -> None:
        runner = FakeGitRunner({"rev-parse --abbrev-ref HEAD": "main", "rev-parse": "abc123"})

        assert runner.run("rev-parse", ["--abbrev-ref", "HEAD"]) == Ok("main")
        assert runner.run("rev-parse", ["HEAD"]) == Ok("abc123")

    def test_missing_or_none_fails(self) -> None:
        runner = FakeGitRunner({"describe": None})

        assert isinstance(runner.run("describe", ["--exact-match"]), Err)
        assert isinstance(runner.run("cat-file", ["-p", "v1.0.0"]), Err)

    def test_records_calls(self) -> None:
        runner = FakeGitRunner()
        runner.run("tag", ["-l"])
        runner.run("cat-file", ["-p", "v1.0.0"])

        assert runner.calls == [GitCall("tag", ("-l",)), GitCall("cat-file", ("-p", "v1.0.0"))]
        assert runner.called("cat-file")[0].key == "cat-file -p v1.0.0"


# =============================================================================
# Repository
# =============================================================================


class TestRepository:
    def test_list_tags(self) -> None:
        repo = Repository(Path("."), FakeGitRunner({"tag -l": "v1.0.0\n\n  v1.1.0  \n"}))
        assert repo.list_tags() == Ok(["v1.0.0", "v1.1.0"])

    def test_list_tags_failure(self) -> None:
        repo = Repository(Path("."), FakeGitRunner())
        assert isinstance(repo.list_tags(), Err)

    def test_head_sha_strips_newline(self) -> None:
        repo = Repository(Path("."), FakeGitRunner({"rev-parse HEAD": "abc123\n"}))
        assert repo.head_sha() == Ok("abc123")

    def test_head_sha_empty_output(self) -> None:
        repo = Repository(Path("."), FakeGitRunner({"rev-parse HEAD": ""}))

        result = repo.head_sha()

        assert isinstance(result, Err)
        assert result.error.command == "rev-parse"

    def test_describe_exact(self) -> None:
        runner = FakeGitRunner({"describe": "v1.2.3\n"})
        repo = Repository(Path("."), runner)

        assert repo.describe_exact() == Ok("v1.2.3")
        assert runner.calls == [GitCall("describe", ("--exact-match",))]

    def test_describe_exact_no_tag(self) -> None:
        repo = Repository(Path("."), FakeGitRunner({"describe": None}))
        assert isinstance(repo.describe_exact(), Err)

    def test_cat_object(self) -> None:
        runner = FakeGitRunner({"cat-file": "tag v1.2.3\n\ncodename(x)\n"})
        repo = Repository(Path("."), runner)

        assert repo.cat_object("v1.2.3") == Ok("tag v1.2.3\n\ncodename(x)\n")
        assert runner.calls == [GitCall("cat-file", ("-p", "v1.2.3"))]

    def test_remote_url(self) -> None:
        runner = FakeGitRunner({"config --get remote.origin.url": "https://github.com/acme/widget.git\n"})
        assert Repository(Path("."), runner).remote_url() == "https://github.com/acme/widget.git"

    def test_remote_url_missing(self) -> None:
        assert Repository(Path("."), FakeGitRunner()).remote_url() is None

    def test_current_branch(self) -> None:
        runner = FakeGitRunner({"rev-parse --abbrev-ref HEAD": "release/1.2\n"})
        assert Repository(Path("."), runner).current_branch() == "release/1.2"

    def test_current_branch_detached(self) -> None:
        runner = FakeGitRunner({"rev-parse --abbrev-ref HEAD": "HEAD\n"})
        assert Repository(Path("."), runner).current_branch() is None

    @patch("subprocess.run")
    def test_default_runner_spawns_git(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="0123abcd\n")

        result = Repository(tmp_path).head_sha()

        assert result == Ok("0123abcd")
        cmd = mock_run.call_args.args[0]
        assert tuple(cmd)[-2:] == ("rev-parse", "HEAD")
