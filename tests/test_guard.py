"""Tests for sfra_release.guard."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, call, patch

import pytest

from sfra_release.guard import changed_files, check_for_changes
from sfra_release.prompt import NonInteractivePrompter

STATUS = " M package.json\0?? cartridges/lib_productlist/new file.js\0"


@patch("sfra_release.guard.git")
def test_changed_files_parses_porcelain(mock_git: MagicMock) -> None:
    mock_git.return_value = STATUS

    files = changed_files()

    assert [f.path for f in files] == [
        "package.json",
        "cartridges/lib_productlist/new file.js",
    ]
    mock_git.assert_called_once_with("status", "--porcelain", "-z", strip=False)


class TestCheckForChanges:
    """Tests for check_for_changes()."""

    @patch("sfra_release.guard.git")
    def test_clean_tree_is_noop(self, mock_git: MagicMock) -> None:
        """A clean tree neither prompts nor commits."""
        mock_git.return_value = ""
        prompter = MagicMock()

        check_for_changes(prompter)

        prompter.confirm.assert_not_called()
        assert mock_git.call_count == 1

    @patch("sfra_release.guard.git")
    def test_interactive_accept_commits_each_file(self, mock_git: MagicMock) -> None:
        """Accepting stages every file individually and commits with the answer."""
        mock_git.side_effect = [STATUS, "", "", ""]
        prompter = MagicMock()
        prompter.confirm.return_value = True
        prompter.ask.return_value = "wip: local fixes"

        check_for_changes(prompter)

        assert mock_git.call_args_list[1:] == [
            call("add", "--", "package.json"),
            call("add", "--", "cartridges/lib_productlist/new file.js"),
            call("commit", "-m", "wip: local fixes"),
        ]

    @patch("sfra_release.guard.git")
    def test_interactive_decline_exits_zero(
        self, mock_git: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Declining aborts the whole run cleanly."""
        mock_git.return_value = STATUS
        prompter = MagicMock()
        prompter.confirm.return_value = False

        with pytest.raises(SystemExit) as excinfo:
            check_for_changes(prompter)

        assert excinfo.value.code == 0
        assert "Please clean up your working tree" in capsys.readouterr().out
        assert mock_git.call_count == 1
        prompter.ask.assert_not_called()

    @patch("sfra_release.guard.git")
    def test_non_interactive_uses_fallback_message(self, mock_git: MagicMock) -> None:
        """Non-interactive mode commits without asking."""
        mock_git.side_effect = [STATUS, "", "", ""]
        prompter = MagicMock()

        check_for_changes(
            prompter, interactive=False, fallback_message="chore: release v2.0.0"
        )

        prompter.confirm.assert_not_called()
        assert mock_git.call_args_list[-1] == call(
            "commit", "-m", "chore: release v2.0.0"
        )

    @patch("sfra_release.guard.git")
    def test_non_interactive_prompter_answers(self, mock_git: MagicMock) -> None:
        """--yes runs answer the prompt with the configured message."""
        mock_git.side_effect = [STATUS, "", "", ""]

        check_for_changes(NonInteractivePrompter(message="sync local edits"))

        assert mock_git.call_args_list[-1] == call("commit", "-m", "sync local edits")


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
class TestCheckForChangesInRepository:
    """check_for_changes() against a real git repository."""

    @pytest.fixture
    def repo(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
        for var in ("AUTHOR", "COMMITTER"):
            monkeypatch.setenv(f"GIT_{var}_NAME", "Release Bot")
            monkeypatch.setenv(f"GIT_{var}_EMAIL", "release-bot@example.com")
        subprocess.run(["git", "init", "-q"], cwd=tmp_path, check=True)
        subprocess.run(
            ["git", "config", "commit.gpgsign", "false"], cwd=tmp_path, check=True
        )
        (tmp_path / "package.json").write_text('{"version": "1.2.0"}\n')
        subprocess.run(["git", "add", "package.json"], cwd=tmp_path, check=True)
        subprocess.run(["git", "commit", "-q", "-m", "init"], cwd=tmp_path, check=True)
        monkeypatch.chdir(tmp_path)
        return tmp_path

    def _log(self, repo: Path) -> str:
        return subprocess.run(
            ["git", "log", "-1", "--name-only", "--format=%s"],
            cwd=repo,
            capture_output=True,
            text=True,
            check=True,
        ).stdout

    def test_commits_paths_git_would_quote(self, repo: Path) -> None:
        """Spaces and non-ASCII names are staged and committed."""
        (repo / "new file.js").write_text("// new\n")
        (repo / "résumé.properties").write_text("a=b\n")
        (repo / "package.json").write_text('{"version": "2.0.0"}\n')

        check_for_changes(
            MagicMock(), interactive=False, fallback_message="chore: release v2.0.0"
        )

        assert changed_files() == []
        log = self._log(repo)
        assert log.startswith("chore: release v2.0.0")

    def test_commits_rename_destination(self, repo: Path) -> None:
        subprocess.run(["git", "mv", "package.json", "manifest.json"], check=True)

        check_for_changes(MagicMock(), interactive=False, fallback_message="rename")

        assert changed_files() == []
        assert "manifest.json" in self._log(repo)
