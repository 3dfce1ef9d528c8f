import subprocess
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock, patch

from vc_changelog.exceptions import GitError
from vc_changelog.vcs.git_client import GitClient


class DummyProc(SimpleNamespace):
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class TestGitClient(unittest.TestCase):
    def test_find_repo_root_walks_upwards(self) -> None:
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".git").mkdir()
            nested = root / "a" / "b"
            nested.mkdir(parents=True)
            self.assertEqual(GitClient.find_repo_root(nested), root.resolve())

    def test_is_git_available(self) -> None:
        with patch("shutil.which", return_value=None):
            self.assertFalse(GitClient.is_git_available())
        with patch("shutil.which", return_value="/usr/bin/git"):
            self.assertTrue(GitClient.is_git_available())

    @patch("subprocess.run")
    def test_run_raises_on_failure(self, mock_run) -> None:
        mock_run.return_value = Mock(returncode=128, stdout="", stderr="fatal: bad revision\n")
        client = GitClient(Path("/repo"))
        with self.assertRaises(GitError) as ctx:
            client._run(["rev-list", "--count", "a..b"])
        self.assertIn("bad revision", str(ctx.exception))
        self.assertEqual(mock_run.call_args[0][0][0], "git")
        self.assertEqual(mock_run.call_args[1]["cwd"], Path("/repo"))

    @patch("subprocess.run")
    def test_run_missing_executable(self, mock_run) -> None:
        mock_run.side_effect = FileNotFoundError("git")
        with self.assertRaises(GitError):
            GitClient(Path("/repo"))._run(["status"])

    def test_ref_exists_uses_return_code(self) -> None:
        def fake_run(self, args, check=True):
            self_args.append((args, check))
            return DummyProc(returncode=0 if args[-1] == "v1^{commit}" else 1)

        self_args = []
        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            client = GitClient(Path("/repo"))
            self.assertTrue(client.ref_exists("v1"))
            self.assertFalse(client.ref_exists("missing"))
        self.assertEqual(self_args[0], (["rev-parse", "--verify", "--quiet", "v1^{commit}"], False))

    def test_list_tags(self) -> None:
        calls = []

        def fake_run(self, args, check=True):
            calls.append(args)
            return DummyProc(stdout="deploy-3\n\ndeploy-2\n")

        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            tags = GitClient(Path("/repo")).list_tags("deploy-", merged_into="HEAD")
        self.assertEqual(tags, ["deploy-3", "deploy-2"])
        self.assertEqual(calls[0], ["tag", "--list", "deploy-*", "--sort=-creatordate", "--merged", "HEAD"])

    def test_count_commits(self) -> None:
        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.return_value = DummyProc(stdout="12\n")
            self.assertEqual(GitClient(Path("/repo")).count_commits("a", "b"), 12)
            mock_run.return_value = DummyProc(stdout="oops")
            with self.assertRaises(GitError):
                GitClient(Path("/repo")).count_commits("a", "b")

    def test_get_log_subjects_oldest_first(self) -> None:
        calls = []

        def fake_run(self, args, check=True):
            calls.append(args)
            return DummyProc(stdout="ABC-1: BE / x / add y\n\nfix z\n")

        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            subjects = GitClient(Path("/repo")).get_log_subjects("deploy-1", "HEAD")
        self.assertEqual(subjects, ["ABC-1: BE / x / add y", "fix z"])
        self.assertEqual(calls[0], ["log", "--reverse", "--format=%s", "deploy-1..HEAD"])

    def test_get_tag_date_falls_back_to_creator_date(self) -> None:
        outputs = {"taggerdate": "", "creatordate": "2024-02-03\n"}

        def fake_run(self, args, check=True):
            field = args[1].split("(")[1].split(":")[0]
            return DummyProc(stdout=outputs[field])

        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            self.assertEqual(GitClient(Path("/repo")).get_tag_date("deploy-1"), "2024-02-03")

    def test_get_tag_date_unknown(self) -> None:
        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.return_value = DummyProc(stdout="")
            self.assertIsNone(GitClient(Path("/repo")).get_tag_date("deploy-1"))


def test_git_client_against_real_repository(tmp_path):
    import shutil

    import pytest

    if shutil.which("git") is None:
        pytest.skip("git not installed")

    def git(*args):
        subprocess.run(["git", *args], cwd=tmp_path, check=True, capture_output=True)

    git("init", "-q")
    git("config", "user.email", "dev@example.com")
    git("config", "user.name", "Dev")
    git("commit", "-q", "--allow-empty", "-m", "initial")
    git("tag", "deploy-1")
    git("commit", "-q", "--allow-empty", "-m", "ABC-1: BE / retry / add retry")
    git("commit", "-q", "--allow-empty", "-m", "fix typo")

    client = GitClient(tmp_path)
    assert client.ref_exists("deploy-1")
    assert not client.ref_exists("deploy-9")
    assert client.is_tag("deploy-1")
    assert client.list_tags("deploy-", merged_into="HEAD") == ["deploy-1"]
    assert client.count_commits("deploy-1", "HEAD") == 2
    assert client.get_log_subjects("deploy-1", "HEAD") == ["ABC-1: BE / retry / add retry", "fix typo"]
    assert client.get_tag_date("deploy-1")


if __name__ == "__main__":
    unittest.main()
