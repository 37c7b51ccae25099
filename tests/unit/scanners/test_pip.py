"""Unit tests for the pip environment scanner."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from pipmaster.scanners.pip import PipScanner
from pipmaster.utils.shell import CommandResult


class TestPipScanner:
    """Tests for PipScanner."""

    @patch("pipmaster.scanners.pip.command_exists", return_value=True)
    @patch("pipmaster.scanners.pip.run_command")
    def test_list_json(
        self, mock_run: MagicMock, mock_exists: MagicMock, pip_list_json: str
    ) -> None:
        """list_json runs pip list in JSON format for the interpreter."""
        mock_run.return_value = CommandResult(stdout=pip_list_json, stderr="", returncode=0)

        output = PipScanner(python="/usr/bin/python3").list_json()

        assert output == pip_list_json
        args = mock_run.call_args.args[0]
        assert args[:4] == ["/usr/bin/python3", "-m", "pip", "list"]
        assert "--format=json" in args

    @patch("pipmaster.scanners.pip.command_exists", return_value=True)
    @patch("pipmaster.scanners.pip.run_command")
    def test_pip_failure(self, mock_run: MagicMock, mock_exists: MagicMock) -> None:
        """A failing pip raises RuntimeError with its stderr."""
        mock_run.return_value = CommandResult(
            stdout="", stderr="No module named pip", returncode=1
        )

        with pytest.raises(RuntimeError, match="No module named pip"):
            PipScanner().list_json()

    @patch("pipmaster.scanners.pip.command_exists", return_value=True)
    @patch("pipmaster.scanners.pip.run_command")
    def test_pip_timeout(self, mock_run: MagicMock, mock_exists: MagicMock) -> None:
        """A hung pip raises RuntimeError."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="pip", timeout=120)

        with pytest.raises(RuntimeError, match="timed out"):
            PipScanner().list_json()

    @patch("pipmaster.scanners.pip.command_exists", return_value=False)
    def test_missing_interpreter(self, mock_exists: MagicMock) -> None:
        """An unknown interpreter is reported before running anything."""
        scanner = PipScanner(python="/nope/python")

        assert not scanner.is_available()
        with pytest.raises(RuntimeError, match="not found"):
            scanner.list_json()
