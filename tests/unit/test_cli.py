"""Unit tests for the service-base command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from service_base.cli import build_parser, main


class TestParser:
    def test_root_defaults_to_current_directory(self) -> None:
        """
        GIVEN only a command
        WHEN parsed
        THEN --root is ".".
        """
        args = build_parser().parse_args(["install"])
        assert args.command == "install"
        assert args.root == "."

    def test_unknown_command_exits(self) -> None:
        """
        GIVEN an unknown command
        WHEN parsed
        THEN argparse exits.
        """
        with pytest.raises(SystemExit):
            build_parser().parse_args(["migrate"])


class TestMain:
    def test_install_creates_both_files(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """
        GIVEN an empty project directory
        WHEN `service-base install --root <dir>` runs
        THEN both files are created and reported.
        """
        exit_code = main(["install", "--root", str(tmp_path)])

        assert exit_code == 0
        assert (tmp_path / "app/services/application_service.py").exists()
        assert (tmp_path / "app/models/types.py").exists()
        out = capsys.readouterr().out
        assert "  created  " in out

    def test_single_generator(self, tmp_path: Path) -> None:
        """
        GIVEN the types command
        WHEN main() runs
        THEN only the types module is written.
        """
        assert main(["types", "--root", str(tmp_path)]) == 0
        assert (tmp_path / "app/models/types.py").exists()
        assert not (tmp_path / "app/services").exists()

    def test_invalid_configuration(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """
        GIVEN an invalid SERVICE_BASE_LOG_RENDERER
        WHEN main() runs
        THEN it prints a FATAL message and returns 1.
        """
        monkeypatch.setenv("SERVICE_BASE_LOG_RENDERER", "xml")

        assert main(["install", "--root", str(tmp_path)]) == 1
        assert "FATAL: Configuration error" in capsys.readouterr().err

    def test_unwritable_root(self, tmp_path: Path) -> None:
        """
        GIVEN a root that is a file
        WHEN main() runs
        THEN the OSError is logged and 1 returned.
        """
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("")

        assert main(["install", "--root", str(blocker)]) == 1
