# tests/test_cli.py
"""
Tests for the command line interface.
"""

import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from epub_editor.cli import app, configure_logging
from epub_editor.core.session import EditorMode

runner = CliRunner()


@pytest.fixture(autouse=True)
def keep_root_logging(monkeypatch):
    """Commands must not replace the handlers pytest installs."""
    monkeypatch.setattr("epub_editor.cli.configure_logging", lambda *args, **kwargs: None)


class TestInfo:
    """Tests for the info command."""

    def test_info_prints_metadata_and_spine(self, sample_epub):
        """Metadata and reading order are listed."""
        result = runner.invoke(app, ["info", str(sample_epub)])

        assert result.exit_code == 0
        assert "Test Book" in result.stdout
        assert "Test Author" in result.stdout
        assert "chap1" in result.stdout
        assert "chap2" in result.stdout

    def test_info_broken_book(self, tmp_path):
        """A malformed book exits with an error."""
        broken = tmp_path / "broken.epub"
        broken.write_text("not a zip")

        result = runner.invoke(app, ["info", str(broken)])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_info_missing_file(self, tmp_path):
        """typer rejects paths that do not exist."""
        result = runner.invoke(app, ["info", str(tmp_path / "absent.epub")])
        assert result.exit_code != 0


class TestEdit:
    """Tests for the edit command."""

    @patch("epub_editor.tui.EpubEditorApp")
    def test_edit_launches_app(self, mock_app_class, sample_epub):
        """The editor is started with the book preloaded."""
        result = runner.invoke(app, ["edit", str(sample_epub), "--markdown"])

        assert result.exit_code == 0
        config = mock_app_class.call_args.kwargs["config"]
        assert config.initial_path == sample_epub.resolve()
        assert config.start_dir == sample_epub.resolve().parent
        assert config.mode is EditorMode.MARKDOWN
        mock_app_class.return_value.run.assert_called_once_with()

    @patch("epub_editor.tui.EpubEditorApp")
    def test_edit_without_book(self, mock_app_class):
        """No argument starts an empty editor in rich text mode."""
        result = runner.invoke(app, ["edit"])

        assert result.exit_code == 0
        config = mock_app_class.call_args.kwargs["config"]
        assert config.initial_path is None
        assert config.mode is EditorMode.RICH_TEXT

    @patch("epub_editor.tui.EpubEditorApp")
    def test_edit_missing_file(self, mock_app_class, tmp_path):
        result = runner.invoke(app, ["edit", str(tmp_path / "absent.epub")])

        assert result.exit_code == 1
        assert "File not found" in result.stdout
        mock_app_class.assert_not_called()

    @patch("epub_editor.tui.EpubEditorApp")
    def test_edit_unsupported_format(self, mock_app_class, tmp_path):
        text_file = tmp_path / "notes.txt"
        text_file.write_text("hello")

        result = runner.invoke(app, ["edit", str(text_file)])

        assert result.exit_code == 1
        assert "Unsupported file format" in result.stdout
        mock_app_class.assert_not_called()

    @patch("epub_editor.tui.EpubEditorApp")
    def test_no_subcommand_starts_editor(self, mock_app_class):
        """Running without a subcommand opens the editor."""
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        mock_app_class.return_value.run.assert_called_once_with()


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield root
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_cli_logging_with_file(self, restore_root, tmp_path):
        """Records reach the log file; verbose enables debug."""
        log_file = tmp_path / "editor.log"
        configure_logging(verbose=True, log_file=log_file, tui=False)

        logging.getLogger("epub_editor.test").debug("hello from the test")
        for handler in restore_root.handlers:
            handler.flush()

        assert restore_root.level == logging.DEBUG
        assert "hello from the test" in log_file.read_text(encoding="utf-8")

    def test_tui_logging_uses_textual_handler(self, restore_root):
        from textual.logging import TextualHandler

        configure_logging(verbose=False, log_file=None, tui=True)

        assert restore_root.level == logging.INFO
        assert any(isinstance(h, TextualHandler) for h in restore_root.handlers)
