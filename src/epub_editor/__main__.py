"""Allow ``python -m epub_editor``."""

from epub_editor.cli import app

if __name__ == "__main__":
    app()
