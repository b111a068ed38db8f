"""
Tests for the page discovery tool.
"""

from list_pages import main
from pages.templates import create_page
from database import open_database


def test_lists_blocks(capsys):
    assert main(['--blocks', '-v']) == 0

    out = capsys.readouterr().out
    assert "BLOCK REGISTRY" in out
    assert "ID: code" in out
    assert "Parameters:" in out


def test_lists_pages_with_blocks(tmp_path, capsys):
    db_path = tmp_path / 'list.db'
    with open_database(str(db_path)) as db:
        create_page(db, 'en', 'fields', 'code', 'Code', [
            {"type": "paragraph", "config": {"text": "Code Editor"}},
        ])

    assert main(['--db', str(db_path), '-v']) == 0

    out = capsys.readouterr().out
    assert 'en/fields/code  "Code"' in out
    assert "0. paragraph (text)" in out


def test_empty_locale(tmp_path, capsys):
    assert main(['--db', str(tmp_path / 'empty.db'), '--locale', 'de']) == 0
    assert "No pages found." in capsys.readouterr().out
