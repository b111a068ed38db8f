"""
Tests for importing page-source markup.
"""

import pytest

from import_pages import (
    import_directory,
    import_page_file,
    page_location,
    parse_page_source,
    resolve_src,
)
from pages.templates import find_page, get_page_blocks


SOURCE = """<x-page title="Select">

<x-p>Dropdown list</x-p>

<x-sub-title>Options</x-sub-title>

<x-code language="php">
Select::make('Country', 'country_id')
    ->options([1 => 'Italy'])
</x-code>

<x-image src="{{ asset('screenshots/select.png') }}"></x-image>

</x-page>
"""


def test_resolve_src():
    assert resolve_src("{{ asset('screenshots/code.png') }}") == 'screenshots/code.png'
    assert resolve_src('{{asset("img/a.png")}}') == 'img/a.png'
    assert resolve_src('https://example.com/a.png') == 'https://example.com/a.png'


def test_parse_page_source():
    title, blocks = parse_page_source(SOURCE)

    assert title == 'Select'
    assert [b['type'] for b in blocks] == ['paragraph', 'heading', 'code', 'image']
    assert [b['order'] for b in blocks] == [0, 1, 2, 3]
    assert blocks[0]['config'] == {'text': 'Dropdown list'}
    assert blocks[2]['config'] == {
        'language': 'php',
        'source': "Select::make('Country', 'country_id')\n    ->options([1 => 'Italy'])",
    }
    assert blocks[3]['config'] == {'src': 'screenshots/select.png'}


def test_parse_keeps_angle_brackets_in_code():
    title, blocks = parse_page_source(
        '<x-page title="T"><x-code language="php"><?php $a = $b < $c; ?></x-code></x-page>'
    )
    assert blocks[0]['config']['source'] == '<?php $a = $b < $c; ?>'


def test_parse_requires_page_element():
    with pytest.raises(ValueError, match="x-page"):
        parse_page_source("<x-p>Orphan</x-p>")


def test_page_location(tmp_path):
    root = tmp_path / 'pages'
    assert page_location(root / 'en' / 'fields' / 'code.page.html', root) == ('en', 'fields', 'code')
    assert page_location(root / 'ru' / 'fields' / 'code.blade.php', root) == ('ru', 'fields', 'code')
    assert page_location(root / 'en' / 'a' / 'b' / 'c.html', root) == ('en', 'a/b', 'c')

    with pytest.raises(ValueError):
        page_location(root / 'en' / 'code.page.html', root)


def _write_source(root, relative, content=SOURCE):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    return path


def test_reimport_skips_unless_replace(db, tmp_path):
    root = tmp_path / 'pages'
    path = _write_source(root, 'en/fields/select.page.html')

    page_id = import_page_file(db, path, root)
    assert page_id is not None
    assert import_page_file(db, path, root) is None

    path.write_text(SOURCE.replace('Dropdown list', 'Select box'), encoding='utf-8')
    assert import_page_file(db, path, root, replace=True) == page_id
    assert get_page_blocks(db, page_id)[0]['config']['text'] == 'Select box'


def test_import_directory_counts(db, tmp_path):
    root = tmp_path / 'pages'
    _write_source(root, 'en/fields/select.page.html')
    _write_source(root, 'en/fields/broken.page.html', '<x-p>no page</x-p>')
    _write_source(root, 'en/fields/notes.txt', 'ignored')

    stats = import_directory(db, root)

    assert stats == {'imported': 1, 'skipped': 0, 'failed': 1}
    assert find_page(db, 'en', 'fields', 'select') is not None


def test_unsupported_elements_are_dropped(capsys):
    title, blocks = parse_page_source(
        '<x-page title="Code"><x-p>Code Editor</x-p><x-foo>ignored</x-foo>'
        '<x-image src="{{ asset(\'screenshots/code.png\') }}"></x-image></x-page>'
    )

    assert [b['type'] for b in blocks] == ['paragraph', 'image']
    assert [b['order'] for b in blocks] == [0, 1]
    assert "Unsupported element <x-foo>" in capsys.readouterr().out


def test_page_location_normalizes_slug(tmp_path):
    root = tmp_path / 'pages'
    assert page_location(root / 'en' / 'fields' / 'Json_Field.page.html', root) == ('en', 'fields', 'json-field')
