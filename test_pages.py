"""
Tests for page storage, generation and export.
"""

import base64
import json
from datetime import datetime

import pytest
from bs4 import BeautifulSoup

from component_registry import get_registry
from components.site_config import save_site_setting

from pages.generator import export_page, export_page_pdf, generate_page, render_page, retrieve_page
from pages.templates import (
    create_page,
    delete_page,
    find_page,
    get_page,
    get_page_blocks,
    list_pages,
    translate_page,
    update_page,
)


BLOCKS = [
    {"type": "paragraph", "config": {"text": "Code Editor"}},
    {"type": "code", "config": {"language": "php", "source": "Code::make('Code', 'code')"}},
    {"type": "image", "config": {"src": "screenshots/code.png"}},
]


def test_create_and_find_page(db):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)

    page = find_page(db, 'en', 'fields', 'code')
    assert page['id'] == page_id
    assert page['title'] == 'Code'
    assert [b['type'] for b in get_page_blocks(db, page_id)] == ['paragraph', 'code', 'image']


def test_duplicate_location_rejected(db):
    create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)

    with pytest.raises(ValueError, match="already exists"):
        create_page(db, 'en', 'fields', 'code', 'Code again', BLOCKS)


def test_unknown_block_type_rejected(db):
    with pytest.raises(ValueError, match="Unknown block type"):
        create_page(db, 'en', 'fields', 'code', 'Code', [{"type": "video", "config": {}}])

    assert find_page(db, 'en', 'fields', 'code') is None


def test_missing_page_raises(db):
    with pytest.raises(ValueError, match="not found"):
        get_page(db, 999)


def test_explicit_order_wins(db):
    blocks = [
        {"type": "paragraph", "config": {"text": "second"}, "order": 2},
        {"type": "paragraph", "config": {"text": "first"}, "order": 1},
    ]
    page_id = create_page(db, 'en', 'fields', 'order', 'Order', blocks)

    soup = BeautifulSoup(render_page(db, page_id), 'html.parser')
    assert [p.get_text() for p in soup.find_all('p')] == ['first', 'second']


def test_update_page_replaces_blocks(db):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)
    update_page(db, page_id, title='Code field', blocks=BLOCKS[:1])

    assert get_page(db, page_id)['title'] == 'Code field'
    assert len(get_page_blocks(db, page_id)) == 1


def test_translate_page_with_overrides(db):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)

    ru_id = translate_page(db, page_id, 'ru', overrides={0: {"text": "Редактор кода"}})

    ru_blocks = get_page_blocks(db, ru_id)
    assert get_page(db, ru_id)['locale'] == 'ru'
    assert get_page(db, ru_id)['title'] == 'Code'
    assert ru_blocks[0]['config']['text'] == "Редактор кода"
    assert ru_blocks[1]['config'] == BLOCKS[1]['config']
    assert get_page_blocks(db, page_id)[0]['config']['text'] == "Code Editor"

    assert [p['locale'] for p in list_pages(db)] == ['en', 'ru']
    assert len(list_pages(db, 'ru')) == 1


def test_failed_block_renders_error_fragment(db):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)
    db.execute(
        "INSERT INTO page_blocks (page_id, block_type, config_json, display_order) VALUES (?, ?, ?, ?)",
        (page_id, 'code', json.dumps({"language": "php"}), 10)
    )

    soup = BeautifulSoup(render_page(db, page_id), 'html.parser')

    assert soup.find('div', class_='render-error') is not None
    assert soup.find('img') is not None
    assert soup.find('p').get_text() == "Code Editor"


def test_generate_retrieve_and_export(db, tmp_path):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)

    assert retrieve_page(db, page_id) is None
    assert export_page(db, page_id, tmp_path / 'missing.html') is False

    html = generate_page(db, page_id)
    assert retrieve_page(db, page_id) == html
    assert get_page(db, page_id)['last_generated'] is not None

    # Regenerating updates the stored row in place
    generate_page(db, page_id)
    assert db.fetch_one("SELECT COUNT(*) AS n FROM generated_pages")['n'] == 1

    output = tmp_path / 'out' / 'code.html'
    assert export_page(db, page_id, output) is True
    assert output.read_text(encoding='utf-8') == html


def test_export_pdf_without_screenshot(db, tmp_path):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)

    output = tmp_path / 'code.pdf'
    size = export_page_pdf(db, page_id, output)

    assert size > 0
    assert output.read_bytes().startswith(b'%PDF')


def test_delete_page_cascades(db):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)
    generate_page(db, page_id)

    delete_page(db, page_id)

    assert find_page(db, 'en', 'fields', 'code') is None
    assert db.fetch_one("SELECT COUNT(*) AS n FROM page_blocks")['n'] == 0
    assert db.fetch_one("SELECT COUNT(*) AS n FROM generated_pages")['n'] == 0


# 1x1 transparent PNG
SCREENSHOT_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def test_non_string_alt_is_rendered(db):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', [
        {"type": "paragraph", "config": {"text": "Code Editor"}},
        {"type": "image", "config": {"src": "screenshots/code.png", "alt": 5}},
    ])

    soup = BeautifulSoup(render_page(db, page_id), 'html.parser')

    assert soup.find('img')['alt'] == '5'
    assert soup.find('div', class_='render-error') is None


def test_unexpected_block_error_is_isolated(db, monkeypatch):
    def broken_image(src, config=None, **kwargs):
        raise AttributeError("'int' object has no attribute 'replace'")

    monkeypatch.setattr(get_registry().get('image'), 'function', broken_image)
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)

    soup = BeautifulSoup(render_page(db, page_id), 'html.parser')

    assert "has no attribute" in soup.find('div', class_='render-error').get_text()
    assert soup.find('p').get_text() == "Code Editor"
    assert soup.find('pre') is not None


def test_unserializable_config_leaves_no_page(db):
    blocks = BLOCKS + [{"type": "paragraph", "config": {"text": object()}}]

    with pytest.raises(ValueError, match="not serializable"):
        create_page(db, 'en', 'fields', 'code', 'Code', blocks)

    assert find_page(db, 'en', 'fields', 'code') is None
    assert db.fetch_one("SELECT COUNT(*) AS n FROM page_blocks")['n'] == 0

    # Retrying with valid blocks works
    assert create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)


def test_failed_update_keeps_existing_blocks(db):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)

    with pytest.raises(ValueError, match="not serializable"):
        update_page(db, page_id, title='Broken', blocks=[{"type": "paragraph", "config": {"text": {1, 2}}}])

    assert get_page(db, page_id)['title'] == 'Code'
    assert [b['type'] for b in get_page_blocks(db, page_id)] == ['paragraph', 'code', 'image']


def test_write_error_rolls_back_page(db, monkeypatch):
    from pages import templates

    def failing_insert(db, page_id, rows):
        raise RuntimeError("disk full")

    monkeypatch.setattr(templates, '_insert_blocks', failing_insert)

    with pytest.raises(RuntimeError):
        create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)

    assert find_page(db, 'en', 'fields', 'code') is None


def test_generated_timestamps_use_one_clock(db):
    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)
    before = datetime.now().replace(microsecond=0)

    generate_page(db, page_id)
    first = db.fetch_one("SELECT generated_date FROM generated_pages WHERE page_id = ?", (page_id,))

    assert first['generated_date'] == get_page(db, page_id)['last_generated']
    assert datetime.strptime(first['generated_date'], '%Y-%m-%d %H:%M:%S') >= before

    generate_page(db, page_id)
    second = db.fetch_one("SELECT generated_date FROM generated_pages WHERE page_id = ?", (page_id,))

    assert second['generated_date'] == get_page(db, page_id)['last_generated']
    assert second['generated_date'] >= first['generated_date']


def test_export_pdf_with_screenshot(db, tmp_path, capsys):
    public_dir = tmp_path / 'public'
    (public_dir / 'screenshots').mkdir(parents=True)
    (public_dir / 'screenshots' / 'code.png').write_bytes(SCREENSHOT_PNG)
    save_site_setting(db, 'assets.public_dir', str(public_dir))

    page_id = create_page(db, 'en', 'fields', 'code', 'Code', BLOCKS)

    output = tmp_path / 'code.pdf'
    export_page_pdf(db, page_id, output)

    data = output.read_bytes()
    assert data.startswith(b'%PDF')
    assert b'/Subtype /Image' in data
    assert "Image not available" not in capsys.readouterr().out
