"""
Documentation page management.

Functions for creating, looking up, translating and removing stored pages.
"""

import json
from datetime import datetime

from component_registry import get_registry


def _prepare_blocks(blocks):
    """
    Validate blocks and serialize their configs before anything is written.

    Returns:
        List of (block_type, config_json, display_order) rows; list order
        is used unless a block gives 'order'

    Raises:
        ValueError: If a block type is not registered or a config is not JSON-serializable
    """
    registry = get_registry()
    rows = []

    for idx, block in enumerate(blocks):
        if 'type' not in block:
            raise ValueError(f"Block definition missing 'type': {block}")
        if registry.get(block['type']) is None:
            raise ValueError(f"Unknown block type '{block['type']}'")

        try:
            config_json = json.dumps(block.get('config', {}))
        except TypeError as e:
            raise ValueError(f"Block {idx} ({block['type']}) config is not serializable: {e}") from e

        rows.append((block['type'], config_json, block.get('order', idx)))

    return rows


def _insert_blocks(db, page_id, rows):
    for block_type, config_json, display_order in rows:
        db.execute("""
            INSERT INTO page_blocks (page_id, block_type, config_json, display_order)
            VALUES (?, ?, ?, ?)
        """, (page_id, block_type, config_json, display_order))


def create_page(db, locale, section, slug, title, blocks):
    """
    Create a new documentation page.

    Args:
        db: Database instance
        locale: Page locale (e.g., 'en')
        section: Page section (e.g., 'fields')
        slug: Page slug, unique within locale and section (e.g., 'code')
        title: Page title
        blocks: List of dicts, each containing:
            - type: registered block id ('paragraph', 'heading', 'code', 'image')
            - config: Dict of block parameters (optional)
            - order: Display order (optional, defaults to list order)

    Returns:
        Page ID

    Example:
        page_id = create_page(
            db, 'en', 'fields', 'code', 'Code',
            [
                {"type": "paragraph", "config": {"text": "Code Editor"}},
                {"type": "code", "config": {"language": "php", "source": "..."}},
                {"type": "image", "config": {"src": "screenshots/code.png"}}
            ]
        )
    """
    rows = _prepare_blocks(blocks)

    existing = find_page(db, locale, section, slug)
    if existing:
        raise ValueError(f"Page '{locale}/{section}/{slug}' already exists (ID: {existing['id']})")

    with db.transaction():
        cursor = db.execute(
            "INSERT INTO doc_pages (locale, section, slug, title, created_date) VALUES (?, ?, ?, ?, ?)",
            (locale, section, slug, title, datetime.now().strftime('%Y-%m-%d'))
        )
        page_id = cursor.lastrowid

        _insert_blocks(db, page_id, rows)

    print(f"Created page '{locale}/{section}/{slug}' with ID {page_id}")
    return page_id


def get_page(db, page_id):
    """
    Get a page by ID.

    Raises:
        ValueError: If the page does not exist
    """
    page = db.fetch_one("""
        SELECT id, locale, section, slug, title, created_date, last_generated
        FROM doc_pages
        WHERE id = ?
    """, (page_id,))

    if not page:
        raise ValueError(f"Page ID {page_id} not found")

    return page


def find_page(db, locale, section, slug):
    """Find a page by its location, or None."""
    return db.fetch_one("""
        SELECT id, locale, section, slug, title, created_date, last_generated
        FROM doc_pages
        WHERE locale = ? AND section = ? AND slug = ?
    """, (locale, section, slug))


def get_page_blocks(db, page_id):
    """
    Get a page's blocks in display order.

    Returns:
        List of dicts with 'type', 'config' and 'order'
    """
    rows = db.fetch_all("""
        SELECT block_type, config_json, display_order
        FROM page_blocks
        WHERE page_id = ?
        ORDER BY display_order, id
    """, (page_id,))

    return [
        {
            'type': row['block_type'],
            'config': json.loads(row['config_json']) if row['config_json'] else {},
            'order': row['display_order']
        }
        for row in rows
    ]


def update_page(db, page_id, title=None, blocks=None):
    """
    Replace a page's title and/or its block list.

    Args:
        db: Database instance
        page_id: Page to update
        title: New title (optional)
        blocks: New block list, same format as create_page (optional)
    """
    get_page(db, page_id)
    rows = _prepare_blocks(blocks) if blocks is not None else None

    with db.transaction():
        if title is not None:
            db.execute("UPDATE doc_pages SET title = ? WHERE id = ?", (title, page_id))

        if rows is not None:
            db.execute("DELETE FROM page_blocks WHERE page_id = ?", (page_id,))
            _insert_blocks(db, page_id, rows)


def translate_page(db, page_id, locale, title=None, overrides=None):
    """
    Copy a page into another locale.

    Args:
        db: Database instance
        page_id: Source page
        locale: Target locale (e.g., 'ru')
        title: Translated title (optional, defaults to the source title)
        overrides: Dict of display_order -> config updates (optional),
            e.g. {0: {"text": "Редактор кода"}}

    Returns:
        New page ID

    Example:
        ru_page_id = translate_page(db, page_id, 'ru', overrides={0: {"text": "Редактор кода"}})
    """
    source = get_page(db, page_id)

    blocks = get_page_blocks(db, page_id)
    for block in blocks:
        if overrides and block['order'] in overrides:
            block['config'].update(overrides[block['order']])

    return create_page(
        db,
        locale,
        source['section'],
        source['slug'],
        title or source['title'],
        blocks
    )


def list_pages(db, locale=None):
    """
    List stored pages, optionally filtered by locale.

    Args:
        db: Database instance
        locale: Filter by locale (optional)

    Returns:
        List of page rows
    """
    if locale:
        return db.fetch_all("""
            SELECT id, locale, section, slug, title, last_generated
            FROM doc_pages
            WHERE locale = ?
            ORDER BY section, slug
        """, (locale,))

    return db.fetch_all("""
        SELECT id, locale, section, slug, title, last_generated
        FROM doc_pages
        ORDER BY locale, section, slug
    """)


def delete_page(db, page_id):
    """Delete a page with its blocks, overrides and generated output."""
    page = get_page(db, page_id)

    db.execute("DELETE FROM doc_pages WHERE id = ?", (page_id,))
    print(f"Deleted page '{page['locale']}/{page['section']}/{page['slug']}'")
