"""
Page generation engine.

Main module for rendering documentation pages from database-stored blocks.
"""

from datetime import datetime
from pathlib import Path

from component_registry import get_registry
from components.site_config import load_site_config
from .renderer import assemble_html, assemble_pdf, error_fragment
from .templates import get_page, get_page_blocks


TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


def render_blocks(db, page_id, config):
    """
    Render each stored block of a page.

    Args:
        db: Database instance
        page_id: Page ID
        config: Effective site configuration

    Returns:
        List of (type, params, html) tuples; failed blocks come back
        as ('error', message, html)
    """
    registry = get_registry()
    rendered = []

    for block in get_page_blocks(db, page_id):
        block_type = block['type']
        params = block['config']

        try:
            definition = registry.get(block_type)
            if definition is None:
                raise ValueError(f"Unknown block type '{block_type}'")

            html = definition.render(config=config, **params)
            rendered.append((block_type, params, html))

        except Exception as e:
            print(f"    Error rendering {block_type} block: {e}")
            rendered.append(('error', str(e), error_fragment(f"Error: {e}")))

    return rendered


def render_page(db, page_id, config=None):
    """
    Render a stored page to HTML without saving it.

    Args:
        db: Database instance
        page_id: Page ID
        config: Site configuration (optional, loaded from the database when None)

    Returns:
        HTML string
    """
    page = get_page(db, page_id)

    if config is None:
        config = load_site_config(db, page_id)

    rendered = render_blocks(db, page_id, config)

    return assemble_html([html for _, _, html in rendered], page['title'], config)


def generate_page(db, page_id):
    """
    Generate a page and store the result.

    Args:
        db: Database instance
        page_id: ID of the page to generate

    Returns:
        HTML string

    Example:
        html = generate_page(db, page_id=1)
        # HTML automatically saved to database
    """
    page = get_page(db, page_id)

    print(f"Generating page: {page['locale']}/{page['section']}/{page['slug']} ({page['title']})")

    html = render_page(db, page_id)
    file_size = len(html.encode('utf-8'))

    # Local time, shared by the stored output and the page row
    generated_at = datetime.now().strftime(TIMESTAMP_FORMAT)

    existing = db.fetch_one(
        "SELECT id FROM generated_pages WHERE page_id = ?",
        (page_id,)
    )

    with db.transaction():
        if existing:
            db.execute("""
                UPDATE generated_pages
                SET html = ?, file_size = ?, generated_date = ?
                WHERE page_id = ?
            """, (html, file_size, generated_at, page_id))
            print(f"  Updated existing output (ID: {existing['id']})")
        else:
            cursor = db.execute("""
                INSERT INTO generated_pages (page_id, html, file_size, generated_date)
                VALUES (?, ?, ?, ?)
            """, (page_id, html, file_size, generated_at))
            print(f"  Saved new output (ID: {cursor.lastrowid})")

        db.execute("""
            UPDATE doc_pages
            SET last_generated = ?
            WHERE id = ?
        """, (generated_at, page_id))

    print(f"Page generated successfully ({file_size:,} bytes)")

    return html


def retrieve_page(db, page_id):
    """
    Retrieve the latest generated HTML for a page.

    Returns:
        HTML string, or None if the page was never generated
    """
    generated = db.fetch_one("""
        SELECT html, generated_date, file_size
        FROM generated_pages
        WHERE page_id = ?
    """, (page_id,))

    if not generated:
        return None

    return generated['html']


def export_page(db, page_id, output_path):
    """
    Export a generated page to a file.

    Args:
        db: Database instance
        page_id: Page ID
        output_path: File path to write HTML

    Returns:
        True if successful, False otherwise
    """
    html = retrieve_page(db, page_id)

    if not html:
        print(f"No generated output found for page ID {page_id}")
        return False

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(html)

    print(f"Page exported to: {output_path}")
    return True


def export_page_pdf(db, page_id, output_path):
    """
    Render a page to PDF and write it to a file.

    Args:
        db: Database instance
        page_id: Page ID
        output_path: File path to write PDF

    Returns:
        Number of bytes written
    """
    page = get_page(db, page_id)
    config = load_site_config(db, page_id)

    rendered = render_blocks(db, page_id, config)
    pdf_bytes = assemble_pdf([(block_type, params) for block_type, params, _ in rendered], page['title'], config)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'wb') as f:
        f.write(pdf_bytes)

    print(f"PDF exported to: {output_path} ({len(pdf_bytes):,} bytes)")
    return len(pdf_bytes)
