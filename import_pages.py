"""
Import documentation pages from page-source markup files into the database.

A page source looks like:

    <x-page title="Code">
    <x-p>Code Editor</x-p>
    <x-code language="php">
    ...
    </x-code>
    <x-image src="{{ asset('screenshots/code.png') }}"></x-image>
    </x-page>

Files are laid out as <root>/<locale>/<section>/<slug>.page.html.

Usage:
    python import_pages.py views/pages
    python import_pages.py views/pages --replace --db docs.db
"""

import argparse
import re
from html import escape
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from component_registry import slugify
from database import open_database
from pages.templates import create_page, find_page, update_page
import register_components  # Import to trigger block registration


SOURCE_SUFFIXES = ('.page.html', '.blade.php', '.html')

ASSET_RE = re.compile(r"""^\{\{\s*asset\(\s*['"](.*?)['"]\s*\)\s*\}\}$""")
CODE_RE = re.compile(r'(<x-code\b[^>]*>)(.*?)(</x-code>)', re.DOTALL)


def resolve_src(value):
    """
    Turn an image src attribute into an asset path.

    "{{ asset('screenshots/code.png') }}" -> "screenshots/code.png";
    anything else is returned unchanged.
    """
    value = (value or '').strip()
    match = ASSET_RE.match(value)
    if match:
        return match.group(1)
    return value


def _protect_code(content):
    """Escape code sample bodies so the HTML parser keeps them as text."""
    return CODE_RE.sub(
        lambda m: m.group(1) + escape(m.group(2), quote=False) + m.group(3),
        content
    )


def parse_page_source(content):
    """
    Parse page-source markup into a title and a block list.

    Args:
        content: Markup string

    Returns:
        Tuple of (title, blocks) where blocks use the create_page format

    Raises:
        ValueError: If there is no <x-page> element
    """
    soup = BeautifulSoup(_protect_code(content), 'html.parser')

    page = soup.find('x-page')
    if page is None:
        raise ValueError("No <x-page> element found")

    title = (page.get('title') or '').strip()
    blocks = []

    for element in page.children:
        if not isinstance(element, Tag):
            continue

        if element.name == 'x-p':
            text = ' '.join(element.get_text().split())
            blocks.append({'type': 'paragraph', 'config': {'text': text}})

        elif element.name in ('x-sub-title', 'x-title'):
            text = ' '.join(element.get_text().split())
            blocks.append({'type': 'heading', 'config': {'text': text, 'level': 2}})

        elif element.name == 'x-code':
            config = {'source': element.get_text().strip('\n')}
            if element.get('language'):
                config['language'] = element['language']
            blocks.append({'type': 'code', 'config': config})

        elif element.name == 'x-image':
            config = {'src': resolve_src(element.get('src'))}
            if element.get('alt'):
                config['alt'] = element['alt']
            blocks.append({'type': 'image', 'config': config})

        else:
            print(f"  [SKIP] Unsupported element <{element.name}>")

    for order, block in enumerate(blocks):
        block['order'] = order

    return title, blocks


def page_location(source_path, root):
    """
    Derive (locale, section, slug) from a source file path.

    Args:
        source_path: Path to the source file
        root: Root directory of the page sources

    Returns:
        Tuple of (locale, section, slug), e.g. ('en', 'fields', 'code');
        the slug is normalized, so Json_Field.page.html becomes 'json-field'

    Raises:
        ValueError: If the path is not <root>/<locale>/<section>/<slug>
    """
    relative = Path(source_path).relative_to(root)
    parts = relative.parts

    if len(parts) < 3:
        raise ValueError(f"Expected <locale>/<section>/<slug> under {root}, got {relative}")

    name = parts[-1]
    for suffix in SOURCE_SUFFIXES:
        if name.endswith(suffix):
            name = name[:-len(suffix)]
            break

    return parts[0], '/'.join(parts[1:-1]), slugify(name)


def import_page_file(db, source_path, root, replace=False):
    """
    Import one page-source file.

    Args:
        db: Database instance
        source_path: Path to the source file
        root: Root directory of the page sources
        replace: Replace an existing page at the same location

    Returns:
        Page ID, or None if the page already existed and was skipped
    """
    locale, section, slug = page_location(source_path, root)

    with open(source_path, 'r', encoding='utf-8') as f:
        content = f.read()

    title, blocks = parse_page_source(content)

    existing = find_page(db, locale, section, slug)
    if existing:
        if not replace:
            print(f"  [SKIP] {locale}/{section}/{slug} already imported (ID: {existing['id']})")
            return None

        update_page(db, existing['id'], title=title, blocks=blocks)
        print(f"  [OK] Replaced {locale}/{section}/{slug} ({len(blocks)} blocks)")
        return existing['id']

    page_id = create_page(db, locale, section, slug, title, blocks)
    print(f"  [OK] Imported {locale}/{section}/{slug} ({len(blocks)} blocks)")
    return page_id


def find_source_files(root):
    """List page-source files under root, sorted."""
    root = Path(root)
    return sorted(
        p for p in root.rglob('*')
        if p.is_file() and p.name.endswith(SOURCE_SUFFIXES)
    )


def import_directory(db, root, replace=False):
    """
    Import every page-source file under a directory.

    Returns:
        Dict with 'imported', 'skipped' and 'failed' counts
    """
    stats = {'imported': 0, 'skipped': 0, 'failed': 0}

    for path in find_source_files(root):
        try:
            page_id = import_page_file(db, path, root, replace=replace)
        except ValueError as e:
            print(f"  [FAILED] {path}: {e}")
            stats['failed'] += 1
            continue

        if page_id is None:
            stats['skipped'] += 1
        else:
            stats['imported'] += 1

    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Import documentation page sources into the database'
    )
    parser.add_argument(
        'root',
        nargs='?',
        default='views/pages',
        help='Root directory of page sources (default: views/pages)'
    )
    parser.add_argument(
        '--replace',
        action='store_true',
        help='Replace pages that were already imported'
    )
    parser.add_argument(
        '--db',
        default='fielddocs.db',
        help='Database file (default: fielddocs.db)'
    )

    args = parser.parse_args(argv)

    root = Path(args.root)
    if not root.is_dir():
        print(f"Error: Source directory not found: {root}")
        return 1

    with open_database(args.db) as db:
        print("=" * 70)
        print(f"IMPORTING PAGES FROM: {root}")
        print("=" * 70)

        stats = import_directory(db, root, replace=args.replace)

    print()
    print(f"Imported: {stats['imported']}")
    print(f"Skipped:  {stats['skipped']}")
    print(f"Failed:   {stats['failed']}")

    return 0 if stats['failed'] == 0 else 1


if __name__ == '__main__':
    exit(main())
