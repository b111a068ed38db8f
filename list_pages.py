"""
Page Discovery Tool

List stored documentation pages, or the blocks available to build them.

Usage:
    python list_pages.py
    python list_pages.py --locale en -v
    python list_pages.py --blocks
"""

import argparse

from database import open_database
from component_registry import get_registry
from pages.templates import list_pages, get_page_blocks
import register_components  # Import to trigger block registration


def print_block_definition(block, verbose=False):
    """Print block definition information."""
    print(f"\n[{block.category.upper()}] {block.name}")
    print(f"  ID: {block.id}")
    print(f"  Description: {block.description}")
    print(f"  Version: {block.version}")

    if verbose and block.parameters:
        print(f"  Parameters: {block.parameters}")


def print_page(db, page, verbose=False):
    """Print page information."""
    generated = page['last_generated'] or 'never'
    print(f"\n{page['locale']}/{page['section']}/{page['slug']}  \"{page['title']}\"")
    print(f"  ID: {page['id']}")
    print(f"  Last generated: {generated}")

    if verbose:
        for block in get_page_blocks(db, page['id']):
            keys = ', '.join(sorted(block['config']))
            print(f"    {block['order']:>2}. {block['type']} ({keys})")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='List documentation pages or registered blocks'
    )
    parser.add_argument(
        '--locale',
        help='Filter pages by locale'
    )
    parser.add_argument(
        '--blocks',
        action='store_true',
        help='List registered block types instead of pages'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show detailed information'
    )
    parser.add_argument(
        '--db',
        default='fielddocs.db',
        help='Database file (default: fielddocs.db)'
    )

    args = parser.parse_args(argv)

    if args.blocks:
        blocks = get_registry().list_all()

        print("=" * 70)
        print(f"BLOCK REGISTRY ({len(blocks)})")
        print("=" * 70)

        for block in sorted(blocks, key=lambda b: (b.category, b.name)):
            print_block_definition(block, args.verbose)
        return 0

    with open_database(args.db) as db:
        pages = list_pages(db, args.locale)

        print("=" * 70)
        print(f"PAGES: {args.locale or 'all locales'}")
        print("=" * 70)

        if not pages:
            print("\nNo pages found.")
            return 0

        print(f"\nTotal Pages: {len(pages)}")

        for page in pages:
            print_page(db, page, args.verbose)

    return 0


if __name__ == '__main__':
    exit(main())
