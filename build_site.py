"""
Batch Page Generation Script

Renders all stored documentation pages to static files.
Features build caching with manifest tracking to avoid unnecessary regeneration.

Usage:
    python build_site.py
    python build_site.py --locale en --output-dir site
    python build_site.py --force --pdf
    python build_site.py --asset-url https://docs.example.com/
"""

import argparse
from datetime import datetime
from pathlib import Path

from database import open_database
from component_registry import (
    get_registry,
    get_page_output_path,
    compute_page_hash,
    load_manifest,
    save_manifest,
    should_regenerate_page,
    manifest_key
)
from components.site_config import load_site_config, save_site_setting
from pages.generator import generate_page, export_page, export_page_pdf
from pages.templates import list_pages
from register_components import RENDERER_VERSION


def renderer_version() -> str:
    """Combined version of the renderer and every registered block."""
    versions = get_registry().versions()
    blocks = ','.join(f"{k}={versions[k]}" for k in sorted(versions))
    return f"{RENDERER_VERSION};{blocks}"


def build_pages(db, output_dir, locale=None, force=False, pdf=False):
    """
    Render pages into output_dir, skipping unchanged ones.

    Args:
        db: Database instance
        output_dir: Output directory path
        locale: Only build this locale (optional)
        force: Regenerate even if files are up-to-date
        pdf: Also write a PDF next to each page; pages whose PDF is
            missing are regenerated even when their HTML is cached

    Returns:
        Stats dict with 'generated', 'cached' and 'failed' counts
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    manifest = load_manifest(output_dir)
    manifest['generated_date'] = datetime.now().isoformat()
    if 'pages' not in manifest:
        manifest['pages'] = {}

    version = renderer_version()
    stats = {'generated': 0, 'cached': 0, 'failed': 0}

    for page in list_pages(db, locale):
        output_path = get_page_output_path(output_dir, page['locale'], page['section'], page['slug'])
        pdf_path = get_page_output_path(output_dir, page['locale'], page['section'], page['slug'], 'pdf')
        key = manifest_key(output_path, output_dir)

        config = load_site_config(db, page['id'])
        content_hash = compute_page_hash(db, page['id'], config)

        stale = should_regenerate_page(output_path, manifest, key, content_hash, version, force=force)
        if pdf and not pdf_path.exists():
            stale = True

        if not stale:
            print(f"  Cached: {key}")
            stats['cached'] += 1
            continue

        print(f"  Generating: {key}... ")
        try:
            generate_page(db, page['id'])
            export_page(db, page['id'], output_path)

            if pdf:
                export_page_pdf(db, page['id'], pdf_path)
        except Exception as e:
            print(f"  [FAILED] {key}: {e}")
            stats['failed'] += 1
            continue

        print("  [OK]")
        stats['generated'] += 1
        manifest['pages'][key] = {
            'page_id': page['id'],
            'title': page['title'],
            'generated_date': datetime.now().isoformat(),
            'content_hash': content_hash,
            'code_version': version
        }

    save_manifest(output_dir, manifest)
    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Render all documentation pages to static files'
    )
    parser.add_argument(
        '--locale',
        help='Build only this locale (e.g., "en")'
    )
    parser.add_argument(
        '--output-dir',
        default='site',
        help='Output directory (default: site)'
    )
    parser.add_argument(
        '--force',
        action='store_true',
        help='Force regeneration even if files are up-to-date'
    )
    parser.add_argument(
        '--pdf',
        action='store_true',
        help='Also export each page as PDF (pages without one are rebuilt)'
    )
    parser.add_argument(
        '--asset-url',
        help='Store a new public base URL for assets before building'
    )
    parser.add_argument(
        '--db',
        default='fielddocs.db',
        help='Database file (default: fielddocs.db)'
    )

    args = parser.parse_args(argv)

    db = open_database(args.db)

    try:

        if args.asset_url:
            save_site_setting(db, 'assets.base_url', args.asset_url)

        print("=" * 70)
        print("BUILDING DOCUMENTATION")
        print("=" * 70)
        print(f"Locale: {args.locale or 'all'}")
        print(f"Output Directory: {args.output_dir}")
        print(f"Force Regeneration: {args.force}")
        print()

        stats = build_pages(
            db,
            args.output_dir,
            locale=args.locale,
            force=args.force,
            pdf=args.pdf
        )

        print()
        print("=" * 70)
        print("BUILD SUMMARY")
        print("=" * 70)
        print(f"Generated: {stats['generated']}")
        print(f"Cached:    {stats['cached']}")
        print(f"Failed:    {stats['failed']}")
        print(f"Total:     {stats['generated'] + stats['cached'] + stats['failed']}")
        print()
        print(f"Manifest Updated: {Path(args.output_dir) / 'manifest.json'}")

        return 0 if stats['failed'] == 0 else 1

    except Exception as e:
        print(f"\nError: {e}")
        import traceback
        traceback.print_exc()
        return 1

    finally:
        db.close()


if __name__ == '__main__':
    exit(main())
