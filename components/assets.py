"""
Asset helpers.

Map relative resource paths (e.g. 'screenshots/code.png') to public URLs
and to local files under the public directory.
"""

from pathlib import Path

from components.site_config import DEFAULT_ASSETS_CONFIG


ABSOLUTE_PREFIXES = ('http://', 'https://', '//', 'data:')


def is_absolute_url(src):
    """Return True if src is already a full URL."""
    return str(src).startswith(ABSOLUTE_PREFIXES)


def asset(path, config=None):
    """
    Resolve a relative asset path to a publicly servable URL.

    Args:
        path: Relative resource path (e.g., 'screenshots/code.png')
        config: Site configuration (uses defaults when None)

    Returns:
        URL string, e.g. '/screenshots/code.png' or
        'https://docs.example.com/screenshots/code.png?v=3'
    """
    assets = (config or {}).get('assets', DEFAULT_ASSETS_CONFIG)
    base_url = assets.get('base_url') or '/'

    url = base_url.rstrip('/') + '/' + str(path).lstrip('/')

    version = assets.get('version')
    if version:
        url = f"{url}?v={version}"

    return url


def asset_file(path, config=None):
    """
    Resolve a relative asset path to a local file.

    Args:
        path: Relative resource path
        config: Site configuration (uses defaults when None)

    Returns:
        Path under the configured public directory
    """
    assets = (config or {}).get('assets', DEFAULT_ASSETS_CONFIG)
    return Path(assets.get('public_dir') or 'public') / str(path).lstrip('/')
