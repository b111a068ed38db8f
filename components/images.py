"""
Image components for documentation pages.
"""

from html import escape
from pathlib import PurePosixPath

from components.assets import asset, is_absolute_url


def image(src, alt=None, config=None, **kwargs):
    """
    Generate an image tag (typically a screenshot).

    Args:
        src: Relative asset path (e.g., 'screenshots/code.png') or absolute URL
        alt: Alternative text (defaults to the file stem)
        config: Site configuration, used to resolve the asset URL
        **kwargs: Additional customization

    Returns:
        String with HTML formatting
    """
    src = str(src)
    url = src if is_absolute_url(src) else asset(src, config)

    if alt is None:
        alt = PurePosixPath(src.split('?')[0]).stem

    return f'<figure class="image"><img src="{escape(url)}" alt="{escape(str(alt))}"></figure>'
