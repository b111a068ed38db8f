"""
Components package for documentation page rendering.

This package contains the page blocks (text, code samples, images), the page
layout wrapper, the asset helper and the site configuration they share.
"""

from . import site_config
from . import assets
from . import layout
from . import text_blocks
from . import code_blocks
from . import images

__all__ = ['site_config', 'assets', 'layout', 'text_blocks', 'code_blocks', 'images']
