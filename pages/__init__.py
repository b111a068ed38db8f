"""
Pages package for documentation page management.

This package contains modules for storing documentation pages, rendering
them from their database-stored blocks, and exporting HTML or PDF output.
"""

from . import generator
from . import templates
from . import renderer

__all__ = ['generator', 'templates', 'renderer']
