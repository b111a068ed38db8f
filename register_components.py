"""
Block Registration

Registers the built-in page blocks. Import this module to populate the
global registry before rendering pages.
"""

from component_registry import register_block
from components.text_blocks import paragraph, heading
from components.code_blocks import code_block
from components.images import image


# Bumped whenever page_layout or the PDF renderer changes output
RENDERER_VERSION = "1.0.0"


# =============================================================================
# Text Blocks
# =============================================================================

register_block(
    id='paragraph',
    name='Paragraph',
    category='text',
    description='Plain paragraph of literal text',
    function=paragraph,
    parameters={'text': ''},
    required=['text']
)

register_block(
    id='heading',
    name='Heading',
    category='text',
    description='Section heading below the page title',
    function=heading,
    parameters={'text': '', 'level': 2},
    required=['text']
)


# =============================================================================
# Code Blocks
# =============================================================================

register_block(
    id='code',
    name='Code Sample',
    category='code',
    description='Fenced code sample with a language tag, rendered verbatim',
    function=code_block,
    parameters={'source': '', 'language': None},
    required=['source']
)


# =============================================================================
# Media Blocks
# =============================================================================

register_block(
    id='image',
    name='Image',
    category='media',
    description='Screenshot or illustration resolved through the asset helper',
    function=image,
    parameters={'src': '', 'alt': None},
    required=['src']
)
