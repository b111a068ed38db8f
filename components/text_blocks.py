"""
Text block components for documentation pages.

Each function generates an HTML fragment from literal text.
"""

from html import escape


def paragraph(text, config=None, **kwargs):
    """
    Generate a paragraph.

    Args:
        text: Paragraph text (escaped, rendered literally)
        config: Site configuration (unused)
        **kwargs: Additional customization

    Returns:
        String with HTML formatting
    """
    return f"<p>{escape(str(text).strip(), quote=False)}</p>"


def heading(text, level=2, config=None, **kwargs):
    """
    Generate a section heading.

    Args:
        text: Heading text
        level: Heading level; the page title owns <h1>, so 2..6
        config: Site configuration (unused)
        **kwargs: Additional customization

    Returns:
        String with HTML formatting
    """
    level = min(max(int(level), 2), 6)
    return f"<h{level}>{escape(str(text).strip(), quote=False)}</h{level}>"
