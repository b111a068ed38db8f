"""
Page layout wrapper.

Combines a title and rendered block fragments into a complete HTML document.
"""

from html import escape

from components.site_config import DEFAULT_LAYOUT_CONFIG, DEFAULT_SITE_SETTINGS


def page_layout(title, body_fragments, config=None):
    """
    Wrap rendered fragments in the page layout.

    Args:
        title: Page title (shown in <title> and as the page heading)
        body_fragments: List of HTML fragment strings, in display order
        config: Site configuration

    Returns:
        Complete HTML document string
    """
    config = config or {}
    layout = config.get('layout', DEFAULT_LAYOUT_CONFIG)
    site = config.get('site', DEFAULT_SITE_SETTINGS)

    title_text = escape(str(title), quote=False)
    site_name = site.get('name')
    head_title = f"{title_text} - {escape(site_name, quote=False)}" if site_name else title_text

    head = [
        f'<meta charset="{escape(layout.get("charset", "utf-8"))}">',
        f"<title>{head_title}</title>",
    ]
    if layout.get('stylesheet'):
        head.append(f'<link rel="stylesheet" href="{escape(layout["stylesheet"])}">')

    body = "\n".join(body_fragments)

    return (
        "<!DOCTYPE html>\n"
        f'<html lang="{escape(layout.get("html_lang", "en"))}">\n'
        "<head>\n" + "\n".join(head) + "\n</head>\n"
        "<body>\n"
        '<article class="page">\n'
        f"<h1>{title_text}</h1>\n"
        f"{body}\n"
        "</article>\n"
        "</body>\n"
        "</html>\n"
    )
