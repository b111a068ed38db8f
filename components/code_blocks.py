"""
Code sample components for documentation pages.
"""

from html import escape

from components.site_config import DEFAULT_CODE_CONFIG


def strip_blank_lines(source):
    """Drop leading and trailing blank lines, keeping inner indentation."""
    lines = str(source).splitlines()

    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()

    return '\n'.join(lines)


def code_block(source, language=None, config=None, **kwargs):
    """
    Generate a fenced code sample.

    The source is rendered as literal text: it is escaped but otherwise kept
    verbatim, so a sample such as

        Code::make('Code', 'code')
            ->language('js')

    reads exactly the same in the browser.

    Args:
        source: Literal source text
        language: Language tag (e.g., 'php'); falls back to the configured default
        config: Site configuration
        **kwargs: Additional customization

    Returns:
        String with HTML formatting
    """
    code_config = (config or {}).get('code', DEFAULT_CODE_CONFIG)

    if language is None:
        language = code_config.get('default_language')

    body = escape(strip_blank_lines(source), quote=False)

    if not language:
        return f"<pre><code>{body}</code></pre>"

    prefix = code_config.get('css_class_prefix', 'language-')
    return (
        f'<pre><code class="{escape(prefix + str(language))}" '
        f'data-language="{escape(str(language))}">{body}</code></pre>'
    )
