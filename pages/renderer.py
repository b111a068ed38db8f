"""
Page assembly and rendering.

Combines rendered blocks into HTML documents, or draws them into a PDF.
"""

import io
from html import escape

from reportlab.lib.pagesizes import letter, A4
from reportlab.pdfgen import canvas
from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader, simpleSplit

from components.assets import asset_file, is_absolute_url
from components.code_blocks import strip_blank_lines
from components.layout import page_layout
from components.site_config import DEFAULT_PDF_CONFIG


PAGE_SIZES = {'a4': A4, 'letter': letter}


def error_fragment(message):
    """HTML fragment shown in place of a block that failed to render."""
    return f'<div class="render-error">{escape(str(message), quote=False)}</div>'


def assemble_html(fragments, title, config=None):
    """
    Assemble rendered block fragments into an HTML document.

    Args:
        fragments: List of HTML fragment strings, in display order
        title: Page title
        config: Site configuration

    Returns:
        HTML string
    """
    return page_layout(title, fragments, config)


def assemble_pdf(blocks, title, config=None):
    """
    Assemble blocks into a PDF document.

    Args:
        blocks: List of (type, params) tuples
            - ('paragraph', {'text': ...})
            - ('heading', {'text': ..., 'level': ...})
            - ('code', {'source': ..., 'language': ...})
            - ('image', {'src': ..., 'alt': ...})
            - ('error', message)
        title: Page title
        config: Site configuration

    Returns:
        PDF bytes
    """
    pdf_config = (config or {}).get('pdf', DEFAULT_PDF_CONFIG)
    fonts = pdf_config.get('fonts', DEFAULT_PDF_CONFIG['fonts'])
    colors = pdf_config.get('colors', DEFAULT_PDF_CONFIG['colors'])
    margin = pdf_config.get('margin', 40)

    pagesize = PAGE_SIZES.get(pdf_config.get('page_size', 'a4'), A4)

    pdf_buffer = io.BytesIO()
    pdf = canvas.Canvas(pdf_buffer, pagesize=pagesize)
    pdf.setTitle(str(title))
    width, height = pagesize
    text_width = width - 2 * margin

    y_position = height - margin - 10

    def ensure_space(needed):
        nonlocal y_position
        if y_position - needed < margin:
            pdf.showPage()
            y_position = height - margin

    # Title
    pdf.setFont(fonts['title'], fonts['title_size'])
    pdf.setFillColor(HexColor(colors['text']))
    pdf.drawString(margin, y_position, str(title))
    y_position -= fonts['title_size'] + 16

    for block_type, params in blocks:
        if block_type in ('paragraph', 'heading'):
            if block_type == 'heading':
                font, size = fonts['title'], fonts['heading_size']
            else:
                font, size = fonts['body'], fonts['body_size']

            lines = simpleSplit(str(params.get('text', '')).strip(), font, size, text_width)
            leading = size * 1.4

            pdf.setFont(font, size)
            pdf.setFillColor(HexColor(colors['text']))
            for line in lines:
                ensure_space(leading)
                pdf.drawString(margin, y_position, line)
                y_position -= leading
            y_position -= 8

        elif block_type == 'code':
            size = fonts['code_size']
            leading = size * 1.35
            lines = strip_blank_lines(params.get('source', '')).split('\n')

            for line in lines:
                ensure_space(leading)
                pdf.setFillColor(HexColor(colors['code_background']))
                pdf.rect(margin - 6, y_position - size * 0.35, text_width + 12, leading, stroke=0, fill=1)
                pdf.setFont(fonts['code'], size)
                pdf.setFillColor(HexColor(colors['text']))
                pdf.drawString(margin, y_position, line)
                y_position -= leading
            y_position -= 12

        elif block_type == 'image':
            src = params.get('src', '')
            path = None if is_absolute_url(src) else asset_file(src, config)

            if path is not None and path.exists():
                img = ImageReader(str(path))
                img_w, img_h = img.getSize()

                draw_width = min(text_width, img_w)
                draw_height = draw_width * (img_h / img_w)

                ensure_space(draw_height)
                pdf.drawImage(img, margin, y_position - draw_height, width=draw_width, height=draw_height)
                y_position -= draw_height + 16
            else:
                print(f"  Image not available for PDF: {src}")
                ensure_space(20)
                pdf.setFont(fonts['body'], fonts['body_size'])
                pdf.setFillColor(HexColor(colors['muted']))
                pdf.drawString(margin, y_position, f"[Image: {src}]")
                y_position -= 24

        elif block_type == 'error':
            ensure_space(20)
            pdf.setFont(fonts['body'], fonts['body_size'])
            pdf.setFillColor(HexColor(colors['error']))
            pdf.drawString(margin, y_position, f"Error: {params}")
            y_position -= 24

    pdf.save()

    pdf_bytes = pdf_buffer.getvalue()
    pdf_buffer.close()

    return pdf_bytes
