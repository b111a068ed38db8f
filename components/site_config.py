"""
Site configuration system for documentation rendering.

This module provides a database-backed configuration system that:
- Stores default site, asset and layout settings
- Allows site-wide overrides stored as JSON settings
- Supports page-specific overrides
"""

import json
from typing import Dict, Any, Optional


# =============================================================================
# Default Configuration Presets
# =============================================================================

DEFAULT_SITE_SETTINGS = {
    "name": "Admin Panel Documentation",
    "default_locale": "en"
}

DEFAULT_ASSETS_CONFIG = {
    "base_url": "/",
    "version": None,      # Appended as ?v=... when set
    "public_dir": "public"
}

DEFAULT_CODE_CONFIG = {
    "default_language": "php",
    "css_class_prefix": "language-"
}

DEFAULT_LAYOUT_CONFIG = {
    "html_lang": "en",
    "stylesheet": None,
    "charset": "utf-8"
}

DEFAULT_PDF_CONFIG = {
    "page_size": "a4",    # 'a4' or 'letter'
    "margin": 40,
    "fonts": {
        "title": "Helvetica-Bold",
        "title_size": 24,
        "heading_size": 16,
        "body": "Helvetica",
        "body_size": 11,
        "code": "Courier",
        "code_size": 9
    },
    "colors": {
        "text": "#2c3e50",
        "code_background": "#f4f6f7",
        "error": "#e74c3c",
        "muted": "#95a5a6"
    }
}

DEFAULT_SITE_CONFIG = {
    "site": DEFAULT_SITE_SETTINGS,
    "assets": DEFAULT_ASSETS_CONFIG,
    "code": DEFAULT_CODE_CONFIG,
    "layout": DEFAULT_LAYOUT_CONFIG,
    "pdf": DEFAULT_PDF_CONFIG
}


# =============================================================================
# Configuration Loading Functions
# =============================================================================

def load_site_config(db=None, page_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Load complete site configuration with hierarchy:
    1. Start with default presets
    2. Apply stored site settings
    3. Apply page-specific overrides (if provided)

    Args:
        db: Database instance (optional, defaults only when None)
        page_id: Optional page ID for page overrides

    Returns:
        Complete configuration dictionary with all settings merged
    """
    config = merge_config({}, DEFAULT_SITE_CONFIG)

    if db is None:
        return config

    settings = db.fetch_all("SELECT setting_key, setting_value FROM site_settings")
    if settings:
        config = merge_config(config, parse_settings(settings))

    if page_id:
        override = db.fetch_one("""
            SELECT override_config
            FROM page_overrides
            WHERE page_id = ?
        """, (page_id,))

        if override and override['override_config']:
            config = merge_config(config, json.loads(override['override_config']))

    return config


def parse_settings(rows) -> Dict[str, Any]:
    """
    Parse site_settings rows into a nested config dictionary.

    Keys are dotted paths, e.g. 'assets.base_url' -> {'assets': {'base_url': ...}}.

    Args:
        rows: Rows with setting_key and setting_value (JSON) columns

    Returns:
        Configuration dictionary
    """
    config = {}

    for row in rows:
        parts = row['setting_key'].split('.')
        target = config
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = json.loads(row['setting_value']) if row['setting_value'] else None

    return config


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge override config into base config.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if isinstance(value, dict):
            existing = result.get(key)
            result[key] = merge_config(existing if isinstance(existing, dict) else {}, value)
        else:
            result[key] = value

    return result


# =============================================================================
# Configuration Storage Functions
# =============================================================================

def save_site_setting(db, key: str, value: Any):
    """
    Store a site-wide setting.

    Args:
        db: Database instance
        key: Dotted setting path (e.g., 'assets.base_url')
        value: JSON-serializable value
    """
    db.execute("""
        INSERT INTO site_settings (setting_key, setting_value) VALUES (?, ?)
        ON CONFLICT(setting_key) DO UPDATE SET setting_value = excluded.setting_value
    """, (key, json.dumps(value)))


def set_page_override(db, page_id: int, override: Dict[str, Any]):
    """
    Store configuration overrides for a single page.

    Args:
        db: Database instance
        page_id: Page ID
        override: Partial configuration dictionary
    """
    db.execute("""
        INSERT INTO page_overrides (page_id, override_config) VALUES (?, ?)
        ON CONFLICT(page_id) DO UPDATE SET override_config = excluded.override_config
    """, (page_id, json.dumps(override)))

