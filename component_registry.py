"""
Block Registry System for the field documentation generator.

This module provides a central registry for all blocks (paragraphs, headings,
code samples, images) that can be placed on a documentation page. Blocks are
cataloged with metadata and looked up by id when a stored page is rendered.

Key Features:
- Block discovery and listing
- Standardized page output paths
- Build caching with manifest tracking
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Callable, Any
import hashlib
import json
from pathlib import Path


@dataclass
class BlockDefinition:
    """
    Definition of a block that can appear on a documentation page.

    Attributes:
        id: Unique block identifier, stored as page_blocks.block_type (e.g., 'code')
        name: Human-readable name
        category: Block category ('text', 'code', 'media')
        description: Brief description of what this block renders
        function: Callable that renders the block to an HTML fragment
        parameters: Parameters accepted by the render function, with defaults
        required: Parameters a stored block must provide
        version: Block version (for cache invalidation)
    """
    id: str
    name: str
    category: str
    description: str
    function: Callable
    parameters: Dict[str, Any] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)
    version: str = "1.0.0"

    def render(self, config: Optional[Dict[str, Any]] = None, **params) -> str:
        """
        Render this block with stored parameters.

        Raises:
            ValueError: If a required parameter is missing
        """
        missing = [name for name in self.required if name not in params]
        if missing:
            raise ValueError(f"Block '{self.id}' missing parameters: {', '.join(missing)}")

        return self.function(config=config, **params)


class BlockRegistry:
    """
    Central registry for all available blocks.

    Blocks are registered once during module initialization and can be
    queried when rendering pages or listing what is available.
    """

    def __init__(self):
        self._blocks: Dict[str, BlockDefinition] = {}

    def register(self, block: BlockDefinition):
        """
        Register a block in the registry.

        Args:
            block: BlockDefinition to register

        Raises:
            ValueError: If block ID already registered
        """
        if block.id in self._blocks:
            raise ValueError(f"Block '{block.id}' already registered")

        self._blocks[block.id] = block

    def get(self, block_id: str) -> Optional[BlockDefinition]:
        """Get a block by ID."""
        return self._blocks.get(block_id)

    def list_all(self) -> List[BlockDefinition]:
        """List all registered blocks."""
        return list(self._blocks.values())

    def list_by_category(self, category: str) -> List[BlockDefinition]:
        """List blocks by category (text/code/media)."""
        return [b for b in self._blocks.values() if b.category == category]

    def versions(self) -> Dict[str, str]:
        """Map of block id to version, used in build hashes."""
        return {b.id: b.version for b in self._blocks.values()}


# Global registry instance
_registry = BlockRegistry()


def get_registry() -> BlockRegistry:
    """Get the global block registry instance."""
    return _registry


def register_block(
    id: str,
    name: str,
    category: str,
    description: str,
    function: Callable,
    **kwargs
) -> BlockDefinition:
    """
    Convenience function to register a block.

    Args:
        id: Block ID
        name: Block name
        category: Block category
        description: Block description
        function: Render function
        **kwargs: Additional BlockDefinition fields

    Returns:
        The registered BlockDefinition

    Example:
        >>> register_block(
        ...     id='code',
        ...     name='Code Sample',
        ...     category='code',
        ...     description='Fenced code sample with a language tag',
        ...     function=code_block,
        ...     required=['source']
        ... )
    """
    block = BlockDefinition(
        id=id,
        name=name,
        category=category,
        description=description,
        function=function,
        **kwargs
    )
    _registry.register(block)
    return block


def slugify(text: str) -> str:
    """
    Convert text to a URL-friendly slug.

    Args:
        text: Text to slugify (e.g., "Code Editor", "Json_Field")

    Returns:
        Slug: e.g., "code-editor", "json-field"
    """
    slug = text.lower()

    # Replace spaces and underscores with hyphens
    slug = slug.replace(' ', '-')
    slug = slug.replace('_', '-')

    # Remove any characters that aren't alphanumeric or hyphen
    slug = ''.join(c for c in slug if c.isalnum() or c == '-')

    # Collapse multiple hyphens
    while '--' in slug:
        slug = slug.replace('--', '-')

    return slug.strip('-')


def get_page_output_path(
    base_dir: Path,
    locale: str,
    section: str,
    slug: str,
    extension: str = 'html'
) -> Path:
    """
    Generate standardized output path for a page.

    Args:
        base_dir: Base directory (e.g., Path('site'))
        locale: Page locale (e.g., 'en')
        section: Page section (e.g., 'fields')
        slug: Page slug (e.g., 'code')
        extension: File extension ('html' or 'pdf')

    Returns:
        Full path: e.g., Path('site/en/fields/code.html')
    """
    return Path(base_dir) / locale / section / f"{slug}.{extension}"


def compute_page_hash(db, page_id: int, config: Optional[Dict[str, Any]] = None) -> str:
    """
    Compute a hash of a page's stored content for cache invalidation.

    Args:
        db: Database instance
        page_id: Page ID
        config: Effective site configuration for the page (optional)

    Returns:
        Hash string (hex digest)
    """
    page = db.fetch_one(
        "SELECT locale, section, slug, title FROM doc_pages WHERE id = ?",
        (page_id,)
    )

    if not page:
        return hashlib.md5(b"no_page").hexdigest()

    blocks = db.fetch_all("""
        SELECT block_type, config_json, display_order
        FROM page_blocks
        WHERE page_id = ?
        ORDER BY display_order, id
    """, (page_id,))

    hash_input = json.dumps({
        'page': dict(page),
        'blocks': [dict(b) for b in blocks],
        'config': config or {}
    }, sort_keys=True, default=str)

    return hashlib.md5(hash_input.encode()).hexdigest()


def load_manifest(output_dir: Path) -> Dict:
    """
    Load manifest.json from output directory.

    Args:
        output_dir: Path to output directory

    Returns:
        Manifest dict, or empty dict if not found
    """
    manifest_path = Path(output_dir) / 'manifest.json'
    if not manifest_path.exists():
        return {}

    try:
        with open(manifest_path, 'r') as f:
            return json.load(f)
    except (json.JSONDecodeError, IOError):
        return {}


def save_manifest(output_dir: Path, manifest: Dict):
    """
    Save manifest.json to output directory.

    Args:
        output_dir: Path to output directory
        manifest: Manifest dict to save
    """
    output_dir = Path(output_dir)
    manifest_path = output_dir / 'manifest.json'
    output_dir.mkdir(parents=True, exist_ok=True)

    with open(manifest_path, 'w') as f:
        json.dump(manifest, f, indent=2)


def should_regenerate_page(
    output_path: Path,
    manifest: Dict,
    page_key: str,
    current_content_hash: str,
    renderer_version: str,
    force: bool = False
) -> bool:
    """
    Determine if a page needs to be regenerated.

    Args:
        output_path: Path to rendered page file
        manifest: Current manifest dict
        page_key: Manifest key of the page (see manifest_key)
        current_content_hash: Hash of the stored page content
        renderer_version: Combined block/renderer version string
        force: If True, always regenerate

    Returns:
        True if page should be regenerated
    """
    if force:
        return True

    output_path = Path(output_path)
    if not output_path.exists():
        return True

    entries = manifest.get('pages', {})
    if page_key not in entries:
        return True

    page_info = entries[page_key]

    # Content changed
    if page_info.get('content_hash') != current_content_hash:
        return True

    # Renderer changed
    if page_info.get('code_version') != renderer_version:
        return True

    return False


def manifest_key(output_path: Path, output_dir: Path) -> str:
    """Manifest key for an output file, relative to the output directory (e.g. en/fields/code.html)."""
    return Path(output_path).relative_to(output_dir).as_posix()
