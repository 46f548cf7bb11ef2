"""
Installed add-on discovery.

An add-on counts as installed when its slug appears among the active plugins
stored in the ``active_plugins`` option.
"""

from typing import Any, Dict, Iterable, List, Optional
import logging

from app.services.licensing.state import AddonDescriptor
from app.utils.options import get_json_option

logger = logging.getLogger(__name__)

ACTIVE_PLUGINS_OPTION = 'active_plugins'


def installed_plugin_slug(plugin_file: str) -> str:
    """Map a plugin file path to its slug.

    'upstream-time-tracker/upstream-time-tracker.php' -> 'upstream-time-tracker'
    """
    parts = plugin_file.split('/')
    if len(parts) > 1:
        slug = parts[1]
        if slug.endswith('.php'):
            slug = slug[:-len('.php')]
        return slug
    return plugin_file


def addon_catalog(catalog: Iterable[Dict[str, Any]]) -> List[AddonDescriptor]:
    """Turn raw catalog entries into descriptors, skipping incomplete ones."""
    descriptors = []
    for entry in catalog:
        slug = entry.get('slug')
        edd_id = entry.get('edd_id')
        if not slug or edd_id in (None, ''):
            logger.warning(f"AddonDiscovery: Skipping catalog entry without slug/edd_id: {entry}")
            continue
        descriptors.append(AddonDescriptor(edd_id=str(edd_id), slug=slug, name=entry.get('name')))
    return descriptors


def get_installed_addons(catalog: Optional[Iterable[Dict[str, Any]]] = None) -> List[AddonDescriptor]:
    """
    Get all installed (activated) add-ons, in catalog order.

    Args:
        catalog: Known add-ons; defaults to the ADDON_CATALOG setting

    Returns:
        Descriptors of the active add-ons
    """
    if catalog is None:
        from flask import current_app
        catalog = current_app.config.get('ADDON_CATALOG', [])

    active_plugins = get_json_option(ACTIVE_PLUGINS_OPTION, []) or []
    active_slugs = {installed_plugin_slug(p) for p in active_plugins}

    installed = [d for d in addon_catalog(catalog) if d.slug in active_slugs]
    logger.debug(f"AddonDiscovery: {len(installed)} installed add-on(s)")
    return installed
