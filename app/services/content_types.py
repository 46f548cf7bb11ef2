"""
Content type registry.

Holds the content types UpStream exposes and the visibility arguments each
one is registered with. While any add-on license is invalid the protected
types are registered as private, which switches off the main functionality.
"""

from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

# Content types disabled while an add-on license is invalid
PROTECTED_CONTENT_TYPES = ('project', 'client', 'upst_milestone')

# Visibility arguments forced off by the gate
VISIBILITY_ARGS = (
    'public',
    'show_ui',
    'show_in_menu',
    'publicly_queryable',
    'query_var',
    'show_in_rest',
)

LICENSE_GATE_EXTENSION = 'license_gate'


def restrict_content_type_args(args: Dict[str, Any], content_type: str, has_invalid_license: bool) -> Dict[str, Any]:
    """
    Filter the registration arguments of a content type.

    Args:
        args: Registration arguments
        content_type: Content type name
        has_invalid_license: Gate computed at bootstrap

    Returns:
        Updated copy of ``args`` (unchanged when not gated or not protected)
    """
    if not has_invalid_license:
        return args

    if content_type not in PROTECTED_CONTENT_TYPES:
        return args

    restricted = dict(args)
    for key in VISIBILITY_ARGS:
        restricted[key] = False
    return restricted


class ContentTypeRegistry:
    """Registry for content types and their registration arguments."""

    def __init__(self):
        self._types: Dict[str, Dict[str, Any]] = {}

    def register(self, name: str, label: str, **args) -> None:
        if name in self._types:
            logger.warning(f"ContentTypeRegistry: Content type '{name}' already registered, overwriting")

        base = {key: True for key in VISIBILITY_ARGS}
        base.update(args)
        base['label'] = label
        self._types[name] = base

    def get_args(self, name: str, has_invalid_license: bool = False) -> Optional[Dict[str, Any]]:
        """Registration arguments for ``name`` after the license gate filter."""
        args = self._types.get(name)
        if args is None:
            return None
        return restrict_content_type_args(args, name, has_invalid_license)

    def list_types(self, has_invalid_license: bool = False) -> Dict[str, Dict[str, Any]]:
        return {
            name: restrict_content_type_args(args, name, has_invalid_license)
            for name, args in self._types.items()
        }


content_types = ContentTypeRegistry()
content_types.register('project', 'Projects')
content_types.register('client', 'Clients')
content_types.register('upst_milestone', 'Milestones')
content_types.register('upst_task', 'Tasks', show_in_menu=False)


def apply_license_gate(app) -> bool:
    """Compute the license gate for ``app`` from stored license state.

    Must run inside an application context.
    """
    from app.services.licensing import compute_gate, get_installed_addons

    gated = compute_gate(get_installed_addons())
    previous = app.extensions.get(LICENSE_GATE_EXTENSION)
    app.extensions[LICENSE_GATE_EXTENSION] = gated

    if gated and previous is not True:
        logger.warning(
            f"ContentTypeRegistry: Disabling {', '.join(PROTECTED_CONTENT_TYPES)} because of an invalid add-on license")
    return gated


def has_invalid_license(app=None) -> bool:
    """Current license gate, re-derived from stored state on every call.

    Checks run by the scheduler job or the admin endpoints while the app is
    up take effect on the next request.
    """
    if app is None:
        from flask import current_app
        app = current_app._get_current_object()
    return apply_license_gate(app)
