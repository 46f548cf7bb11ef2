"""
Admin routes for add-on licenses and license notices
"""
from flask import Blueprint, request, jsonify, current_app

from app.services.content_types import has_invalid_license
from app.services.licensing import (
    LICENSE_STATUS_MISSING,
    LicenseChecker,
    get_installed_addons,
    invalid_license_messages,
    run_one_check,
)
from app.utils import messages
from app.utils.decorators import admin_required
import logging

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__, url_prefix="/admin")


def _checker():
    return LicenseChecker.from_config(current_app.config)


def _find_addon(slug):
    for addon in get_installed_addons():
        if addon.slug == slug:
            return addon
    return None


# ============================================================
# EXTENSIONS
# ============================================================

@bp.route('/extensions', methods=['GET'])
@admin_required
def extensions_list():
    """List installed add-ons with their stored license state"""
    checker = _checker()
    addons = []
    for addon in get_installed_addons():
        state = checker.store.load(addon.slug)
        addons.append({
            'slug': addon.slug,
            'edd_id': addon.edd_id,
            'name': addon.name or addon.display_name,
            'registered': state.is_registered,
            'status': state.status,
            'last_checked': state.last_checked_date.isoformat() if state.last_checked_date else None,
            'invalid_message': checker.get_invalid_message(state),
        })
    return jsonify({'addons': addons})


@bp.route('/extensions/<slug>/license', methods=['POST'])
@admin_required
def register_license(slug):
    """Store the license key (and optionally the status) of an add-on.

    Used by the registration flow once the key was activated on the store.
    """
    addon = _find_addon(slug)
    if addon is None:
        return jsonify({'success': False, 'error': str(messages.ADDON_NOT_INSTALLED % {'slug': slug})}), 404

    payload = request.get_json(silent=True) or request.form
    license_key = (payload.get('license_key') or '').strip()
    if not license_key:
        return jsonify({'success': False, 'error': str(messages.LICENSE_KEY_REQUIRED)}), 400

    checker = _checker()
    previous_key = checker.store.load(slug).license_key
    checker.store.save_license_key(slug, license_key)

    status = payload.get('status')
    if status:
        checker.store.save_status(slug, status)
    elif license_key != previous_key:
        # A new key is not trusted until the registration flow confirms it
        checker.store.save_status(slug, LICENSE_STATUS_MISSING)

    logger.info(f"Admin: License key registered for '{slug}'")

    state = checker.store.load(slug)
    return jsonify({
        'success': True,
        'slug': slug,
        'status': state.status,
        'message': str(messages.LICENSE_KEY_SAVED % {'addon': addon.display_name}),
    })


@bp.route('/extensions/check', methods=['POST'])
@admin_required
def run_license_check():
    """Run one license checker tick now"""
    checked = run_one_check(get_installed_addons(), checker=_checker())
    if checked is None:
        return jsonify({'checked': None})

    state = _checker().store.load(checked.slug)
    return jsonify({
        'checked': checked.slug,
        'status': state.status,
        'last_checked': state.last_checked_date.isoformat() if state.last_checked_date else None,
    })


# ============================================================
# NOTICES
# ============================================================

@bp.route('/notices', methods=['GET'])
@admin_required
def notices():
    """Warnings for invalid add-on licenses plus the disabled-functionality error"""
    result = [
        {'type': 'warning', 'slug': addon.slug, 'message': message}
        for addon, message in invalid_license_messages(get_installed_addons(), checker=_checker())
    ]

    if has_invalid_license():
        result.append({'type': 'error', 'slug': None, 'message': str(messages.LICENSE_FUNCTIONALITY_DISABLED)})

    return jsonify({'notices': result})
