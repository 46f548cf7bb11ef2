"""
Standardized license notice messages for the application.
All messages are translatable and formatted with named placeholders.
"""

from flask_babel import lazy_gettext as _

# Add-on license notices (stored per add-on and shown as admin warnings)
LICENSE_NOT_VALID = _(
    "The license for %(addon)s is not valid. Please %(link_start)sregister your license key here.%(link_end)s")
LICENSE_KEY_MISSING = _(
    "You haven't registered the license key for %(addon)s. Please %(link_start)sregister your license key here.%(link_end)s")
LICENSE_CHECK_INVALID_RESPONSE = _(
    "An error occurred when checking the license for %(addon)s. (invalid_response)")
LICENSE_CHECK_INVALID_DATA = _(
    "An error occurred when checking the license for %(addon)s. (invalid_data)")

# Global notice shown while protected functionality is disabled
LICENSE_FUNCTIONALITY_DISABLED = _(
    "The UpStream plugin has been disabled because of the add-on invalid license. "
    "Please validate the license of your add-ons or deactivate your affected add-ons "
    "in order to enable the UpStream plugin.")

# Admin actions
LICENSE_KEY_SAVED = _("License key for %(addon)s has been saved.")
LICENSE_KEY_REQUIRED = _("License key is required.")
ADDON_NOT_INSTALLED = _("Add-on %(slug)s is not installed.")
CONTENT_TYPE_NOT_FOUND = _("Content type %(content_type)s not found.")
