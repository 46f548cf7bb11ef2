"""
Add-on license checking.

Validates each installed add-on's license key against the licensing server,
one add-on per scheduler tick, and derives the gate that disables protected
functionality while any license is invalid.
"""

from app.services.licensing.state import (
    LICENSE_STATUS_MISSING,
    LICENSE_STATUS_VALID,
    AddonDescriptor,
    LicenseField,
    LicenseState,
    license_option_name,
)
from app.services.licensing.storage import LicenseStore
from app.services.licensing.client import LicensingClient, LicensingClientError
from app.services.licensing.checker import CheckResult, ErrorKind, LicenseChecker
from app.services.licensing.rotation import compute_gate, invalid_license_messages, run_one_check
from app.services.licensing.discovery import get_installed_addons

__all__ = [
    'LICENSE_STATUS_MISSING',
    'LICENSE_STATUS_VALID',
    'AddonDescriptor',
    'LicenseField',
    'LicenseState',
    'license_option_name',
    'LicenseStore',
    'LicensingClient',
    'LicensingClientError',
    'CheckResult',
    'ErrorKind',
    'LicenseChecker',
    'compute_gate',
    'invalid_license_messages',
    'run_one_check',
    'get_installed_addons',
]
