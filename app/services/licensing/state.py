"""
License state data model.

One LicenseState exists per installed add-on, keyed by the add-on slug.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional
import re

LICENSE_STATUS_VALID = 'valid'
LICENSE_STATUS_MISSING = 'missing'

_SLUG_RE = re.compile(r'^[A-Za-z0-9_-]+$')


class LicenseField(str, Enum):
    """Persisted per-add-on license fields."""
    KEY = 'license_key'
    STATUS = 'license_status'
    CHECKED = 'license_checked'
    MESSAGE = 'license_message'


@dataclass(frozen=True)
class AddonDescriptor:
    """An installed add-on as reported by discovery."""
    edd_id: str
    slug: str
    name: Optional[str] = field(default=None, compare=False)

    @property
    def display_name(self) -> str:
        return addon_display_name(self.slug)


@dataclass
class LicenseState:
    slug: str
    license_key: str = ''
    status: str = LICENSE_STATUS_MISSING
    last_checked_date: Optional[date] = None
    message: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status == LICENSE_STATUS_VALID

    @property
    def is_registered(self) -> bool:
        return self.license_key != ''


def addon_display_name(slug: str) -> str:
    """'time-tracker' -> 'Time Tracker'.

    Only hyphens are treated as word separators; the first letter of each
    word is upper-cased and the rest is left as is.
    """
    words = slug.replace('-', ' ').split(' ')
    return ' '.join(w[:1].upper() + w[1:] for w in words)


def validate_slug(slug: str) -> str:
    if not slug or not _SLUG_RE.match(slug):
        raise ValueError(f"Invalid add-on slug: {slug!r}")
    return slug


def option_namespace(slug: str) -> str:
    return validate_slug(slug).replace('-', '_')


def license_option_name(slug: str, license_field: LicenseField) -> str:
    """Build the option name storing ``license_field`` for an add-on.

    >>> license_option_name('time-tracker', LicenseField.STATUS)
    'time_tracker_license_status'
    """
    return f"{option_namespace(slug)}_{LicenseField(license_field).value}"
