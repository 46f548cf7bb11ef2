"""
Persistence of per-add-on license fields.

Every field is a separate option named ``{namespace}_{field}`` so the values
can be edited independently by the license registration screen.
"""

from datetime import date, datetime
from typing import Optional
import logging

from app.services.licensing.state import (
    LICENSE_STATUS_MISSING,
    LicenseField,
    LicenseState,
    license_option_name,
)
from app.utils.options import get_option, update_option

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'


class LicenseStore:
    """Reads and writes LicenseState through the option table."""

    def load(self, slug: str) -> LicenseState:
        """Load the state for ``slug``; absent fields get their defaults."""
        checked_raw = get_option(license_option_name(slug, LicenseField.CHECKED))
        message = get_option(license_option_name(slug, LicenseField.MESSAGE))

        return LicenseState(
            slug=slug,
            license_key=get_option(license_option_name(slug, LicenseField.KEY), ''),
            status=get_option(license_option_name(slug, LicenseField.STATUS), LICENSE_STATUS_MISSING),
            last_checked_date=self._parse_date(slug, checked_raw),
            message=message or None,
        )

    def save_license_key(self, slug: str, license_key: str) -> None:
        update_option(license_option_name(slug, LicenseField.KEY), license_key)

    def save_status(self, slug: str, status: str) -> None:
        update_option(license_option_name(slug, LicenseField.STATUS), status)

    def save_checked_date(self, slug: str, checked: date) -> None:
        update_option(license_option_name(slug, LicenseField.CHECKED), checked.strftime(DATE_FORMAT))

    def save_message(self, slug: str, message: str) -> None:
        update_option(license_option_name(slug, LicenseField.MESSAGE), message)

    @staticmethod
    def _parse_date(slug: str, value: Optional[str]) -> Optional[date]:
        if not value:
            return None
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError:
            # Treated as never checked so the add-on becomes due
            logger.warning(f"LicenseStore: Invalid checked date for '{slug}': {value!r}")
            return None
