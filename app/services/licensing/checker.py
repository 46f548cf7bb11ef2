"""
Add-on license checker.

Runs one check-and-persist cycle for a single add-on. Failures never leave
``check``: they are turned into a stored notice that ``get_invalid_message``
returns later, so a broken license server cannot break a request or a job.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Callable, Optional, Tuple
import logging

from app.services.licensing.client import (
    InvalidDataError,
    InvalidResponseError,
    LicensingClient,
)
from app.services.licensing.state import (
    LICENSE_STATUS_VALID,
    AddonDescriptor,
    LicenseState,
    addon_display_name,
)
from app.services.licensing.storage import LicenseStore
from app.utils import messages

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24


class ErrorKind(Enum):
    MISSING_KEY = 'missing_key'
    ALREADY_INVALID = 'already_invalid'
    TRANSPORT_OR_FORMAT = 'transport_or_format'
    LICENSE_REVOKED = 'license_revoked'


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check. ``kind`` is None on success."""
    kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    status: Optional[str] = None  # new status reported by the server

    @property
    def ok(self) -> bool:
        return self.kind is None


class LicenseChecker:
    """Checks add-on licenses against the licensing server."""

    DAYS_TO_CHECK = 15
    LICENSE_REGISTRATION_PAGE = 'admin/extensions'

    def __init__(
        self,
        store: Optional[LicenseStore] = None,
        client: Optional[LicensingClient] = None,
        site_url: str = '',
        registration_page: Optional[str] = None,
        period_days: Optional[int] = None,
        today: Callable[[], date] = date.today,
    ):
        self.store = store or LicenseStore()
        self.client = client or LicensingClient()
        self.site_url = site_url
        self.registration_page = registration_page or self.LICENSE_REGISTRATION_PAGE
        self.period_days = period_days if period_days is not None else self.DAYS_TO_CHECK
        self._today = today

    @classmethod
    def from_config(cls, config, **kwargs) -> 'LicenseChecker':
        """Build a checker from a Flask config mapping."""
        kwargs.setdefault('client', LicensingClient.from_config(config))
        kwargs.setdefault('site_url', config.get('SITE_URL', ''))
        kwargs.setdefault('registration_page', config.get('LICENSE_REGISTRATION_PAGE'))
        kwargs.setdefault('period_days', config.get('LICENSE_CHECK_PERIOD_DAYS'))
        return cls(**kwargs)

    @property
    def registration_url(self) -> str:
        return f"{self.site_url.rstrip('/')}/{self.registration_page.lstrip('/')}"

    def _link(self) -> dict:
        return {
            'link_start': f'<a href="{self.registration_url}">',
            'link_end': '</a>',
        }

    def default_error_message(self, slug: str) -> str:
        return str(messages.LICENSE_NOT_VALID % dict(addon=addon_display_name(slug), **self._link()))

    def missing_key_message(self, slug: str) -> str:
        return str(messages.LICENSE_KEY_MISSING % dict(addon=addon_display_name(slug), **self._link()))

    def get_invalid_message(self, state: LicenseState) -> Optional[str]:
        """Return the notice to show for ``state``, or None if the license is valid.

        Reads nothing but ``state`` so it can be called on every page render.
        """
        if state.status == LICENSE_STATUS_VALID:
            return None
        return state.message or self.default_error_message(state.slug)

    def is_due(self, state: LicenseState, period_days: Optional[int] = None,
               now: Optional[datetime] = None) -> bool:
        """Whether at least ``period_days`` days passed since the last check.

        A never-checked add-on counts as checked ``period_days`` days ago.
        Elapsed days are rounded half up.
        """
        period_days = period_days if period_days is not None else self.period_days
        now = now or datetime.now()

        checked = state.last_checked_date
        if checked is None:
            checked = now.date() - timedelta(days=period_days)

        since = datetime.combine(checked, datetime.min.time())
        elapsed = Decimal((now - since).total_seconds()) / SECONDS_PER_DAY
        days_between = int(elapsed.quantize(Decimal('1'), rounding=ROUND_HALF_UP))

        return days_between >= period_days

    def check(self, descriptor: AddonDescriptor, state: Optional[LicenseState] = None) -> LicenseState:
        """Check one add-on license and persist the outcome.

        Use ``get_invalid_message`` to read the result.
        """
        state, _result = self.check_with_result(descriptor, state)
        return state

    def check_with_result(
        self,
        descriptor: AddonDescriptor,
        state: Optional[LicenseState] = None,
    ) -> Tuple[LicenseState, CheckResult]:
        slug = descriptor.slug
        if state is None:
            state = self.store.load(slug)

        try:
            # Record the attempt first so a failing add-on waits a full period
            state = replace(state, last_checked_date=self._today())
            self.store.save_checked_date(slug, state.last_checked_date)

            result = self._evaluate(descriptor, state)

            if result.status is not None:
                state = replace(state, status=result.status)
                self.store.save_status(slug, result.status)

            if not result.ok:
                state = replace(state, message=result.message)
                self.store.save_message(slug, result.message)
                logger.warning(f"LicenseChecker: '{slug}' check failed ({result.kind.value}): {result.message}")
            else:
                logger.info(f"LicenseChecker: '{slug}' license is valid")

            return state, result
        except Exception as e:
            logger.error(f"LicenseChecker: Unexpected error checking '{slug}': {e}")
            return state, CheckResult(ErrorKind.TRANSPORT_OR_FORMAT, str(e))

    def _evaluate(self, descriptor: AddonDescriptor, state: LicenseState) -> CheckResult:
        """Decide the outcome of a check; contacts the server at most once."""
        addon = addon_display_name(descriptor.slug)

        if state.license_key == '':
            return CheckResult(ErrorKind.MISSING_KEY, self.missing_key_message(descriptor.slug))

        # Known-bad licenses are not re-validated; only re-registration fixes them
        if state.status != LICENSE_STATUS_VALID:
            return CheckResult(ErrorKind.ALREADY_INVALID, self.default_error_message(descriptor.slug))

        try:
            data = self.client.check_license(state.license_key, descriptor.edd_id, self.site_url)
        except InvalidResponseError:
            return CheckResult(ErrorKind.TRANSPORT_OR_FORMAT,
                               str(messages.LICENSE_CHECK_INVALID_RESPONSE % {'addon': addon}))
        except InvalidDataError:
            return CheckResult(ErrorKind.TRANSPORT_OR_FORMAT,
                               str(messages.LICENSE_CHECK_INVALID_DATA % {'addon': addon}))

        remote_status = data.get('license')
        if remote_status is not None and remote_status != LICENSE_STATUS_VALID:
            return CheckResult(ErrorKind.LICENSE_REVOKED,
                               self.default_error_message(descriptor.slug),
                               status=str(remote_status))

        return CheckResult()
