"""
License check rotation and the invalid-license gate.

Only one add-on is checked per scheduler tick. Because a check always moves
the add-on's checked date to today, the add-ons take turns over time.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple
import logging

from app.services.licensing.checker import LicenseChecker
from app.services.licensing.state import AddonDescriptor

logger = logging.getLogger(__name__)


def _checker(checker: Optional[LicenseChecker]) -> LicenseChecker:
    if checker is not None:
        return checker
    from flask import current_app
    return LicenseChecker.from_config(current_app.config)


def run_one_check(
    descriptors: Iterable[AddonDescriptor],
    checker: Optional[LicenseChecker] = None,
    now: Optional[datetime] = None,
) -> Optional[AddonDescriptor]:
    """
    Check the first add-on whose turn it is, then stop.

    Args:
        descriptors: Installed add-ons in discovery order
        checker: License checker to use (built from app config by default)
        now: Reference time for the due check

    Returns:
        The add-on that was checked, or None when none was due
    """
    checker = _checker(checker)

    for descriptor in descriptors:
        state = checker.store.load(descriptor.slug)
        if checker.is_due(state, now=now):
            logger.info(f"LicenseRotation: Checking '{descriptor.slug}'")
            checker.check(descriptor, state)
            return descriptor

    logger.debug("LicenseRotation: No add-on license due for a check")
    return None


def invalid_license_messages(
    descriptors: Iterable[AddonDescriptor],
    checker: Optional[LicenseChecker] = None,
) -> List[Tuple[AddonDescriptor, str]]:
    """Return (add-on, notice) for every add-on without a valid license."""
    checker = _checker(checker)

    invalid = []
    for descriptor in descriptors:
        message = checker.get_invalid_message(checker.store.load(descriptor.slug))
        if message:
            invalid.append((descriptor, message))
    return invalid


def compute_gate(
    descriptors: Iterable[AddonDescriptor],
    checker: Optional[LicenseChecker] = None,
) -> bool:
    """True when any installed add-on has an invalid license.

    Reads stored state only; no request is made to the licensing server.
    """
    invalid = invalid_license_messages(descriptors, checker)
    if invalid:
        logger.debug(
            f"LicenseRotation: Invalid license for {', '.join(d.slug for d, _ in invalid)}")
    return bool(invalid)
