"""
Application services.

License checking for installed add-ons and the protected content types it gates.
"""

from app.services.licensing import LicenseChecker, compute_gate, run_one_check
from app.services.content_types import ContentTypeRegistry, content_types

__all__ = [
    'LicenseChecker',
    'compute_gate',
    'run_one_check',
    'ContentTypeRegistry',
    'content_types',
]
