"""
Easy Digital Downloads licensing API client.

Sends ``check_license`` requests to the store that sold the add-ons.
Documentation: https://easydigitaldownloads.com/docs/software-licensing-api/
"""

import requests
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class LicensingClientError(Exception):
    """The licensing server could not give a usable answer."""


class InvalidResponseError(LicensingClientError):
    """Transport failure, timeout or non-200 status."""


class InvalidDataError(LicensingClientError):
    """Body is empty or not a JSON object."""


class LicensingClient:
    """Client for the EDD software licensing endpoint."""

    API_URL = "https://upstreamplugin.com"

    # Timeouts
    TIMEOUT = 30

    def __init__(self, api_url: Optional[str] = None, timeout: Optional[int] = None, verify: bool = True):
        self.api_url = api_url or self.API_URL
        self.timeout = timeout or self.TIMEOUT
        self.verify = verify

    @classmethod
    def from_config(cls, config) -> 'LicensingClient':
        return cls(
            api_url=config.get('LICENSE_API_URL'),
            timeout=config.get('LICENSE_REQUEST_TIMEOUT'),
            verify=config.get('LICENSE_VERIFY_SSL', True),
        )

    def check_license(self, license_key: str, item_id: str, site_url: str) -> Dict[str, Any]:
        """
        Ask the store whether ``license_key`` is still valid for ``item_id``.

        Args:
            license_key: Key registered for the add-on
            item_id: EDD download id of the add-on
            site_url: Base URL of this installation

        Returns:
            Decoded JSON object (``license`` holds the status when present)

        Raises:
            InvalidResponseError: request failed or status is not 200
            InvalidDataError: body is not a non-empty JSON object
        """
        logger.info(f"LicensingClient: Checking license for item {item_id}")

        try:
            response = requests.post(
                self.api_url,
                data={
                    'edd_action': 'check_license',
                    'license': license_key,
                    'item_id': item_id,
                    'url': site_url,
                },
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(f"LicensingClient: Timeout for item {item_id}")
            raise InvalidResponseError(str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"LicensingClient: API error for item {item_id}: {e}")
            raise InvalidResponseError(str(e)) from e

        if response.status_code != 200:
            logger.error(f"LicensingClient: Unexpected status {response.status_code} for item {item_id}")
            raise InvalidResponseError(f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"LicensingClient: Invalid JSON for item {item_id}: {e}")
            raise InvalidDataError(str(e)) from e

        if not data or not isinstance(data, dict):
            logger.error(f"LicensingClient: Empty or malformed data for item {item_id}")
            raise InvalidDataError("empty or non-object body")

        return data
