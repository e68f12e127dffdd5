"""Device fingerprint sent with every request."""

from typing import Optional

from fivestar_support.models.base import FiveStarModel

DEVICE_HEADERS = {
    "platform": "X-FiveStar-Platform",
    "app_version": "X-FiveStar-App-Version",
    "device_model": "X-FiveStar-Device-Model",
    "os_version": "X-FiveStar-OS-Version",
}


class DeviceInfo(FiveStarModel):
    """Client-side device information. Sent as headers, never persisted."""

    platform: Optional[str] = None  # web, ios, android, flutter, laravel
    app_version: Optional[str] = None
    device_model: Optional[str] = None  # e.g. iPhone14,2
    os_version: Optional[str] = None

    def headers(self) -> dict[str, str]:
        """Build fingerprinting headers, skipping empty values."""
        return {
            header: getattr(self, field)
            for field, header in DEVICE_HEADERS.items()
            if getattr(self, field)
        }
