"""Demonstration fingerprint used by the command surface."""

from __future__ import annotations

from typing import Any, Dict

EXAMPLE_FINGERPRINT: Dict[str, Any] = {
    "userAgent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "platform": "Win32",
    "language": "en-US",
    "timezone": "America/New_York",
    "screen": {"width": 1920, "height": 1080, "colorDepth": 24},
    "cookieEnabled": True,
    "devToolsOpen": False,
}
