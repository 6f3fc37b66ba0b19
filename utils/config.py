# utils/config.py

"""
Application configuration
Reads settings from environment variables (.env supported) with a
fallback to Streamlit secrets
"""

import os
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()


def _from_secrets(key: str) -> Optional[str]:
    """Look up a key in st.secrets, None when unavailable"""
    try:
        import streamlit as st
        if key in st.secrets:
            return str(st.secrets[key])
    except Exception:
        # No secrets.toml or not running under streamlit
        return None
    return None


class AppConfig:
    """Configuration holder for the forecast dashboard"""

    DEFAULTS = {
        'BACKEND_SERVICE_URL': '',
        'SERVICE_USERNAME': '',
        'SERVICE_PASSWORD': '',
        'REQUEST_TIMEOUT': '30',
        'BUSINESS_NAME': 'Rao He Restaurant',
        'LOG_LEVEL': 'INFO',
        'DEFAULT_BRANCH_ID': '',
    }

    def __init__(self, overrides: Optional[Dict[str, Any]] = None):
        self._overrides = dict(overrides or {})

    def get(self, key: str, default: Optional[str] = None) -> str:
        """Resolve a setting: overrides, environment, secrets, defaults"""
        if key in self._overrides:
            return str(self._overrides[key])

        value = os.environ.get(key)
        if value is None:
            value = _from_secrets(key)
        if value is None:
            value = default if default is not None else self.DEFAULTS.get(key, '')
        return value

    @property
    def backend_url(self) -> str:
        url = self.get('BACKEND_SERVICE_URL').strip()
        if url and not url.endswith('/'):
            url += '/'
        return url

    @property
    def request_timeout(self) -> float:
        raw = self.get('REQUEST_TIMEOUT')
        try:
            return float(raw)
        except (TypeError, ValueError):
            logger.warning(f"Invalid REQUEST_TIMEOUT '{raw}', using 30s")
            return 30.0

    @property
    def backend_config(self) -> Dict[str, Any]:
        return {
            'base_url': self.backend_url,
            'username': self.get('SERVICE_USERNAME'),
            'password': self.get('SERVICE_PASSWORD'),
            'timeout': self.request_timeout,
        }

    @property
    def business_name(self) -> str:
        return self.get('BUSINESS_NAME')

    @property
    def default_branch_id(self) -> Optional[str]:
        return self.get('DEFAULT_BRANCH_ID') or None

    @property
    def log_level(self) -> int:
        level = getattr(logging, self.get('LOG_LEVEL').upper(), None)
        return level if isinstance(level, int) else logging.INFO


config = AppConfig()
