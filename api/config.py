"""
Configuration loading for the contact backend and site renderer.

"""

import copy
import json
import logging
import os
import secrets

logger = logging.getLogger(__name__)

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_CONFIG_PATH = os.path.join(_PROJECT_ROOT, 'site_config.json')

DEFAULTS = {
    'site': {
        'name': 'Web Firm Solutions',
        'base_url': 'https://webfirmsolutions.com',
        'logo': 'https://webfirmsolutions.com/assets/logo.png',
        'email': 'contact@webfirmsolutions.com',
        'service': 'Web Firm Solutions Backend',
    },
    'contact': {
        'messages_file': os.path.join(_PROJECT_ROOT, 'data', 'messages.json'),
        'rate_limit': '10 per 15 minutes',
        'captcha_rate_limit': '30 per minute',
        'captcha_ttl_seconds': 600,
        'require_captcha': False,
        'admin_key': '',
    },
    'i18n': {
        'assets_dir': None,
    },
    'cors': {
        'allow_origins': [
            'http://localhost:4200',  # Angular dev server
            'http://localhost:3001',  # Same-port access
        ],
    },
    'client': {
        'api_base_url': 'http://localhost:3001/api',
        'geo_timeout_seconds': 3.0,
        'server_captcha': False,
    },
}


def config_path():
    return os.environ.get('WEBFIRM_CONFIG') or _CONFIG_PATH


def load_site_config(config=None):
    """Load site settings, merging defaults with config.

    Args:
        config: Parsed config dict; read from site_config.json (or the file
            named by WEBFIRM_CONFIG) when None

    Returns:
        dict: Full config with every section present
    """
    if config is None:
        path = config_path()
        try:
            with open(path, encoding='utf-8') as f:
                config = json.load(f)
        except FileNotFoundError:
            config = {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable config {path}: {e}")
            config = {}

    merged = copy.deepcopy(config)
    for key, value in DEFAULTS.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict):
            for k, v in value.items():
                if k not in merged[key]:
                    merged[key][k] = copy.deepcopy(v)

    # Environment overrides
    if os.environ.get('WEBFIRM_ADMIN_KEY'):
        merged['contact']['admin_key'] = os.environ['WEBFIRM_ADMIN_KEY']
    if os.environ.get('MESSAGES_FILE'):
        merged['contact']['messages_file'] = os.environ['MESSAGES_FILE']
    return merged


def ensure_admin_key(config):
    """Return the admin shared secret, generating one for this process if unset."""
    key = config['contact'].get('admin_key')
    if not key:
        key = secrets.token_hex(16)
        config['contact']['admin_key'] = key
        logger.warning(f"No admin key configured; generated one for this process: {key}")
    return key
