"""
Translation and SEO asset fetchers.

Both the HTTP client and the server-side renderer read the same JSON assets
(`/assets/i18n/{lang}.json`, `/assets/i18n/seo/{lang}.json`). The HTTP fetcher
goes over the network; the local fetcher reads the files shipped in
``i18n/translations``.
"""

import json
import logging
import os

import requests

from i18n import TRANSLATIONS_DIR

logger = logging.getLogger(__name__)

ASSET_PREFIX = '/assets/i18n/'


class AssetLoadError(Exception):
    """A translation or SEO asset could not be fetched or parsed."""


def translation_path(lang):
    return f'{ASSET_PREFIX}{lang}.json'


def seo_path(lang):
    return f'{ASSET_PREFIX}seo/{lang}.json'


class HttpAssetFetcher:
    """Fetch JSON assets from the site over HTTP."""

    def __init__(self, base_url, session=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def get_json(self, path):
        url = f'{self.base_url}{path}'
        try:
            response = self.session.get(
                url,
                headers={'Cache-Control': 'no-cache', 'Pragma': 'no-cache'},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise AssetLoadError(f"GET {url} failed: {e}") from e
        if not isinstance(data, dict):
            raise AssetLoadError(f"GET {url} did not return a JSON object")
        return data


class LocalAssetFetcher:
    """Read JSON assets from the translations directory on disk."""

    def __init__(self, root=TRANSLATIONS_DIR):
        self.root = os.path.realpath(root)

    def get_json(self, path):
        if not path.startswith(ASSET_PREFIX):
            raise AssetLoadError(f"Not an i18n asset: {path}")
        resolved = os.path.realpath(os.path.join(self.root, path[len(ASSET_PREFIX):]))
        if not resolved.startswith(self.root + os.sep):
            raise AssetLoadError(f"Asset path escapes translations dir: {path}")
        try:
            with open(resolved, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise AssetLoadError(f"Could not read {path}: {e}") from e
        if not isinstance(data, dict):
            raise AssetLoadError(f"{path} is not a JSON object")
        return data
