"""
i18n router: serve translation and SEO JSON files.

The site loads dictionaries from ``/assets/i18n/{lang}.json`` and SEO
descriptors from ``/assets/i18n/seo/{lang}.json``.
"""

from fastapi import APIRouter, HTTPException, Request

from i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, LANGUAGE_NAMES, LANGUAGE_FLAGS
from i18n.assets import AssetLoadError, seo_path, translation_path

router = APIRouter(tags=["i18n"])


def _load_asset(request: Request, path: str) -> dict:
    """Load an i18n asset through the app's fetcher (cached in memory)."""
    cache = request.app.state.asset_cache
    if path in cache:
        return cache[path]
    try:
        data = request.app.state.assets.get_json(path)
    except AssetLoadError:
        raise HTTPException(status_code=404, detail=f"Asset '{path}' not found")
    cache[path] = data
    return data


@router.get("/api/i18n/languages")
async def get_languages():
    """List supported languages."""
    return {
        'languages': SUPPORTED_LANGUAGES,
        'default': DEFAULT_LANGUAGE,
        'names': LANGUAGE_NAMES,
        'flags': LANGUAGE_FLAGS,
    }


@router.get("/assets/i18n/seo/{lang}.json")
async def get_seo(request: Request, lang: str):
    """Serve the SEO descriptor for the specified language."""
    if lang not in SUPPORTED_LANGUAGES:
        raise HTTPException(status_code=404, detail=f"Language '{lang}' not supported")
    return _load_asset(request, seo_path(lang))


@router.get("/assets/i18n/{lang}.json")
async def get_translations(request: Request, lang: str):
    """Serve translation JSON for the specified language."""
    if lang not in SUPPORTED_LANGUAGES:
        raise HTTPException(status_code=404, detail=f"Language '{lang}' not supported")
    return _load_asset(request, translation_path(lang))
