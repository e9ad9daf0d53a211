"""
Pages router: SPA shell with a server-rendered, localized head.

Known routes get the single-page shell with title, meta tags, hreflang links
and structured data for the visitor's language; retired section pages and
unknown paths redirect to the home route.
"""

import os

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse

from i18n import LANGUAGE_COOKIE, get_locale
from seo import resolve_route
from seo.applier import build_page_metadata
from seo.head import HeadDocument, inject_head, render_page

router = APIRouter(tags=["pages"])


def _dist_file(request: Request, path: str):
    """Return a built static file under the dist dir, or None."""
    dist_dir = request.app.state.dist_dir
    if not dist_dir or not path:
        return None
    resolved = os.path.realpath(os.path.join(dist_dir, path))
    if not resolved.startswith(os.path.realpath(dist_dir) + os.sep):
        return None
    return resolved if os.path.isfile(resolved) else None


def render_shell(request: Request, language: str, route: str) -> str:
    site = request.app.state.config['site']
    seo = request.app.state.seo_loader.load(language)
    head = HeadDocument()
    head.apply(build_page_metadata(seo, language, route, site))

    dist_dir = request.app.state.dist_dir
    index_html = os.path.join(dist_dir, 'index.html') if dist_dir else None
    if index_html and os.path.isfile(index_html):
        with open(index_html, 'r', encoding='utf-8') as f:
            return inject_head(f.read(), head)
    return render_page(head, language)


@router.get("/{path:path}", include_in_schema=False)
async def spa_fallback(request: Request, path: str):
    if path == 'api' or path.startswith('api/'):
        raise HTTPException(status_code=404, detail="Not found")

    static_file = _dist_file(request, path)
    if static_file:
        return FileResponse(static_file)

    route, redirect_to = resolve_route(path)
    if redirect_to is not None:
        target = f'/{redirect_to}'
        if request.url.query:
            target = f'{target}?{request.url.query}'
        return RedirectResponse(target, status_code=302)

    language = get_locale(request)
    response = HTMLResponse(render_shell(request, language, route))
    if request.query_params.get('lang') == language:
        response.set_cookie(LANGUAGE_COOKIE, language, max_age=365 * 24 * 3600, samesite='lax')
    return response
