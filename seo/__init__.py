"""
SEO metadata for the site's routes.

Route table, site identity defaults, and Open Graph locale tags shared by
the server-side page renderer and the Python client.
"""

DEFAULT_SITE = {
    'name': 'Web Firm Solutions',
    'base_url': 'https://webfirmsolutions.com',
    'logo': 'https://webfirmsolutions.com/assets/logo.png',
    'email': 'contact@webfirmsolutions.com',
}

# Open Graph locale per site language
OG_LOCALES = {
    'en': 'en_US',
    'ro': 'ro_RO',
    'uk': 'uk_UA',
    'de': 'de_DE',
    'fr': 'fr_FR',
}

# route -> page settings ('' is the single-page home)
ROUTES = {
    '': {'name': 'Home', 'robots': 'index, follow'},
    'admin': {'name': 'Admin', 'robots': 'noindex, nofollow'},
}

# Section anchors that used to be separate pages
REDIRECTS = {
    'services': '',
    'portfolio': '',
    'about': '',
    'contact': '',
    '404': '',
}


def normalize_route(path):
    """'/admin/?x=1' -> 'admin'."""
    path = (path or '').split('?', 1)[0].split('#', 1)[0]
    return path.strip('/')


def resolve_route(path):
    """Resolve a request path against the route table.

    Returns:
        tuple: (route, redirect_to) where redirect_to is None when the route
        is served directly, otherwise the route to redirect to. Unknown
        paths redirect to the home route.
    """
    route = normalize_route(path)
    if route in ROUTES:
        return route, None
    return route, REDIRECTS.get(route, '')


def absolute_url(base_url, route=''):
    """Join the site base URL and a route; absolute URLs pass through."""
    if route.startswith('http://') or route.startswith('https://'):
        return route
    route = normalize_route(route)
    base = base_url.rstrip('/')
    return f'{base}/{route}' if route else f'{base}/'
