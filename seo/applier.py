"""
Applies per-language SEO metadata to the document head.

Every route change and every language change calls ``SEOApplier.apply``.
The descriptor load may be slow; when several applies overlap only the most
recent one is allowed to touch the head.
"""

import logging
import threading

from i18n import SUPPORTED_LANGUAGES, DEFAULT_LANGUAGE
from seo import DEFAULT_SITE, OG_LOCALES, ROUTES, absolute_url, normalize_route
from seo.head import HeadDocument, PageMetadata
from seo.schema import breadcrumb_schema, faq_schema, organization_schema, reviews_schema

logger = logging.getLogger(__name__)


def alternate_links(base_url, route, languages, default_language=DEFAULT_LANGUAGE):
    """hreflang alternates: one per language plus x-default."""
    url = absolute_url(base_url, route)
    alternates = [(lang, f'{url}?lang={lang}') for lang in languages]
    alternates.append(('x-default', f'{url}?lang={default_language}'))
    return alternates


def build_page_metadata(seo, language, route='', site=None, languages=None,
                        default_language=DEFAULT_LANGUAGE):
    """Build the head contents for ``route`` from a loaded SEO descriptor."""
    site = site or DEFAULT_SITE
    languages = languages or SUPPORTED_LANGUAGES
    route = normalize_route(route)
    meta = seo.meta
    override = seo.routes.get(route)

    title = meta.title
    description = meta.description
    keywords = meta.keywords
    if override is not None:
        title = override.title or title
        description = override.description or description
        keywords = override.keywords or keywords

    url = absolute_url(site['base_url'], route)
    image = absolute_url(site['base_url'], meta.image or site['logo'])
    robots = ROUTES.get(route, ROUTES[''])['robots']

    og_title = override.title if override is not None and override.title else (meta.ogTitle or title)
    og_description = meta.ogDescription or description
    meta_tags = [
        ('name', 'description', description),
        ('name', 'keywords', keywords),
        ('name', 'author', meta.author or site['name']),
        ('name', 'robots', robots),
        ('property', 'og:title', og_title),
        ('property', 'og:description', og_description),
        ('property', 'og:type', 'website'),
        ('property', 'og:url', url),
        ('property', 'og:locale', OG_LOCALES.get(language, OG_LOCALES[default_language])),
        ('property', 'og:image', image),
        ('property', 'og:site_name', site['name']),
        ('name', 'twitter:card', 'summary_large_image'),
        ('name', 'twitter:title', meta.twitterTitle or og_title),
        ('name', 'twitter:description', meta.twitterDescription or og_description),
        ('name', 'twitter:image', image),
    ]

    crumbs = [(ROUTES['']['name'], absolute_url(site['base_url']))]
    if route and route in ROUTES:
        crumbs.append((ROUTES[route]['name'], url))

    schemas = {
        'organization': organization_schema(seo.schema_, site),
        'breadcrumb': breadcrumb_schema(crumbs),
    }
    if seo.faq:
        schemas['faq'] = faq_schema(seo.faq)
    if seo.reviews:
        schemas['reviews'] = reviews_schema(
            seo.reviews, seo.schema_.organizationName or site['name'])

    return PageMetadata(
        language=language,
        route=route,
        title=title or site['name'],
        meta_tags=meta_tags,
        canonical=url,
        alternates=alternate_links(site['base_url'], route, languages, default_language),
        schemas=schemas,
    )


class SEOApplier:
    """Keeps one HeadDocument in sync with the current route and language."""

    def __init__(self, loader, head=None, site=None, languages=None):
        self.loader = loader
        self.head = head if head is not None else HeadDocument()
        self.site = dict(site or DEFAULT_SITE)
        self.languages = list(languages or SUPPORTED_LANGUAGES)
        self._lock = threading.Lock()
        self._generation = 0

    def apply(self, language, route=''):
        """Load the descriptor for ``language`` and apply it for ``route``.

        Returns:
            PageMetadata applied, or None when a newer apply superseded it.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation

        seo = self.loader.load(language)
        metadata = build_page_metadata(
            seo, language, route, self.site, self.languages, self.loader.default_language)

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale SEO update for '{language}' /{route}")
                return None
            self.head.apply(metadata)
        return metadata

    def update_seo(self, title=None, description=None, keywords=None, image=None,
                   url=None, type_=None):
        """Ad-hoc overrides on top of the last apply."""
        with self._lock:
            if title:
                self.head.title = title
                self.head.update_meta_tag('property', 'og:title', title)
                self.head.update_meta_tag('name', 'twitter:title', title)
            if description:
                self.head.update_meta_tag('name', 'description', description)
                self.head.update_meta_tag('property', 'og:description', description)
                self.head.update_meta_tag('name', 'twitter:description', description)
            if keywords:
                self.head.update_meta_tag('name', 'keywords', keywords)
            if image:
                image = absolute_url(self.site['base_url'], image)
                self.head.update_meta_tag('property', 'og:image', image)
                self.head.update_meta_tag('name', 'twitter:image', image)
            if url:
                url = absolute_url(self.site['base_url'], url)
                self.head.update_meta_tag('property', 'og:url', url)
                self.head.set_canonical(url)
            if type_:
                self.head.update_meta_tag('property', 'og:type', type_)

    def add_breadcrumbs(self, crumbs):
        """Replace the breadcrumb schema with [(name, url), ...]."""
        crumbs = [(name, absolute_url(self.site['base_url'], url)) for name, url in crumbs]
        with self._lock:
            self.head.set_schema('breadcrumb', breadcrumb_schema(crumbs))

    def preload_resource(self, href, as_, type_=None):
        link = {'rel': 'preload', 'href': href, 'as': as_}
        if type_:
            link['type'] = type_
        with self._lock:
            if not any(existing.get('href') == href for existing in self.head.links('preload')):
                self.head.add_link(**link)
