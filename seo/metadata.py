"""
SEO descriptors and their loader.

A descriptor is the per-language `/assets/i18n/seo/{lang}.json` file: page
meta text, organization data for structured data, optional FAQ and review
entries, and optional per-route overrides.
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from i18n import DEFAULT_LANGUAGE
from i18n.assets import AssetLoadError, seo_path

logger = logging.getLogger(__name__)


class SEOMeta(BaseModel):
    title: str = ''
    description: str = ''
    keywords: str = ''
    author: str = ''
    ogTitle: str = ''
    ogDescription: str = ''
    twitterTitle: str = ''
    twitterDescription: str = ''
    image: Optional[str] = None


class SEOSchema(BaseModel):
    organizationName: str = ''
    organizationDescription: str = ''
    serviceAreaServed: str = ''
    priceRange: str = ''
    services: list[str] = []


class FAQEntry(BaseModel):
    question: str
    answer: str


class Review(BaseModel):
    author: str
    rating: int = 5
    body: str = ''


class RouteOverride(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None


class SEOMetadata(BaseModel):
    # 'schema' clashes with a BaseModel attribute, hence the alias
    meta: SEOMeta = Field(default_factory=SEOMeta)
    schema_: SEOSchema = Field(default_factory=SEOSchema, alias='schema')
    faq: list[FAQEntry] = []
    reviews: list[Review] = []
    routes: dict[str, RouteOverride] = {}

    model_config = {'populate_by_name': True}

    @classmethod
    def from_descriptor(cls, data):
        return cls.model_validate(data)


# Used when neither the requested nor the default descriptor can be loaded
BUILTIN_SEO = SEOMetadata(
    meta=SEOMeta(
        title='Web Firm Solutions | Professional Web Development',
        description='Professional web design and frontend development services.',
        keywords='web development, web design, create website',
        author='Web Firm Solutions',
    ),
    schema_=SEOSchema(
        organizationName='Web Firm Solutions',
        organizationDescription='Web design and frontend development agency.',
        serviceAreaServed='Worldwide',
    ),
)


class SEOLoader:
    """Fetch SEO descriptors with a fallback to the default language."""

    def __init__(self, fetcher, default_language=DEFAULT_LANGUAGE):
        self._fetcher = fetcher
        self.default_language = default_language

    def _fetch(self, language):
        try:
            return SEOMetadata.from_descriptor(self._fetcher.get_json(seo_path(language)))
        except (AssetLoadError, ValidationError) as e:
            logger.warning(f"Failed to load SEO data for '{language}': {e}")
            return None

    def load(self, language):
        """Return the descriptor for ``language``, the default's, or the built-in one."""
        seo = self._fetch(language)
        if seo is None and language != self.default_language:
            logger.info(f"Using '{self.default_language}' SEO fallback for '{language}'")
            seo = self._fetch(self.default_language)
        return seo if seo is not None else BUILTIN_SEO
