"""
Document head model and renderer.

`PageMetadata` is the declarative description of a page's head (what the
page wants); `HeadDocument` is the single place it gets applied (what the
head currently holds) and rendered to HTML through Jinja2 with autoescaping.
"""

import os

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from seo.schema import SCHEMA_GROUPS

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(['html']),
    keep_trailing_newline=True,
)


class PageMetadata:
    """Everything one route in one language puts into the head."""

    def __init__(self, language, route, title, meta_tags=None, canonical=None,
                 alternates=None, schemas=None):
        self.language = language
        self.route = route
        self.title = title
        # [(attribute, value, content)], e.g. ('property', 'og:title', '...')
        self.meta_tags = list(meta_tags or [])
        self.canonical = canonical
        # [(hreflang, href)]
        self.alternates = list(alternates or [])
        # {group: json-ld object}
        self.schemas = dict(schemas or {})

    def meta(self, attribute, value):
        for attr, val, content in self.meta_tags:
            if attr == attribute and val == value:
                return content
        return None


class HeadDocument:
    """In-memory document head.

    Meta tags are keyed by their selector attribute (``name=`` or
    ``property=``) and updated in place; links are kept in insertion order;
    JSON-LD scripts are keyed by their ``data-schema`` group.
    """

    def __init__(self):
        self.title = ''
        self.language = None
        self._meta = {}
        self._links = []
        self._schemas = {}

    # --- META ---

    def update_meta_tag(self, attribute, value, content):
        """Set the content of ``<meta {attribute}="{value}">``, creating it if absent."""
        self._meta[(attribute, value)] = content

    def get_meta(self, attribute, value):
        return self._meta.get((attribute, value))

    def remove_meta_tag(self, attribute, value):
        self._meta.pop((attribute, value), None)

    @property
    def meta_tags(self):
        return [(attr, val, content) for (attr, val), content in self._meta.items()]

    # --- LINKS ---

    def add_link(self, **attrs):
        self._links.append(attrs)

    def remove_links(self, **match):
        """Remove every link whose attributes include all of ``match``.

        A match value of ``True`` means "attribute present".
        """
        def matches(link):
            for key, expected in match.items():
                if expected is True:
                    if key not in link:
                        return False
                elif link.get(key) != expected:
                    return False
            return True

        self._links = [link for link in self._links if not matches(link)]

    def links(self, rel=None):
        return [dict(link) for link in self._links if rel is None or link.get('rel') == rel]

    @property
    def canonical(self):
        for link in self._links:
            if link.get('rel') == 'canonical':
                return link.get('href')
        return None

    def set_canonical(self, url):
        self.remove_links(rel='canonical')
        if url:
            self.add_link(rel='canonical', href=url)

    def set_alternates(self, alternates):
        """Replace every hreflang alternate link."""
        self.remove_links(rel='alternate', hreflang=True)
        for hreflang, href in alternates:
            self.add_link(rel='alternate', hreflang=hreflang, href=href)

    # --- STRUCTURED DATA ---

    def set_schema(self, group, data):
        self._schemas[group] = data

    def remove_schema(self, group):
        self._schemas.pop(group, None)

    def get_schema(self, group):
        return self._schemas.get(group)

    @property
    def schemas(self):
        return list(self._schemas.items())

    # --- APPLY / RENDER ---

    def apply(self, metadata):
        """Apply a page's metadata; last apply wins.

        Canonical and hreflang links are regenerated from scratch. Managed
        schema groups not present in ``metadata`` are dropped.
        """
        self.language = metadata.language
        if metadata.title:
            self.title = metadata.title
        for attribute, value, content in metadata.meta_tags:
            self.update_meta_tag(attribute, value, content)
        self.set_canonical(metadata.canonical)
        self.set_alternates(metadata.alternates)
        for group in SCHEMA_GROUPS:
            if group in metadata.schemas:
                self.set_schema(group, metadata.schemas[group])
            else:
                self.remove_schema(group)

    def render(self):
        """Render the managed head elements as HTML."""
        return Markup(_env.get_template('head.html').render(head=self))


def render_page(head, language):
    """Render the single-page shell with ``head`` injected."""
    return _env.get_template('index.html').render(head=head.render(), lang=language)


def inject_head(html, head):
    """Insert ``head`` into an existing HTML page, replacing its <title>."""
    start = html.find('<title>')
    end = html.find('</title>', start)
    if start != -1 and end != -1:
        html = html[:start] + html[end + len('</title>'):]
    marker = html.find('</head>')
    if marker == -1:
        return html
    return html[:marker] + str(head.render()) + html[marker:]
