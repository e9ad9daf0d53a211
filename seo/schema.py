"""
schema.org structured data (JSON-LD) builders.

Each builder returns one JSON-LD object for a logical group; the head keeps
one script tag per group.
"""

SCHEMA_CONTEXT = 'https://schema.org'

# data-schema groups managed by the SEO applier
SCHEMA_GROUPS = ('organization', 'breadcrumb', 'faq', 'reviews')


def organization_schema(schema, site):
    """Organization with an offer catalog built from the service list."""
    return {
        '@context': SCHEMA_CONTEXT,
        '@type': 'Organization',
        'name': schema.organizationName or site['name'],
        'description': schema.organizationDescription,
        'url': site['base_url'],
        'logo': site['logo'],
        'email': site['email'],
        'areaServed': schema.serviceAreaServed,
        'priceRange': schema.priceRange,
        'hasOfferCatalog': {
            '@type': 'OfferCatalog',
            'name': 'Web Development Services',
            'itemListElement': [
                {
                    '@type': 'Offer',
                    'itemOffered': {'@type': 'Service', 'name': service},
                }
                for service in schema.services
            ],
        },
    }


def breadcrumb_schema(crumbs):
    """BreadcrumbList from [(name, url), ...] in display order."""
    return {
        '@context': SCHEMA_CONTEXT,
        '@type': 'BreadcrumbList',
        'itemListElement': [
            {
                '@type': 'ListItem',
                'position': index,
                'name': name,
                'item': url,
            }
            for index, (name, url) in enumerate(crumbs, start=1)
        ],
    }


def faq_schema(entries):
    return {
        '@context': SCHEMA_CONTEXT,
        '@type': 'FAQPage',
        'mainEntity': [
            {
                '@type': 'Question',
                'name': entry.question,
                'acceptedAnswer': {'@type': 'Answer', 'text': entry.answer},
            }
            for entry in entries
        ],
    }


def reviews_schema(reviews, organization_name):
    """Organization reviews with an aggregate rating."""
    ratings = [review.rating for review in reviews]
    return {
        '@context': SCHEMA_CONTEXT,
        '@type': 'Organization',
        'name': organization_name,
        'aggregateRating': {
            '@type': 'AggregateRating',
            'ratingValue': round(sum(ratings) / len(ratings), 1) if ratings else 0,
            'reviewCount': len(ratings),
            'bestRating': 5,
        },
        'review': [
            {
                '@type': 'Review',
                'author': {'@type': 'Person', 'name': review.author},
                'reviewRating': {'@type': 'Rating', 'ratingValue': review.rating, 'bestRating': 5},
                'reviewBody': review.body,
            }
            for review in reviews
        ],
    }
