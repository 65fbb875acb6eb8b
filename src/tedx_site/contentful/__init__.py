"""Contentful API clients and query documents."""

from tedx_site.contentful.graphql import GraphQLClient
from tedx_site.contentful.http import ContentfulClient, ContentfulResponse
from tedx_site.contentful.queries import (
    EMBEDDED_VIDEOS,
    EVENT_BY_YEAR,
    EVENT_LIST,
    STATIC_IMAGES_BY_CODE,
    TEAM_BY_YEAR,
    ContentQuery,
)

__all__ = [
    # Queries
    "EMBEDDED_VIDEOS",
    "EVENT_BY_YEAR",
    "EVENT_LIST",
    "STATIC_IMAGES_BY_CODE",
    "TEAM_BY_YEAR",
    "ContentQuery",
    # HTTP Client
    "ContentfulClient",
    "ContentfulResponse",
    # GraphQL Client
    "GraphQLClient",
]
