# src/search/client_factory.py — v1
"""Factory: instantiate the signed search client from configuration."""

from __future__ import annotations

from relocator.config.settings import Settings
from relocator.search.client import BaseSearchClient, HttpSearchClient
from relocator.search.signing import RequestSigner


def create_search_client(settings: Settings) -> BaseSearchClient:
    """Create an HTTP search client signing requests for the configured region.

    Raises:
        ConfigurationError: If ELASTICSEARCH_ENDPOINT or INDEX_NAME is unset.
    """
    settings.require_search()
    return HttpSearchClient(
        base_url=settings.search_base_url,
        index=settings.index_name,
        signer=RequestSigner(settings.region, settings.search_service),
        timeout=settings.search_timeout_s,
    )
