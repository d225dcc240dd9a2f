"""
Wiring of the generic loader to the orders and customers collections
"""

import asyncio
from dataclasses import replace
from typing import Any, Callable, Dict, List, TypeVar

from shop_lister.config_loader import AppConfig, ResourceConfig
from shop_lister.credential_provider import CredentialProvider, Credentials
from shop_lister.list_loader import PageFetcher, PaginatedListLoader
from shop_lister.models import Customer, Order
from shop_lister.pagination_strategy import PageRequest
from shop_lister.remote_source import RemoteListSource


T = TypeVar('T')


def make_page_fetcher(credential_provider: CredentialProvider, remote_source: RemoteListSource,
                      resource: ResourceConfig,
                      parse: Callable[[Dict[str, Any]], T]) -> PageFetcher:
    """
    Build the "fetch one page" capability for a resource

    Credentials are read fresh for every page, so settings changed between
    pages take effect on the next request. The blocking HTTP call runs in a
    worker thread on its own copy of the credentials, cleared by that thread
    once the request is done.
    """
    def fetch_records(request_credentials: Credentials, page_request: PageRequest) -> List[Dict[str, Any]]:
        try:
            return remote_source.fetch_page(
                request_credentials.base_url,
                request_credentials,
                resource.path,
                page_request,
                resource.filter_param
            )
        finally:
            request_credentials.clear()

    async def fetch_page(page_request: PageRequest) -> List[T]:
        with credential_provider.acquire() as credentials:
            records = await asyncio.to_thread(fetch_records, replace(credentials), page_request)
        return [parse(record) for record in records]

    return fetch_page


def create_order_loader(config: AppConfig, credential_provider: CredentialProvider,
                        remote_source: RemoteListSource) -> PaginatedListLoader[Order]:
    fetch_page = make_page_fetcher(
        credential_provider, remote_source, config.get_resource('orders'), Order.from_payload
    )
    return PaginatedListLoader(fetch_page, lambda order: order.id, config.page_size, name="orders")


def create_customer_loader(config: AppConfig, credential_provider: CredentialProvider,
                           remote_source: RemoteListSource) -> PaginatedListLoader[Customer]:
    fetch_page = make_page_fetcher(
        credential_provider, remote_source, config.get_resource('customers'), Customer.from_payload
    )
    return PaginatedListLoader(fetch_page, lambda customer: customer.id, config.page_size, name="customers")
