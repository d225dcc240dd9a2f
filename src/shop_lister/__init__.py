"""
Paginated listing of orders and customers from a WooCommerce-style REST API
Provides a generic incremental list loader plus the settings, credential and HTTP layers it needs
"""

from .config_loader import AppConfig, ConfigLoader, ConfigurationError, ResourceConfig
from .database_manager import DatabaseManager, DatabaseConnectionError
from .settings_store import SettingsStore, open_settings_store
from .credential_provider import CredentialProvider, Credentials, NotConfiguredError
from .http_client import HTTPClient, FetchError, APIRequest, APIResponse
from .payload_validator import PayloadValidator
from .pagination_strategy import PageBasedPagination, PageRequest
from .remote_source import RemoteListSource
from .models import Customer, Order
from .list_loader import LoaderSnapshot, LoaderState, PaginatedListLoader
from .loader_factory import create_customer_loader, create_order_loader, make_page_fetcher

__all__ = [
    'AppConfig',
    'ConfigLoader',
    'ConfigurationError',
    'ResourceConfig',
    'DatabaseManager',
    'DatabaseConnectionError',
    'SettingsStore',
    'open_settings_store',
    'CredentialProvider',
    'Credentials',
    'NotConfiguredError',
    'HTTPClient',
    'FetchError',
    'APIRequest',
    'APIResponse',
    'PayloadValidator',
    'PageBasedPagination',
    'PageRequest',
    'RemoteListSource',
    'Customer',
    'Order',
    'LoaderSnapshot',
    'LoaderState',
    'PaginatedListLoader',
    'create_customer_loader',
    'create_order_loader',
    'make_page_fetcher'
]
