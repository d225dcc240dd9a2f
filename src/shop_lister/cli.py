"""
Command line front-end for listing orders and customers

shop-lister settings set --url https://shop.example.com --key ck_xxx --secret cs_xxx
shop-lister orders
shop-lister customers --email jane@example.com --all
"""

import sys
import asyncio
import logging
import argparse
import traceback
from pathlib import Path
from typing import Callable, Optional

from shop_lister.config_loader import AppConfig, ConfigLoader, ConfigurationError
from shop_lister.credential_provider import CredentialProvider, NotConfiguredError
from shop_lister.database_manager import DatabaseManager, DatabaseConnectionError
from shop_lister.http_client import HTTPClient
from shop_lister.list_loader import PaginatedListLoader
from shop_lister.loader_factory import create_customer_loader, create_order_loader
from shop_lister.presentation import (
    ListView, NO_CUSTOMERS_MESSAGE, NO_ORDERS_MESSAGE, format_customer, format_order
)
from shop_lister.remote_source import RemoteListSource
from shop_lister.settings_store import (
    API_KEY_KEY, API_SECRET_KEY, ENDPOINT_URL_KEY, SettingsStore, open_settings_store
)


CONNECTION_OK_MESSAGE = "Connection successful! The API is accessible."
CONNECTION_FAILED_MESSAGE = (
    "Connection failed. Please check your settings and ensure the API is enabled and accessible."
)

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig, verbose: bool = False) -> None:
    """
    Configure root logging from the [logging] section

    Console output goes to stderr so listings on stdout stay clean.
    """
    level_name = "DEBUG" if verbose else str(config.logging.get('level', 'WARNING')).upper()
    handlers = [logging.StreamHandler(sys.stderr)]

    log_file_name = config.logging.get('log_file_name')
    if log_file_name:
        log_path = Path(config.logging.get('log_directory', 'logs')) / log_file_name
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def _confirm(prompt: Callable[[str], str], question: str) -> bool:
    try:
        answer = prompt(question)
    except EOFError:
        return False
    return answer.strip().lower() in ('y', 'yes')


async def run_listing(loader: PaginatedListLoader, view: ListView, filter: Optional[str] = None,
                      load_all: bool = False, prompt: Callable[[str], str] = input,
                      empty_message: Optional[str] = None) -> int:
    """
    Drive a loader from the terminal until the user stops or the list ends

    Args:
        loader: Loader for the resource being listed
        view: Incremental renderer
        filter: Optional filter for the query
        load_all: Keep loading without asking
        prompt: Function used to ask the user
        empty_message: Printed when the finished listing holds no items

    Returns:
        0 when the listing ended normally, 1 when it stopped on an error
    """
    view.show_title()
    view.restart()
    view.show_loading(1)
    try:
        return await _drive(loader, view, filter, load_all, prompt, empty_message)
    finally:
        loader.close()


async def _drive(loader: PaginatedListLoader, view: ListView, filter: Optional[str],
                 load_all: bool, prompt: Callable[[str], str], empty_message: Optional[str]) -> int:
    await loader.reset(filter)

    while True:
        snapshot = loader.state
        view.render(snapshot)

        if snapshot.error:
            if load_all or not _confirm(prompt, "Retry? [y/N] "):
                return 1
            view.show_loading(snapshot.current_page)
            await loader.retry()
            continue

        if not snapshot.has_more:
            break

        view.summary(snapshot)
        if not load_all and not _confirm(prompt, "Load more? [y/N] "):
            break

        view.show_loading(snapshot.current_page + 1)
        await loader.load_more()

    snapshot = loader.state
    if not snapshot.items and empty_message:
        view.output(empty_message)
    elif not snapshot.has_more:
        view.summary(snapshot)
    return 0


def _mask(value: Optional[str]) -> str:
    if not value:
        return "(not set)"
    if len(value) <= 4:
        return "*" * len(value)
    return f"{value[:4]}{'*' * (len(value) - 4)}"


def handle_settings(args: argparse.Namespace, store: SettingsStore) -> int:
    if args.settings_command == 'set':
        values = {
            ENDPOINT_URL_KEY: args.url,
            API_KEY_KEY: args.key,
            API_SECRET_KEY: args.secret
        }
        if all(value is None for value in values.values()):
            print("Nothing to save: pass at least one of --url, --key, --secret")
            return 1
        store.save(values)
        print("Settings saved successfully!")
        return 0

    if args.settings_command == 'show':
        stored = store.get_all()
        print(f"Endpoint URL: {stored.get(ENDPOINT_URL_KEY) or '(not set)'}")
        print(f"API key: {stored.get(API_KEY_KEY) or '(not set)'}")
        print(f"API secret: {_mask(stored.get(API_SECRET_KEY))}")
        return 0

    if args.settings_command == 'clear':
        store.clear()
        print("Settings cleared.")
        return 0

    print("Choose one of: set, show, clear")
    return 1


def handle_test_connection(config: AppConfig, provider: CredentialProvider,
                           remote_source: RemoteListSource) -> int:
    try:
        with provider.acquire() as credentials:
            ok = remote_source.check_connection(credentials, config.connection_test_path)
    except NotConfiguredError as e:
        print(str(e))
        return 1

    print(CONNECTION_OK_MESSAGE if ok else CONNECTION_FAILED_MESSAGE)
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shop-lister",
        description="List orders and customers from a WooCommerce-style REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Store the endpoint and credentials
  shop-lister settings set --url https://shop.example.com --key ck_123 --secret cs_456

  # Check the stored settings work
  shop-lister test-connection

  # Browse orders, 20 at a time
  shop-lister orders

  # Every customer matching an email
  shop-lister customers --email jane@example.com --all
        """
    )

    parser.add_argument("--config", help="Path to TOML configuration file")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command")

    settings_parser = subparsers.add_parser("settings", help="Manage the stored endpoint and credentials")
    settings_sub = settings_parser.add_subparsers(dest="settings_command")
    set_parser = settings_sub.add_parser("set", help="Save one or more settings")
    set_parser.add_argument("--url", help="API base URL")
    set_parser.add_argument("--key", help="API consumer key (Basic Auth username)")
    set_parser.add_argument("--secret", help="API consumer secret (Basic Auth password)")
    settings_sub.add_parser("show", help="Show stored settings with the secret masked")
    settings_sub.add_parser("clear", help="Remove stored settings")

    subparsers.add_parser("test-connection", help="Check the API accepts the stored settings")

    orders_parser = subparsers.add_parser("orders", help="List orders")
    orders_parser.add_argument("--all", action="store_true", help="Load every page without prompting")

    customers_parser = subparsers.add_parser("customers", help="List or search customers")
    customers_parser.add_argument("--email", default="", help="Only customers with this email")
    customers_parser.add_argument("--all", action="store_true", help="Load every page without prompting")

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main execution function"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = ConfigLoader.load_toml_config(Path(args.config)) if args.config else ConfigLoader.default_config()
    except (FileNotFoundError, ConfigurationError) as e:
        print(f"Configuration error: {e}")
        return 1

    configure_logging(config, args.verbose)

    db_manager = DatabaseManager()
    http_client = HTTPClient(timeout=config.timeout_seconds)

    try:
        store = open_settings_store(db_manager, Path(config.database_path))
    except DatabaseConnectionError as e:
        print(f"Could not open settings database: {e}")
        return 1

    try:
        if args.command == 'settings':
            return handle_settings(args, store)

        provider = CredentialProvider(store, config.api_key_env, config.api_secret_env)
        remote_source = RemoteListSource(http_client)

        if args.command == 'test-connection':
            return handle_test_connection(config, provider, remote_source)

        if args.command == 'orders':
            loader = create_order_loader(config, provider, remote_source)
            view = ListView("All Orders", format_order)
            return asyncio.run(run_listing(
                loader, view, load_all=args.all, empty_message=NO_ORDERS_MESSAGE
            ))

        if args.command == 'customers':
            loader = create_customer_loader(config, provider, remote_source)
            view = ListView("User Search", format_customer)
            return asyncio.run(run_listing(
                loader, view, filter=args.email, load_all=args.all, empty_message=NO_CUSTOMERS_MESSAGE
            ))

        parser.print_help()
        return 1

    except KeyboardInterrupt:
        return 130
    except Exception as e:
        print(f"\nExecution failed: {e}")
        if args.verbose:
            print(f"Traceback: {traceback.format_exc()}")
        return 1
    finally:
        http_client.close_connection()
        db_manager.close()


if __name__ == "__main__":
    sys.exit(main())
