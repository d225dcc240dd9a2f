"""
ConfigLoader module for loading and validating TOML configuration files
"""

import tomllib
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, Optional


DEFAULT_PAGE_SIZE = 20
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_DATABASE_PATH = "data/shop_lister_settings.db"
DEFAULT_API_KEY_ENV = "SHOP_LISTER_API_KEY"
DEFAULT_API_SECRET_ENV = "SHOP_LISTER_API_SECRET"


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete"""
    pass


@dataclass
class ResourceConfig:
    """A remote collection that can be listed page by page"""
    name: str
    path: str
    filter_param: Optional[str] = None


@dataclass
class AppConfig:
    """Configuration data class for the lister from TOML file"""
    name: str
    resources: Dict[str, ResourceConfig]
    page_size: int = DEFAULT_PAGE_SIZE
    connection_test_path: str = "wp-json/wc/v3/system_status"
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    database_path: str = DEFAULT_DATABASE_PATH
    api_key_env: str = DEFAULT_API_KEY_ENV
    api_secret_env: str = DEFAULT_API_SECRET_ENV
    logging: Dict[str, Any] = field(default_factory=dict)

    def get_resource(self, name: str) -> ResourceConfig:
        """Return the named resource or raise ConfigurationError"""
        if name not in self.resources:
            raise ConfigurationError(f"Resource '{name}' is not configured")
        return self.resources[name]


class ConfigLoader:
    """Loads and validates TOML configuration files"""

    # Required configuration sections and their mandatory keys
    REQUIRED_SECTIONS = {
        'api': ['name'],
        'resources': ['orders', 'customers'],
        'pagination': ['page_size']
    }

    @staticmethod
    def load_toml_config(config_path: Path) -> AppConfig:
        """
        Load lister configuration from TOML file

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            AppConfig object with all configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the file is not valid TOML or required configuration is missing
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'rb') as f:
                config_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {config_path}: {e}")

        ConfigLoader._validate_required_sections(config_data)

        return ConfigLoader._build_config(config_data)

    @staticmethod
    def default_config() -> AppConfig:
        """
        Built-in configuration for a standard WooCommerce REST API

        Returns:
            AppConfig with the orders and customers collections
        """
        return AppConfig(
            name="woocommerce",
            resources={
                'orders': ResourceConfig(name='orders', path="wp-json/wc/v3/orders"),
                'customers': ResourceConfig(
                    name='customers',
                    path="wp-json/wc/v3/customers",
                    filter_param="email"
                )
            }
        )

    @staticmethod
    def _validate_required_sections(config_data: Dict[str, Any]) -> None:
        """
        Validate that all required configuration sections and keys are present

        Args:
            config_data: Parsed TOML configuration data

        Raises:
            ConfigurationError: If any required section or key is missing
        """
        missing_items = []

        for section_name, required_keys in ConfigLoader.REQUIRED_SECTIONS.items():
            if section_name not in config_data:
                missing_items.append(f"Section [{section_name}]")
            else:
                section_data = config_data[section_name]
                for key in required_keys:
                    if key not in section_data:
                        missing_items.append(f"Key '{key}' in section [{section_name}]")

        # Every resource needs a path to request
        for resource_name, resource_data in config_data.get('resources', {}).items():
            if not isinstance(resource_data, dict) or 'path' not in resource_data:
                missing_items.append(f"Key 'path' in section [resources.{resource_name}]")

        if missing_items:
            raise ConfigurationError(
                f"Missing required configuration items: {', '.join(missing_items)}"
            )

    @staticmethod
    def _build_config(config_data: Dict[str, Any]) -> AppConfig:
        """Convert validated TOML data into an AppConfig"""
        resources = {
            name: ResourceConfig(
                name=name,
                path=data['path'],
                filter_param=data.get('filter_param')
            )
            for name, data in config_data['resources'].items()
        }

        page_size = config_data['pagination']['page_size']
        if not isinstance(page_size, int) or page_size < 1:
            raise ConfigurationError(f"page_size must be a positive integer, got {page_size!r}")

        api_section = config_data['api']
        http_section = config_data.get('http', {})
        settings_section = config_data.get('settings', {})

        return AppConfig(
            name=api_section['name'],
            resources=resources,
            page_size=page_size,
            connection_test_path=api_section.get('connection_test_path', "wp-json/wc/v3/system_status"),
            timeout_seconds=float(http_section.get('timeout_seconds', DEFAULT_TIMEOUT_SECONDS)),
            database_path=settings_section.get('database_path', DEFAULT_DATABASE_PATH),
            api_key_env=settings_section.get('api_key_env', DEFAULT_API_KEY_ENV),
            api_secret_env=settings_section.get('api_secret_env', DEFAULT_API_SECRET_ENV),
            logging=config_data.get('logging', {})
        )
