"""
Test suite for ConfigLoader component
Following TDD approach with AAA pattern and descriptive naming
"""

import pytest
import tempfile
from pathlib import Path
from shop_lister.config_loader import (
    ConfigLoader, AppConfig, ResourceConfig, ConfigurationError, DEFAULT_PAGE_SIZE
)


VALID_TOML = """
[api]
name = "woocommerce"
connection_test_path = "wp-json/wc/v3/system_status"

[resources.orders]
path = "wp-json/wc/v3/orders"

[resources.customers]
path = "wp-json/wc/v3/customers"
filter_param = "email"

[pagination]
page_size = 20

[http]
timeout_seconds = 12

[settings]
database_path = "tmp/settings.db"
api_key_env = "MY_KEY"
api_secret_env = "MY_SECRET"

[logging]
level = "INFO"
log_file_name = "lister.log"
"""


def write_config(content: str) -> Path:
    with tempfile.NamedTemporaryFile(mode='w', suffix='.toml', delete=False) as f:
        f.write(content)
        return Path(f.name)


class TestConfigLoader:
    """Test suite for ConfigLoader TOML configuration loading functionality"""

    def test_load_toml_config_with_valid_file_returns_app_config(self):
        """
        Test that loading a valid TOML file returns properly populated AppConfig
        """
        # Arrange
        config_path = write_config(VALID_TOML)

        try:
            # Act
            result = ConfigLoader.load_toml_config(config_path)

            # Assert
            assert isinstance(result, AppConfig)
            assert result.name == "woocommerce"
            assert result.page_size == 20
            assert result.timeout_seconds == 12.0
            assert result.database_path == "tmp/settings.db"
            assert result.api_key_env == "MY_KEY"
            assert result.api_secret_env == "MY_SECRET"
            assert result.logging == {'level': 'INFO', 'log_file_name': 'lister.log'}
        finally:
            config_path.unlink()

    def test_load_toml_config_builds_resource_definitions(self):
        """
        Test that resources carry their path and optional filter parameter
        """
        # Arrange
        config_path = write_config(VALID_TOML)

        try:
            # Act
            result = ConfigLoader.load_toml_config(config_path)

            # Assert
            assert result.get_resource('orders') == ResourceConfig(
                name='orders', path="wp-json/wc/v3/orders", filter_param=None
            )
            assert result.get_resource('customers').filter_param == "email"
        finally:
            config_path.unlink()

    def test_load_toml_config_with_missing_file_raises_file_not_found_error(self):
        """
        Test that a missing configuration file raises FileNotFoundError
        """
        # Arrange
        missing_path = Path("/nonexistent/config.toml")

        # Act & Assert
        with pytest.raises(FileNotFoundError) as exc_info:
            ConfigLoader.load_toml_config(missing_path)

        assert "Configuration file not found" in str(exc_info.value)

    def test_load_toml_config_with_invalid_syntax_raises_configuration_error(self):
        """
        Test that malformed TOML raises ConfigurationError
        """
        # Arrange
        config_path = write_config("[api\nname = ")

        try:
            # Act & Assert
            with pytest.raises(ConfigurationError) as exc_info:
                ConfigLoader.load_toml_config(config_path)

            assert "Invalid TOML syntax" in str(exc_info.value)
        finally:
            config_path.unlink()

    def test_load_toml_config_with_missing_sections_lists_every_missing_item(self):
        """
        Test that all missing sections and keys are reported together
        """
        # Arrange
        incomplete_toml = """
        [api]
        name = "woocommerce"

        [resources.orders]
        path = "wp-json/wc/v3/orders"
        """
        config_path = write_config(incomplete_toml)

        try:
            # Act & Assert
            with pytest.raises(ConfigurationError) as exc_info:
                ConfigLoader.load_toml_config(config_path)

            message = str(exc_info.value)
            assert "Key 'customers' in section [resources]" in message
            assert "Section [pagination]" in message
        finally:
            config_path.unlink()

    def test_load_toml_config_with_resource_missing_path_raises_configuration_error(self):
        """
        Test that every resource must declare a path
        """
        # Arrange
        toml_content = """
        [api]
        name = "woocommerce"

        [resources.orders]
        path = "wp-json/wc/v3/orders"

        [resources.customers]
        filter_param = "email"

        [pagination]
        page_size = 20
        """
        config_path = write_config(toml_content)

        try:
            # Act & Assert
            with pytest.raises(ConfigurationError) as exc_info:
                ConfigLoader.load_toml_config(config_path)

            assert "Key 'path' in section [resources.customers]" in str(exc_info.value)
        finally:
            config_path.unlink()

    @pytest.mark.parametrize("page_size", [0, -5, "twenty"])
    def test_load_toml_config_with_invalid_page_size_raises_configuration_error(self, page_size):
        """
        Test that page_size must be a positive integer
        """
        # Arrange
        value = f'"{page_size}"' if isinstance(page_size, str) else page_size
        config_path = write_config(VALID_TOML.replace("page_size = 20", f"page_size = {value}"))

        try:
            # Act & Assert
            with pytest.raises(ConfigurationError) as exc_info:
                ConfigLoader.load_toml_config(config_path)

            assert "page_size must be a positive integer" in str(exc_info.value)
        finally:
            config_path.unlink()

    def test_default_config_describes_orders_and_customers(self):
        """
        Test that the built-in configuration targets the standard collections
        """
        # Act
        result = ConfigLoader.default_config()

        # Assert
        assert result.page_size == DEFAULT_PAGE_SIZE == 20
        assert result.get_resource('orders').path == "wp-json/wc/v3/orders"
        assert result.get_resource('orders').filter_param is None
        assert result.get_resource('customers').path == "wp-json/wc/v3/customers"
        assert result.get_resource('customers').filter_param == "email"

    def test_get_resource_with_unknown_name_raises_configuration_error(self):
        """
        Test that asking for an unconfigured resource fails clearly
        """
        # Arrange
        config = ConfigLoader.default_config()

        # Act & Assert
        with pytest.raises(ConfigurationError) as exc_info:
            config.get_resource('products')

        assert "Resource 'products' is not configured" in str(exc_info.value)
