"""
Test suite for Order and Customer records
"""

from shop_lister.models import Customer, Order


class TestOrder:

    def test_from_payload_reads_display_fields(self):
        # Arrange
        payload = {
            'id': 42, 'number': '1042', 'status': 'completed', 'date_created': '2024-05-06T08:09:10',
            'total': '120.00', 'customer_id': 9, 'currency': 'EUR'
        }

        # Act
        order = Order.from_payload(payload)

        # Assert
        assert order.id == 42
        assert order.number == '1042'
        assert order.status == 'completed'
        assert order.total == '120.00'
        assert order.customer_id == 9
        assert order.raw['currency'] == 'EUR'

    def test_from_payload_with_sparse_record_uses_defaults(self):
        # Act
        order = Order.from_payload({'id': 5})

        # Assert
        assert order.number == '5'
        assert order.status == ''
        assert order.customer_id is None

    def test_equality_ignores_raw_payload(self):
        # Act & Assert
        assert Order.from_payload({'id': 1, 'extra': 'a'}) == Order.from_payload({'id': 1, 'extra': 'b'})


class TestCustomer:

    def test_from_payload_reads_display_fields(self):
        # Arrange
        payload = {'id': 3, 'email': 'jane@example.com', 'username': 'jane',
                   'first_name': 'Jane', 'last_name': 'Doe'}

        # Act
        customer = Customer.from_payload(payload)

        # Assert
        assert customer.id == 3
        assert customer.email == 'jane@example.com'
        assert customer.full_name == 'Jane Doe'

    def test_full_name_without_last_name_has_no_trailing_space(self):
        # Act & Assert
        assert Customer(id=1, first_name='Jane').full_name == 'Jane'
        assert Customer(id=2).full_name == ''
