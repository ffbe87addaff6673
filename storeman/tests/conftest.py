"""
Pytest fixtures for Storeman tests.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from storeman import inventory
from storeman.models import POStatus, Tenant


User = get_user_model()


@pytest.fixture
def tenant(db):
    """Tenant under test."""
    return Tenant.objects.create(name='Alpha Store')


@pytest.fixture
def other_tenant(db):
    """A second tenant, used for isolation checks."""
    return Tenant.objects.create(name='Beta Mart')


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        password='testpass123'
    )


@pytest.fixture
def product(tenant):
    """Product with one variant: stock 10, price 5.50, threshold 5."""
    return inventory.create_product(
        tenant.pk,
        'Camiseta Básica',
        [
            {
                'sku': 'CAM-M-AZ',
                'price': Decimal('5.50'),
                'stock': 10,
                'attributes': {'tamanho': 'M', 'cor': 'azul'},
            },
        ],
        category='Vestuário',
    )


@pytest.fixture
def variant(product):
    """The single variant of `product`."""
    return product.variants.get()


@pytest.fixture
def foreign_product(other_tenant):
    """Product owned by the other tenant."""
    return inventory.create_product(
        other_tenant.pk,
        'Caneca',
        [{'sku': 'CAN-01', 'price': Decimal('12.00'), 'stock': 50}],
    )


@pytest.fixture
def supplier(tenant):
    """Supplier of the tenant under test."""
    return inventory.create_supplier(
        tenant.pk,
        'Têxtil Paulista',
        email='contato@textil.com.br',
        phone='+55 11 4000-0000',
    )


@pytest.fixture
def make_order(tenant, supplier):
    """
    Factory for purchase orders of the tenant.

    make_order([(variant, ordered_qty), ...], status=POStatus.CONFIRMED)
    """
    def _make(lines, status=POStatus.CONFIRMED):
        order = inventory.create_purchase_order(
            tenant.pk,
            supplier.pk,
            [
                {
                    'product_id': v.product_id,
                    'variant_id': v.pk,
                    'ordered_qty': qty,
                    'price': Decimal('3.00'),
                }
                for v, qty in lines
            ],
        )
        if status in (POStatus.SENT, POStatus.CONFIRMED):
            inventory.send_purchase_order(tenant.pk, order.pk)
        if status == POStatus.CONFIRMED:
            inventory.confirm_purchase_order(tenant.pk, order.pk)
        order.refresh_from_db()
        return order

    return _make
