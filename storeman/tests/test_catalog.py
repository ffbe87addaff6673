"""
Tests for catalog, suppliers, tenancy and error envelopes.
"""

from decimal import Decimal

import pytest
from django.test import override_settings

from storeman import inventory
from storeman.exceptions import (
    InsufficientStockError,
    NotFoundError,
    OverReceiveError,
    StoremanError,
    ValidationError,
)
from storeman.models import Member, Product, Role, Variant


pytestmark = pytest.mark.django_db


class TestCreateProduct:
    """Tests for inventory.create_product()."""

    def test_creates_product_with_variants(self, tenant):
        product = inventory.create_product(tenant.pk, 'Calça Jeans', [
            {'sku': 'CAL-38', 'price': '89.90', 'stock': 4, 'attributes': {'tamanho': 38}},
            {'sku': 'CAL-40', 'price': Decimal('89.90'), 'low_stock_threshold': 2},
        ])

        variants = list(product.variants.all())
        assert [v.sku for v in variants] == ['CAL-38', 'CAL-40']
        assert variants[0].attributes == {'tamanho': '38'}
        assert variants[0].stock == 4
        assert variants[1].stock == 0
        assert variants[0].low_stock_threshold == 5
        assert variants[1].low_stock_threshold == 2

    @override_settings(STOREMAN={'DEFAULT_LOW_STOCK_THRESHOLD': 8})
    def test_default_threshold_from_settings(self, tenant):
        product = inventory.create_product(tenant.pk, 'Lenço', [{'sku': 'LEN-01', 'price': 1}])

        assert product.variants.get().low_stock_threshold == 8

    def test_empty_variants_rejected(self, tenant):
        with pytest.raises(ValidationError) as exc:
            inventory.create_product(tenant.pk, 'Vazio', [])

        assert exc.value.code == 'EMPTY_VARIANTS'
        assert not Product.objects.exists()

    def test_duplicate_sku_rejected(self, tenant):
        with pytest.raises(ValidationError) as exc:
            inventory.create_product(tenant.pk, 'Meia', [
                {'sku': 'MEI-01', 'price': 2},
                {'sku': 'MEI-01', 'price': 3},
            ])

        assert exc.value.code == 'DUPLICATE_SKU'
        assert not Product.objects.exists()

    def test_same_sku_in_different_products(self, tenant, product):
        other = inventory.create_product(tenant.pk, 'Camiseta Gola V', [{'sku': 'CAM-M-AZ', 'price': 6}])

        assert Variant.objects.filter(sku='CAM-M-AZ').count() == 2
        assert other.pk != product.pk

    def test_unknown_tenant_rejected(self, db):
        with pytest.raises(ValidationError) as exc:
            inventory.create_product(999999, 'Órfão', [{'sku': 'X', 'price': 1}])

        assert exc.value.code == 'INVALID_TENANT'

    @pytest.mark.parametrize('data', [
        {'sku': '', 'price': 1},
        {'sku': 'X', 'price': -1},
        {'sku': 'X', 'price': 1, 'stock': -2},
        {'sku': 'X', 'price': 1, 'attributes': ['azul']},
    ])
    def test_invalid_variant_rejected(self, tenant, data):
        with pytest.raises(ValidationError):
            inventory.create_product(tenant.pk, 'Inválido', [data])

        assert not Product.objects.exists()


class TestReadProducts:

    def test_get_product_of_other_tenant_not_found(self, tenant, foreign_product):
        with pytest.raises(NotFoundError) as exc:
            inventory.get_product(tenant.pk, foreign_product.pk)

        assert exc.value.code == 'PRODUCT_NOT_FOUND'
        assert exc.value.status_code == 404

    @pytest.mark.parametrize('product_id', ['abc', None, True])
    def test_get_product_malformed_id(self, tenant, product_id):
        with pytest.raises(ValidationError) as exc:
            inventory.get_product(tenant.pk, product_id)

        assert exc.value.code == 'INVALID_ID'
        assert exc.value.status_code == 400

    def test_get_product_loads_variants(self, tenant, product):
        fetched = inventory.get_product(tenant.pk, product.pk)

        assert [v.sku for v in fetched.variants.all()] == ['CAM-M-AZ']

    def test_pagination(self, tenant, foreign_product):
        for i in range(12):
            inventory.create_product(tenant.pk, f'Produto {i}', [{'sku': f'P-{i}', 'price': 1}])

        first = inventory.list_products(tenant.pk)
        assert first.total == 12
        assert first.total_pages == 2
        assert len(first.products) == 10
        assert first.products[0].name == 'Produto 11'

        last = inventory.list_products(tenant.pk, page=2)
        assert [p.name for p in last.products] == ['Produto 1', 'Produto 0']

        beyond = inventory.list_products(tenant.pk, page=3)
        assert beyond.products == []
        assert beyond.total == 12

    def test_page_size_capped(self, tenant, product):
        page = inventory.list_products(tenant.pk, limit=10_000)

        assert page.total_pages == 1

    def test_empty_listing(self, tenant):
        page = inventory.list_products(tenant.pk)

        assert (page.total, page.total_pages, page.products) == (0, 0, [])

    @pytest.mark.parametrize('page', [0, -1, '2'])
    def test_invalid_page(self, tenant, page):
        with pytest.raises(ValidationError) as exc:
            inventory.list_products(tenant.pk, page=page)

        assert exc.value.code == 'INVALID_PAGE'


class TestEditCatalog:

    def test_update_product(self, tenant, product):
        updated = inventory.update_product(tenant.pk, product.pk, name='Camiseta Premium')

        assert updated.name == 'Camiseta Premium'
        product.refresh_from_db()
        assert product.category == 'Vestuário'

    def test_update_product_rejects_tenant_change(self, tenant, other_tenant, product):
        with pytest.raises(ValidationError) as exc:
            inventory.update_product(tenant.pk, product.pk, tenant=other_tenant.pk)

        assert exc.value.code == 'INVALID_FIELD'
        product.refresh_from_db()
        assert product.tenant_id == tenant.pk

    def test_update_foreign_product_not_found(self, tenant, foreign_product):
        with pytest.raises(NotFoundError):
            inventory.update_product(tenant.pk, foreign_product.pk, name='Roubado')

    def test_update_variant(self, tenant, product, variant):
        updated = inventory.update_variant(
            tenant.pk, product.pk, variant.pk, price='7.25', attributes={'cor': 'verde'}
        )

        assert updated.price == Decimal('7.25')
        assert updated.attributes == {'cor': 'verde'}

    def test_stock_not_editable_through_catalog(self, tenant, product, variant):
        with pytest.raises(ValidationError):
            inventory.update_variant(tenant.pk, product.pk, variant.pk, stock=999)

        variant.refresh_from_db()
        assert variant.stock == 10

    def test_add_variant_duplicate_sku(self, tenant, product):
        with pytest.raises(ValidationError) as exc:
            inventory.add_variant(tenant.pk, product.pk, 'CAM-M-AZ', 5)

        assert exc.value.code == 'DUPLICATE_SKU'

    def test_last_variant_cannot_be_deleted(self, product, variant):
        with pytest.raises(ValueError):
            variant.delete()

        assert product.variants.count() == 1


class TestSuppliers:

    def test_create_and_list(self, tenant, other_tenant, supplier):
        inventory.create_supplier(other_tenant.pk, 'Fornecedor Beta')

        assert list(inventory.list_suppliers(tenant.pk)) == [supplier]
        assert inventory.get_supplier(tenant.pk, supplier.pk).email == 'contato@textil.com.br'

    def test_foreign_supplier_not_found(self, other_tenant, supplier):
        with pytest.raises(NotFoundError) as exc:
            inventory.get_supplier(other_tenant.pk, supplier.pk)

        assert exc.value.code == 'SUPPLIER_NOT_FOUND'

    def test_name_required(self, tenant):
        with pytest.raises(ValidationError) as exc:
            inventory.create_supplier(tenant.pk, '')

        assert exc.value.code == 'INVALID_FIELD'


class TestMembers:

    @pytest.mark.parametrize('role,expected', [
        (Role.OWNER, True),
        (Role.MANAGER, True),
        (Role.STAFF, False),
    ])
    def test_can_manage(self, tenant, user, role, expected):
        member = Member.objects.create(user=user, tenant=tenant, role=role)

        assert member.can_manage is expected


class TestErrors:

    def test_as_dict_envelope(self):
        error = OverReceiveError(requested=25, remaining=20, po_id=1)

        assert error.status_code == 409
        assert error.as_dict() == {
            'success': False,
            'code': 'OVER_RECEIVE',
            'message': 'Recebendo mais do que o pedido',
            'data': {'requested': 25, 'remaining': 20, 'po_id': 1},
        }

    def test_decimal_data_serialized_as_string(self):
        error = ValidationError('INVALID_PRICE', price=Decimal('-1.50'))

        assert error.as_dict()['data'] == {'price': '-1.50'}

    def test_hierarchy(self):
        assert issubclass(InsufficientStockError, StoremanError)
        assert InsufficientStockError().code == 'INSUFFICIENT_STOCK'
        assert str(NotFoundError('VARIANT_NOT_FOUND')) == 'Variante não encontrada'
