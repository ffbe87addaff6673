"""
Tests for management commands and admin registration.
"""

import json
from io import StringIO

import pytest
from django.contrib import admin
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

from storeman import inventory
from storeman.models import Member, Product, PurchaseOrder, Role, StockMovement, Supplier, Tenant


pytestmark = pytest.mark.django_db


class TestLowStockReport:

    def test_text_output(self, tenant, product):
        inventory.create_product(tenant.pk, 'Meia', [{'sku': 'MEI-01', 'price': 2, 'stock': 1}])
        out = StringIO()

        call_command('low_stock_report', tenant=tenant.pk, stdout=out)

        output = out.getvalue()
        assert 'MEI-01 (Meia): estoque 1 + a receber 0 = 1 <= 5' in output
        assert 'CAM-M-AZ' not in output
        assert '1 variante(s) com estoque baixo' in output

    def test_json_output(self, tenant):
        inventory.create_product(tenant.pk, 'Meia', [{'sku': 'MEI-01', 'price': 2, 'stock': 1}])
        out = StringIO()

        call_command('low_stock_report', tenant=tenant.pk, json=True, stdout=out)

        data = json.loads(out.getvalue())
        assert len(data) == 1
        assert data[0]['sku'] == 'MEI-01'
        assert data[0]['effective_stock'] == 1

    def test_nothing_low(self, tenant, product):
        out = StringIO()

        call_command('low_stock_report', tenant=tenant.pk, stdout=out)

        assert 'Nenhuma variante com estoque baixo' in out.getvalue()

    def test_unknown_tenant(self, db):
        with pytest.raises(CommandError):
            call_command('low_stock_report', tenant=999999, stdout=StringIO())


class TestSeedTenants:

    def test_creates_tenants_and_members(self):
        call_command('seed_tenants', stdout=StringIO())

        assert set(Tenant.objects.values_list('name', flat=True)) == {'Alpha Store', 'Beta Mart'}
        owner = Member.objects.select_related('tenant').get(user__username='owner@alpha.com')
        assert owner.role == Role.OWNER
        assert owner.tenant.name == 'Alpha Store'
        assert owner.user.check_password('password123')

    def test_is_idempotent(self):
        call_command('seed_tenants', stdout=StringIO())
        call_command('seed_tenants', stdout=StringIO())

        assert Tenant.objects.count() == 2
        assert Member.objects.count() == 5
        assert get_user_model().objects.count() == 5


class TestAdminRegistry:

    @pytest.mark.parametrize('model', [Tenant, Product, Supplier, PurchaseOrder, StockMovement])
    def test_models_registered(self, model):
        assert admin.site.is_registered(model)

    def test_movement_admin_is_read_only(self, rf, admin_user):
        request = rf.get('/')
        request.user = admin_user
        model_admin = admin.site._registry[StockMovement]

        assert not model_admin.has_add_permission(request)
        assert not model_admin.has_change_permission(request)
        assert not model_admin.has_delete_permission(request)
