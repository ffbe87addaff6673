"""
Suppliers — vendor directory of a tenant.
"""

from storeman.exceptions import ValidationError
from storeman.models.supplier import Supplier
from storeman.models.tenant import Tenant
from storeman.services.base import get_supplier


class Suppliers:
    """Supplier directory methods."""

    @classmethod
    def create_supplier(cls, tenant_id, name: str, email: str = '', phone: str = '',
                        address: str = '') -> Supplier:
        """Create a supplier for the tenant."""
        if not Tenant.objects.filter(pk=tenant_id).exists():
            raise ValidationError('INVALID_TENANT', tenant_id=tenant_id)
        if not name:
            raise ValidationError('INVALID_FIELD', field='name')

        return Supplier.objects.create(
            tenant_id=tenant_id,
            name=name,
            email=email,
            phone=phone,
            address=address,
        )

    @classmethod
    def get_supplier(cls, tenant_id, supplier_id) -> Supplier:
        return get_supplier(tenant_id, supplier_id)

    @classmethod
    def list_suppliers(cls, tenant_id):
        return Supplier.objects.filter(tenant_id=tenant_id)
