"""
Shared lookups and input checks for inventory services.

Every lookup here filters by tenant. Rows owned by another tenant are
reported exactly like missing rows.
"""

from decimal import Decimal, InvalidOperation

from storeman.exceptions import NotFoundError, ValidationError
from storeman.models.product import Product, Variant
from storeman.models.purchase_order import PurchaseOrder
from storeman.models.supplier import Supplier


def check_quantity(quantity, code: str = 'INVALID_QUANTITY', **context) -> int:
    """Require a positive int (bools are rejected)."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(code, requested=quantity, **context)
    return quantity


def check_id(value, field: str = 'id') -> int:
    """Require an integer primary key (digit strings from URLs are accepted)."""
    if isinstance(value, bool):
        raise ValidationError('INVALID_ID', field=field, value=value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError('INVALID_ID', field=field, value=value)


def check_price(price) -> Decimal:
    """Require a non-negative decimal-compatible value."""
    try:
        value = Decimal(str(price))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError('INVALID_PRICE', price=price)
    if not value.is_finite() or value < 0:
        raise ValidationError('INVALID_PRICE', price=price)
    return value


def get_product(tenant_id, product_id) -> Product:
    try:
        return Product.objects.for_tenant(tenant_id).get(pk=check_id(product_id, 'product_id'))
    except Product.DoesNotExist:
        raise NotFoundError('PRODUCT_NOT_FOUND', product_id=product_id)


def get_variant(tenant_id, product_id, variant_id, for_update: bool = False) -> Variant:
    """Variant of a tenant's product; optionally row-locked (inside atomic)."""
    qs = Variant.objects.select_related('product')
    if for_update:
        qs = qs.select_for_update(of=('self',))
    try:
        return qs.get(
            pk=check_id(variant_id, 'variant_id'),
            product_id=check_id(product_id, 'product_id'),
            product__tenant_id=tenant_id,
        )
    except Variant.DoesNotExist:
        raise NotFoundError('VARIANT_NOT_FOUND', product_id=product_id, variant_id=variant_id)


def get_supplier(tenant_id, supplier_id) -> Supplier:
    try:
        return Supplier.objects.get(pk=check_id(supplier_id, 'supplier_id'), tenant_id=tenant_id)
    except Supplier.DoesNotExist:
        raise NotFoundError('SUPPLIER_NOT_FOUND', supplier_id=supplier_id)


def get_purchase_order(tenant_id, po_id, for_update: bool = False) -> PurchaseOrder:
    qs = PurchaseOrder.objects.all()
    if for_update:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=check_id(po_id, 'po_id'), tenant_id=tenant_id)
    except PurchaseOrder.DoesNotExist:
        raise NotFoundError('PURCHASE_ORDER_NOT_FOUND', po_id=po_id)
