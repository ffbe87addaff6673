"""
Django Storeman — Multi-tenant inventory core.

Products with variants, suppliers, purchase orders and an append-only
stock movement ledger, partitioned by tenant.

Uso:
    from storeman import inventory, StoremanError

    inventory.sell_variant(tenant.pk, product.pk, variant.pk, 2)
    inventory.receive_purchase_order(tenant.pk, po.pk, [{'variant_id': v.pk, 'receive_qty': 10}])
    inventory.low_stock(tenant.pk)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'inventory':
        from storeman.service import Inventory
        return Inventory
    elif name == 'StoremanError':
        from storeman.exceptions import StoremanError
        return StoremanError
    elif name == 'Tenant':
        from storeman.models.tenant import Tenant
        return Tenant
    elif name == 'Product':
        from storeman.models.product import Product
        return Product
    elif name == 'Variant':
        from storeman.models.product import Variant
        return Variant
    elif name == 'Supplier':
        from storeman.models.supplier import Supplier
        return Supplier
    elif name == 'PurchaseOrder':
        from storeman.models.purchase_order import PurchaseOrder
        return PurchaseOrder
    elif name == 'StockMovement':
        from storeman.models.movement import StockMovement
        return StockMovement
    elif name == 'MovementType':
        from storeman.models.enums import MovementType
        return MovementType
    elif name == 'POStatus':
        from storeman.models.enums import POStatus
        return POStatus
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'inventory',
    'StoremanError',
    'Tenant',
    'Product',
    'Variant',
    'Supplier',
    'PurchaseOrder',
    'StockMovement',
    'MovementType',
    'POStatus',
]

__version__ = '0.1.0'
