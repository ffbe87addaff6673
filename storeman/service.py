"""
Inventory Service — The single public interface for all inventory operations.

Usage:
    from storeman import inventory, StoremanError

    inventory.sell_variant(tenant.pk, product.pk, variant.pk, 2)
    inventory.receive_purchase_order(tenant.pk, po.pk, [{'variant_id': v.pk, 'receive_qty': 10}])
    inventory.low_stock(tenant.pk)

Every method takes the tenant id first. Nothing is read from request
or thread state; callers pass the tenant of the authenticated principal.
"""

from storeman.services.catalog import Catalog
from storeman.services.dashboard import Dashboard
from storeman.services.movements import StockMovements
from storeman.services.purchasing import Purchasing
from storeman.services.queries import InventoryQueries
from storeman.services.suppliers import Suppliers


class Inventory(Catalog, Suppliers, StockMovements, Purchasing, InventoryQueries, Dashboard):
    """
    Single interface for all inventory operations.

    Parameter convention: (tenant_id, ids..., quantity, ...)

    IMPORTANT: All state-changing methods use atomic transactions.
    See each method's docstring for its locking strategy.
    """
