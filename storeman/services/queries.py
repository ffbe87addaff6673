"""
Inventory queries — read-only operations.

All methods are classmethod on Inventory and use no locking.
"""

from dataclasses import dataclass

from django.db.models import F, Sum

from storeman.models.enums import POStatus
from storeman.models.movement import StockMovement
from storeman.models.product import Variant
from storeman.models.purchase_order import PurchaseOrderItem


@dataclass(frozen=True)
class LowStockEntry:
    """A variant whose effective stock is at or below its threshold."""

    product_id: int
    product_name: str
    variant_id: int
    sku: str
    current_stock: int
    incoming_qty: int
    effective_stock: int
    threshold: int


class InventoryQueries:
    """Read-only inventory query methods."""

    @classmethod
    def incoming(cls, tenant_id) -> dict[int, int]:
        """
        Outstanding quantity per variant on CONFIRMED purchase orders.

        Returns:
            {variant_id: sum(ordered_qty - received_qty)}
        """
        rows = PurchaseOrderItem.objects.filter(
            order__tenant_id=tenant_id,
            order__status=POStatus.CONFIRMED,
        ).values('variant_id').annotate(
            outstanding=Sum(F('ordered_qty') - F('received_qty'))
        ).order_by()

        return {row['variant_id']: row['outstanding'] or 0 for row in rows}

    @classmethod
    def low_stock(cls, tenant_id) -> list[LowStockEntry]:
        """
        Variants needing replenishment.

        effective_stock = stock + incoming (CONFIRMED orders only)
        Flagged when effective_stock <= low_stock_threshold.

        Returns:
            LowStockEntry list ordered by product id, then variant id

        Performance:
            Two queries: one grouped sum over order lines, one over variants
        """
        incoming = cls.incoming(tenant_id)
        variants = Variant.objects.filter(
            product__tenant_id=tenant_id,
        ).select_related('product').order_by('product_id', 'id')

        flagged = []
        for variant in variants:
            incoming_qty = incoming.get(variant.pk, 0)
            effective = variant.stock + incoming_qty

            if effective <= variant.low_stock_threshold:
                flagged.append(LowStockEntry(
                    product_id=variant.product_id,
                    product_name=variant.product.name,
                    variant_id=variant.pk,
                    sku=variant.sku,
                    current_stock=variant.stock,
                    incoming_qty=incoming_qty,
                    effective_stock=effective,
                    threshold=variant.low_stock_threshold,
                ))

        return flagged

    @classmethod
    def list_movements(cls, tenant_id, variant_id=None, type=None):
        """Ledger entries of the tenant, oldest first."""
        qs = StockMovement.objects.filter(tenant_id=tenant_id)

        if variant_id is not None:
            qs = qs.filter(variant_id=variant_id)

        if type is not None:
            qs = qs.filter(type=type)

        return qs
