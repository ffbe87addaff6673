"""
Dashboard — read-only aggregations over catalog and ledger.

Usage:
    from storeman import inventory

    data = inventory.dashboard(tenant.pk)
    data['inventory_value']  # Decimal
    data['top_sellers']      # [{'product_id', 'variant_id', 'product_name', 'sku', 'total_sold'}]
    data['stock_graph']      # [{'date', 'total_movement'}]
"""

from datetime import datetime, timedelta
from decimal import Decimal

from django.db.models import DecimalField, ExpressionWrapper, F, Sum, Value
from django.db.models.functions import Abs, Coalesce, TruncDate
from django.utils import timezone

from storeman.conf import storeman_settings
from storeman.models.enums import MovementType
from storeman.models.movement import StockMovement
from storeman.models.product import Variant

MONEY = DecimalField(max_digits=20, decimal_places=2)


class Dashboard:
    """Tenant-scoped analytical queries. No side effects."""

    @classmethod
    def inventory_value(cls, tenant_id) -> Decimal:
        """Sum of stock x price over every variant of the tenant."""
        return Variant.objects.filter(
            product__tenant_id=tenant_id,
        ).aggregate(
            t=Coalesce(
                Sum(ExpressionWrapper(F('stock') * F('price'), output_field=MONEY)),
                Value(Decimal('0')),
                output_field=MONEY,
            )
        )['t']

    @classmethod
    def top_sellers(cls, tenant_id, days: int | None = None, limit: int | None = None,
                    now: datetime | None = None) -> list[dict]:
        """
        Best selling variants over the trailing window.

        Sums |quantity| of SALE movements with timestamp in [now - days, now],
        grouped by (product, variant). Ties are ordered by product id, variant id.
        """
        days = days if days is not None else storeman_settings.TOP_SELLERS_DAYS
        limit = limit if limit is not None else storeman_settings.TOP_SELLERS_LIMIT
        now = now or timezone.now()

        rows = StockMovement.objects.filter(
            tenant_id=tenant_id,
            type=MovementType.SALE,
            timestamp__gte=now - timedelta(days=days),
            timestamp__lte=now,
        ).values(
            'product_id', 'variant_id', 'product__name', 'variant__sku',
        ).annotate(
            total_sold=Sum(Abs('quantity'))
        ).order_by('-total_sold', 'product_id', 'variant_id')[:limit]

        return [
            {
                'product_id': row['product_id'],
                'variant_id': row['variant_id'],
                'product_name': row['product__name'],
                'sku': row['variant__sku'],
                'total_sold': row['total_sold'],
            }
            for row in rows
        ]

    @classmethod
    def stock_graph(cls, tenant_id, days: int | None = None,
                    now: datetime | None = None) -> list[dict]:
        """
        Net movement per calendar day over the trailing window.

        All movement types; signed quantities are summed. Days without
        movements are absent. Ascending by date.
        """
        days = days if days is not None else storeman_settings.MOVEMENT_GRAPH_DAYS
        now = now or timezone.now()

        rows = StockMovement.objects.filter(
            tenant_id=tenant_id,
            timestamp__gte=now - timedelta(days=days),
            timestamp__lte=now,
        ).annotate(
            day=TruncDate('timestamp')
        ).values('day').annotate(
            total=Sum('quantity')
        ).order_by('day')

        return [{'date': row['day'], 'total_movement': row['total']} for row in rows]

    @classmethod
    def dashboard(cls, tenant_id, now: datetime | None = None) -> dict:
        """All three aggregations with the configured windows."""
        return {
            'inventory_value': cls.inventory_value(tenant_id),
            'top_sellers': cls.top_sellers(tenant_id, now=now),
            'stock_graph': cls.stock_graph(tenant_id, now=now),
        }
