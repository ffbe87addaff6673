"""
Purchasing — purchase order creation, lifecycle and receipts.

Receiving is the write path that increases stock: every receipt bumps
Variant.stock, PurchaseOrderItem.received_qty and appends a PURCHASE
movement, all inside one transaction.
"""

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from storeman.conf import storeman_settings
from storeman.exceptions import (
    InvalidProductError,
    InvalidStatusError,
    InvalidSupplierError,
    ItemNotInOrderError,
    NotFoundError,
    OverReceiveError,
    ValidationError,
)
from storeman.models.enums import PO_TRANSITIONS, MovementType, POStatus
from storeman.models.movement import StockMovement
from storeman.models.product import Product, Variant
from storeman.models.purchase_order import PurchaseOrder, PurchaseOrderItem
from storeman.models.supplier import Supplier
from storeman.services.base import check_id, check_price, check_quantity, get_purchase_order

logger = logging.getLogger('storeman')


class Purchasing:
    """Purchase order workflow methods."""

    @classmethod
    def create_purchase_order(cls, tenant_id, supplier_id, items,
                              expected_date=None) -> PurchaseOrder:
        """
        Create a DRAFT purchase order.

        Args:
            items: list of {'product_id', 'variant_id', 'ordered_qty', 'price'}

        Raises:
            InvalidSupplierError: Supplier missing or owned by another tenant
            InvalidProductError('INVALID_PRODUCT'): Product missing or foreign
            InvalidProductError('INVALID_VARIANT'): Variant not in that product
            ValidationError: No items, a repeated variant (DUPLICATE_ITEM),
                malformed ids, ordered_qty < 1 or negative price
        """
        supplier_id = check_id(supplier_id, 'supplier_id')
        if not Supplier.objects.filter(pk=supplier_id, tenant_id=tenant_id).exists():
            raise InvalidSupplierError(supplier_id=supplier_id)

        if not items:
            raise ValidationError('EMPTY_ITEMS')

        lines = []
        for item in items:
            product_id = check_id(item.get('product_id'), 'product_id')
            variant_id = check_id(item.get('variant_id'), 'variant_id')

            # One line per variant
            if any(line['variant_id'] == variant_id for line in lines):
                raise ValidationError('DUPLICATE_ITEM', variant_id=variant_id)

            if not Product.objects.for_tenant(tenant_id).filter(pk=product_id).exists():
                raise InvalidProductError(product_id=product_id)
            if not Variant.objects.filter(pk=variant_id, product_id=product_id).exists():
                raise InvalidProductError('INVALID_VARIANT', product_id=product_id, variant_id=variant_id)

            lines.append({
                'product_id': product_id,
                'variant_id': variant_id,
                'ordered_qty': check_quantity(item.get('ordered_qty'), variant_id=variant_id),
                'price': check_price(item.get('price', 0)),
            })

        with transaction.atomic():
            order = PurchaseOrder.objects.create(
                tenant_id=tenant_id,
                supplier_id=supplier_id,
                status=POStatus.DRAFT,
                expected_date=expected_date,
            )
            PurchaseOrderItem.objects.bulk_create([
                PurchaseOrderItem(order=order, received_qty=0, **line)
                for line in lines
            ])

        logger.info(
            "purchase_order.create",
            extra={
                "tenant_id": tenant_id,
                "po_id": order.pk,
                "supplier_id": supplier_id,
                "items": len(lines),
            },
        )
        return order

    @classmethod
    def transition_purchase_order(cls, tenant_id, po_id, status) -> PurchaseOrder:
        """
        Move a purchase order one step forward.

        Transitions: DRAFT → SENT → CONFIRMED. RECEIVED is only reached
        through receive_purchase_order().

        Raises:
            NotFoundError('PURCHASE_ORDER_NOT_FOUND')
            InvalidStatusError: If status is not the next step
        """
        with transaction.atomic():
            order = get_purchase_order(tenant_id, po_id, for_update=True)
            expected = PO_TRANSITIONS.get(order.status)

            if expected is None or status != expected:
                raise InvalidStatusError(
                    current=order.status,
                    requested=status,
                    expected=expected,
                )

            previous = order.status
            order.status = status
            order.save(update_fields=['status', 'updated_at'])

        logger.info(
            "purchase_order.transition",
            extra={
                "tenant_id": tenant_id,
                "po_id": order.pk,
                "from_status": previous,
                "to_status": status,
            },
        )
        return order

    @classmethod
    def send_purchase_order(cls, tenant_id, po_id) -> PurchaseOrder:
        """DRAFT → SENT."""
        return cls.transition_purchase_order(tenant_id, po_id, POStatus.SENT)

    @classmethod
    def confirm_purchase_order(cls, tenant_id, po_id) -> PurchaseOrder:
        """SENT → CONFIRMED."""
        return cls.transition_purchase_order(tenant_id, po_id, POStatus.CONFIRMED)

    @classmethod
    def receive_purchase_order(cls, tenant_id, po_id, items, user=None) -> PurchaseOrder:
        """
        Receive goods against a purchase order.

        For each {'variant_id', 'receive_qty'}:
        1. Finds the order line for the variant
        2. Rejects receipts above ordered_qty - received_qty
        3. Increments Variant.stock
        4. Increments PurchaseOrderItem.received_qty
        5. Creates PURCHASE movement (+receive_qty)
        Then RECEIVED if every line is complete.

        Raises:
            ValidationError: Empty items or non-positive receive_qty
            NotFoundError('PURCHASE_ORDER_NOT_FOUND'): Unknown or foreign order
            InvalidStatusError: Order status not in RECEIVABLE_STATUSES
            ItemNotInOrderError: Variant not part of the order
            OverReceiveError: receive_qty above remaining quantity

        Concurrency:
            - Runs under transaction.atomic(); any error rolls back every
              stock increment and movement made by the call
            - select_for_update() on the order serializes concurrent
              receipts, so received_qty updates are never lost
        """
        if not items:
            raise ValidationError('EMPTY_ITEMS')

        with transaction.atomic():
            order = get_purchase_order(tenant_id, po_id, for_update=True)

            # RECEIVED orders fall through: every line has nothing remaining,
            # so any receipt fails as an over-receive
            receivable = (
                order.status == POStatus.RECEIVED
                or order.status in storeman_settings.RECEIVABLE_STATUSES
            )
            if not receivable:
                raise InvalidStatusError(
                    current=order.status,
                    expected=list(storeman_settings.RECEIVABLE_STATUSES),
                )

            lines = list(order.items.all())
            received = []

            for entry in items:
                variant_id = entry.get('variant_id')
                receive_qty = check_quantity(entry.get('receive_qty'), variant_id=variant_id)

                line = next((l for l in lines if str(l.variant_id) == str(variant_id)), None)
                if line is None:
                    raise ItemNotInOrderError(po_id=order.pk, variant_id=variant_id)

                remaining = line.remaining_qty
                if receive_qty > remaining:
                    raise OverReceiveError(
                        po_id=order.pk,
                        variant_id=variant_id,
                        requested=receive_qty,
                        remaining=remaining,
                    )

                updated = Variant.objects.filter(
                    pk=line.variant_id,
                    product_id=line.product_id,
                    product__tenant_id=tenant_id,
                ).update(
                    stock=F('stock') + receive_qty,
                    updated_at=timezone.now(),
                )
                if not updated:
                    raise NotFoundError('VARIANT_NOT_FOUND', variant_id=variant_id)

                line.received_qty += receive_qty

                StockMovement.objects.create(
                    tenant_id=tenant_id,
                    product_id=line.product_id,
                    variant_id=line.variant_id,
                    type=MovementType.PURCHASE,
                    quantity=receive_qty,
                    reference=f"po:{order.pk}",
                    user=user,
                )
                received.append((variant_id, receive_qty))

            PurchaseOrderItem.objects.bulk_update(lines, ['received_qty'])

            if all(line.is_complete for line in lines):
                order.status = POStatus.RECEIVED
            order.save(update_fields=['status', 'updated_at'])

        logger.info(
            "inventory.receive",
            extra={
                "tenant_id": tenant_id,
                "po_id": order.pk,
                "received": received,
                "status": order.status,
            },
        )
        return order

    @classmethod
    def get_purchase_order(cls, tenant_id, po_id) -> PurchaseOrder:
        """Purchase order with its lines."""
        order = get_purchase_order(tenant_id, po_id)
        return PurchaseOrder.objects.prefetch_related('items').get(pk=order.pk)

    @classmethod
    def list_purchase_orders(cls, tenant_id, status=None):
        """Tenant's purchase orders, newest first."""
        qs = PurchaseOrder.objects.filter(tenant_id=tenant_id).select_related(
            'supplier'
        ).prefetch_related('items')

        if status is not None:
            qs = qs.filter(status=status)

        return qs
