"""
Stock movements — state-changing operations on variant stock (sell, return, adjust).

All methods use transaction.atomic(); stock change and ledger entry
commit together or not at all.
"""

import logging

from django.db import transaction
from django.db.models import F, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from storeman.exceptions import InsufficientStockError, NotFoundError, ValidationError
from storeman.models.enums import MovementType
from storeman.models.movement import StockMovement
from storeman.models.product import Variant
from storeman.services.base import check_id, check_quantity, get_variant

logger = logging.getLogger('storeman')


class StockMovements:
    """State-changing stock movement methods."""

    @classmethod
    def sell_variant(cls, tenant_id, product_id, variant_id, quantity: int,
                     user=None, reference: str = '') -> Variant:
        """
        Sell: decrement variant stock and record a SALE movement.

        Raises:
            ValidationError('INVALID_ID'): If an id is not an integer
            ValidationError('INVALID_QUANTITY'): If quantity is not a positive int
            InsufficientStockError: If the conditional decrement matched no row
                (unknown ids, another tenant's product, or stock < quantity)

        Concurrency:
            - Runs under transaction.atomic()
            - Single UPDATE ... WHERE tenant matches AND stock >= quantity
              (compare-and-swap)
            - A losing concurrent sell fails, it does not retry
        """
        product_id = check_id(product_id, 'product_id')
        variant_id = check_id(variant_id, 'variant_id')
        check_quantity(quantity)

        with transaction.atomic():
            updated = Variant.objects.filter(
                pk=variant_id,
                product_id=product_id,
                product__tenant_id=tenant_id,
                stock__gte=quantity,
            ).update(
                stock=F('stock') - quantity,
                updated_at=timezone.now(),
            )

            if not updated:
                logger.warning(
                    "inventory.sell.rejected",
                    extra={
                        "tenant_id": tenant_id,
                        "product_id": product_id,
                        "variant_id": variant_id,
                        "qty": quantity,
                    },
                )
                raise InsufficientStockError(
                    requested=quantity,
                    product_id=product_id,
                    variant_id=variant_id,
                )

            StockMovement.objects.create(
                tenant_id=tenant_id,
                product_id=product_id,
                variant_id=variant_id,
                type=MovementType.SALE,
                quantity=-quantity,
                reference=reference,
                user=user,
            )

            variant = Variant.objects.select_related('product').get(pk=variant_id)

        logger.info(
            "inventory.sell",
            extra={
                "tenant_id": tenant_id,
                "variant_id": variant_id,
                "qty": quantity,
                "stock": variant.stock,
            },
        )
        return variant

    @classmethod
    def return_variant(cls, tenant_id, product_id, variant_id, quantity: int,
                       user=None, reference: str = '', reason: str = 'Devolução') -> Variant:
        """
        Customer return: increment stock and record a RETURN movement.

        Raises:
            ValidationError('INVALID_ID'): If an id is not an integer
            ValidationError('INVALID_QUANTITY'): If quantity is not a positive int
            NotFoundError('VARIANT_NOT_FOUND'): Unknown or foreign variant
        """
        product_id = check_id(product_id, 'product_id')
        variant_id = check_id(variant_id, 'variant_id')
        check_quantity(quantity)

        with transaction.atomic():
            updated = Variant.objects.filter(
                pk=variant_id,
                product_id=product_id,
                product__tenant_id=tenant_id,
            ).update(
                stock=F('stock') + quantity,
                updated_at=timezone.now(),
            )

            if not updated:
                raise NotFoundError('VARIANT_NOT_FOUND', product_id=product_id, variant_id=variant_id)

            StockMovement.objects.create(
                tenant_id=tenant_id,
                product_id=product_id,
                variant_id=variant_id,
                type=MovementType.RETURN,
                quantity=quantity,
                reference=reference,
                reason=reason,
                user=user,
            )

            variant = Variant.objects.select_related('product').get(pk=variant_id)

        logger.info(
            "inventory.return",
            extra={
                "tenant_id": tenant_id,
                "variant_id": variant_id,
                "qty": quantity,
                "reason": reason,
            },
        )
        return variant

    @classmethod
    def adjust_stock(cls, tenant_id, product_id, variant_id, new_stock: int,
                     reason: str, user=None) -> StockMovement | None:
        """
        Inventory count correction.

        Calculates delta automatically: new_stock - variant.stock

        Returns:
            The ADJUSTMENT movement, or None when stock already matches

        Raises:
            ValidationError('REASON_REQUIRED'): If reason is empty
            ValidationError('INVALID_QUANTITY'): If new_stock is negative
            NotFoundError('VARIANT_NOT_FOUND'): Unknown or foreign variant
        """
        if not reason:
            raise ValidationError('REASON_REQUIRED')
        if isinstance(new_stock, bool) or not isinstance(new_stock, int) or new_stock < 0:
            raise ValidationError('INVALID_QUANTITY', requested=new_stock)

        with transaction.atomic():
            variant = get_variant(tenant_id, product_id, variant_id, for_update=True)
            delta = new_stock - variant.stock

            if delta == 0:
                return None

            variant.stock = new_stock
            variant.save(update_fields=['stock', 'updated_at'])

            movement = StockMovement.objects.create(
                tenant_id=tenant_id,
                product_id=product_id,
                variant_id=variant_id,
                type=MovementType.ADJUSTMENT,
                quantity=delta,
                reason=f"Ajuste: {reason}",
                user=user,
            )

        logger.info(
            "inventory.adjust",
            extra={
                "tenant_id": tenant_id,
                "variant_id": variant_id,
                "delta": delta,
                "reason": reason,
            },
        )
        return movement

    @classmethod
    def audit_ledger(cls, tenant_id, variant_id) -> int:
        """
        Net ledger quantity for a variant.

        stock - audit_ledger() is the variant's initial stock; use for
        integrity audits.
        """
        return StockMovement.objects.filter(
            tenant_id=tenant_id,
            variant_id=variant_id,
        ).aggregate(
            t=Coalesce(Sum('quantity'), 0)
        )['t']
