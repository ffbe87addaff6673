"""
PurchaseOrder model — replenishment orders placed with a supplier.
"""

from decimal import Decimal

from django.db import models
from django.db.models import F, Q
from django.utils.translation import gettext_lazy as _

from storeman.models.enums import POStatus


class PurchaseOrder(models.Model):
    """
    Order of variants from one supplier.

    LIFECYCLE:

        ┌───────┐  send   ┌──────┐  confirm  ┌───────────┐  receive (all)  ┌──────────┐
        │ DRAFT │ ──────► │ SENT │ ────────► │ CONFIRMED │ ──────────────► │ RECEIVED │
        └───────┘         └──────┘           └───────────┘                 └──────────┘

    - Forward only; nothing leaves RECEIVED
    - RECEIVED is set by receive_purchase_order() once every item has
      received_qty == ordered_qty, never by hand
    - Outstanding quantity of CONFIRMED orders counts as incoming stock
      for the low-stock calculator
    """

    tenant = models.ForeignKey(
        'storeman.Tenant',
        on_delete=models.PROTECT,
        related_name='purchase_orders',
        verbose_name=_('Tenant'),
    )
    supplier = models.ForeignKey(
        'storeman.Supplier',
        on_delete=models.PROTECT,
        related_name='purchase_orders',
        verbose_name=_('Fornecedor'),
    )
    status = models.CharField(
        max_length=20,
        choices=POStatus.choices,
        default=POStatus.DRAFT,
        db_index=True,
        verbose_name=_('Status'),
    )
    expected_date = models.DateField(null=True, blank=True, verbose_name=_('Previsão de entrega'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Pedido de Compra')
        verbose_name_plural = _('Pedidos de Compra')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['tenant', 'status'], name='storeman_po_tenant_status'),
        ]

    @property
    def is_fully_received(self) -> bool:
        """Every item has received_qty == ordered_qty?"""
        return all(item.is_complete for item in self.items.all())

    @property
    def total(self) -> Decimal:
        """Order value (ordered quantity x unit price)."""
        return sum((item.subtotal for item in self.items.all()), Decimal('0'))

    def __str__(self) -> str:
        return f"PO #{self.pk} — {self.supplier} ({self.get_status_display()})"


class PurchaseOrderItem(models.Model):
    """Line of a purchase order: one variant, ordered and received quantities."""

    order = models.ForeignKey(
        PurchaseOrder,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('Pedido'),
    )
    product = models.ForeignKey(
        'storeman.Product',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Produto'),
    )
    variant = models.ForeignKey(
        'storeman.Variant',
        on_delete=models.PROTECT,
        related_name='purchase_order_items',
        verbose_name=_('Variante'),
    )
    ordered_qty = models.PositiveIntegerField(verbose_name=_('Quantidade pedida'))
    received_qty = models.PositiveIntegerField(default=0, verbose_name=_('Quantidade recebida'))
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        verbose_name=_('Preço unitário'),
    )

    class Meta:
        verbose_name = _('Item do Pedido')
        verbose_name_plural = _('Itens do Pedido')
        ordering = ['id']
        constraints = [
            models.CheckConstraint(
                condition=Q(ordered_qty__gte=1),
                name='storeman_poitem_ordered_gte_1',
            ),
            models.CheckConstraint(
                condition=Q(received_qty__gte=0) & Q(received_qty__lte=F('ordered_qty')),
                name='storeman_poitem_received_lte_ordered',
            ),
            models.CheckConstraint(
                condition=Q(price__gte=0),
                name='storeman_poitem_price_gte_0',
            ),
        ]

    @property
    def remaining_qty(self) -> int:
        """Quantity still outstanding."""
        return self.ordered_qty - self.received_qty

    @property
    def is_complete(self) -> bool:
        return self.received_qty == self.ordered_qty

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.ordered_qty

    def __str__(self) -> str:
        return f"{self.variant.sku}: {self.received_qty}/{self.ordered_qty}"
