"""
Product and Variant models — the catalog store.
"""

from decimal import Decimal

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _


def default_low_stock_threshold() -> int:
    """Threshold for new variants, from STOREMAN['DEFAULT_LOW_STOCK_THRESHOLD']."""
    from storeman.conf import storeman_settings
    return storeman_settings.DEFAULT_LOW_STOCK_THRESHOLD


class ProductQuerySet(models.QuerySet):
    """QuerySet with tenant scoping."""

    def for_tenant(self, tenant_id):
        """Only products owned by the tenant."""
        return self.filter(tenant_id=tenant_id)


class Product(models.Model):
    """
    Sellable item owned by one tenant.

    A product owns an ordered collection of Variants and must always
    have at least one (create_product rejects an empty list and
    Variant.delete() refuses to remove the last one).
    """

    tenant = models.ForeignKey(
        'storeman.Tenant',
        on_delete=models.PROTECT,
        related_name='products',
        verbose_name=_('Tenant'),
    )
    name = models.CharField(max_length=200, verbose_name=_('Nome'))
    category = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Categoria'))
    description = models.TextField(blank=True, default='', verbose_name=_('Descrição'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _('Produto')
        verbose_name_plural = _('Produtos')
        indexes = [
            models.Index(fields=['tenant', 'name'], name='storeman_product_tenant_name'),
            models.Index(fields=['tenant', 'created_at'], name='storeman_product_tenant_date'),
        ]

    def __str__(self) -> str:
        return self.name


class Variant(models.Model):
    """
    Specific sellable configuration of a product (size, color...).

    Rules:
    - stock is never negative (DB constraint + conditional updates)
    - stock changes go through the inventory service so every change
      has a StockMovement; direct edits cover sku/price/attributes only
    - attributes is an open str → str mapping with no required keys
    """

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name=_('Produto'),
    )
    sku = models.CharField(max_length=64, verbose_name=_('SKU'))
    attributes = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_('Atributos'),
        help_text=_('Ex: {"tamanho": "M", "cor": "azul"}'),
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Preço'),
    )
    stock = models.IntegerField(default=0, verbose_name=_('Estoque'))
    low_stock_threshold = models.PositiveIntegerField(
        default=default_low_stock_threshold,
        verbose_name=_('Estoque mínimo'),
        help_text=_('Alerta quando estoque efetivo <= este valor'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Variante')
        verbose_name_plural = _('Variantes')
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'sku'],
                name='storeman_variant_unique_sku',
            ),
            models.CheckConstraint(
                condition=Q(stock__gte=0),
                name='storeman_variant_stock_gte_0',
            ),
            models.CheckConstraint(
                condition=Q(price__gte=0),
                name='storeman_variant_price_gte_0',
            ),
        ]

    @property
    def is_low_stock(self) -> bool:
        """On-hand stock at or below threshold (ignores incoming orders)."""
        return self.stock <= self.low_stock_threshold

    def delete(self, *args, **kwargs):
        """Prevent removing the last variant of a product."""
        siblings = Variant.objects.filter(product_id=self.product_id).exclude(pk=self.pk)
        if not siblings.exists():
            raise ValueError("Produto deve ter pelo menos uma variante.")
        return super().delete(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.sku} ({self.stock})"
