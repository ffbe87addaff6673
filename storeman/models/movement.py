"""
StockMovement model — Immutable ledger of stock changes.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from storeman.models.enums import MovementType


class StockMovement(models.Model):
    """
    Immutable record of a stock change of one variant.

    Rules:
    - NEVER update() or delete()
    - Corrections are new movements (RETURN or ADJUSTMENT)
    - Written in the same transaction as the Variant.stock change it records

    For every variant: stock == initial stock + sum(quantity).
    """

    tenant = models.ForeignKey(
        'storeman.Tenant',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Tenant'),
    )
    product = models.ForeignKey(
        'storeman.Product',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('Produto'),
    )
    variant = models.ForeignKey(
        'storeman.Variant',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('Variante'),
    )
    type = models.CharField(
        max_length=20,
        choices=MovementType.choices,
        verbose_name=_('Tipo'),
    )
    quantity = models.IntegerField(
        verbose_name=_('Quantidade'),
        help_text=_('Positivo = entrada, Negativo = saída'),
    )
    reference = models.CharField(
        max_length=100,
        blank=True,
        default='',
        verbose_name=_('Referência'),
        help_text=_('Ex: "po:12"'),
    )
    reason = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Motivo'))
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Usuário'),
    )
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))

    class Meta:
        verbose_name = _('Movimento')
        verbose_name_plural = _('Movimentos')
        ordering = ['timestamp', 'id']
        indexes = [
            models.Index(fields=['tenant', 'type', 'timestamp'], name='storeman_mov_tenant_type_ts'),
            models.Index(fields=['variant', 'timestamp'], name='storeman_mov_variant_ts'),
        ]

    def save(self, *args, **kwargs):
        """Insert only."""
        if self.pk:
            raise ValueError(
                "Movimentos são imutáveis. "
                "Para corrigir, crie um novo movimento de ajuste."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — movements are immutable."""
        raise ValueError(
            "Movimentos são imutáveis. "
            "Para estornar, crie um novo movimento de ajuste."
        )

    def __str__(self) -> str:
        signal = '+' if self.quantity > 0 else ''
        return f"{signal}{self.quantity} | {self.get_type_display()}"
