"""
Supplier model — vendor records scoped per tenant.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Supplier(models.Model):
    """Vendor contact record, referenced by purchase orders."""

    tenant = models.ForeignKey(
        'storeman.Tenant',
        on_delete=models.PROTECT,
        related_name='suppliers',
        verbose_name=_('Tenant'),
    )
    name = models.CharField(max_length=200, verbose_name=_('Nome'))
    email = models.EmailField(blank=True, default='', verbose_name=_('E-mail'))
    phone = models.CharField(max_length=40, blank=True, default='', verbose_name=_('Telefone'))
    address = models.TextField(blank=True, default='', verbose_name=_('Endereço'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Fornecedor')
        verbose_name_plural = _('Fornecedores')
        ordering = ['name']
        indexes = [
            models.Index(fields=['tenant', 'name'], name='storeman_supplier_tenant_name'),
        ]

    def __str__(self) -> str:
        return self.name
