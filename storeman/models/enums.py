"""
Enums for Storeman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Role(models.TextChoices):
    """
    Member role inside a tenant.

    OWNER/MANAGER may create and mutate catalog, suppliers and purchase orders.
    STAFF is read/sell-only. Enforced by the calling layer, not by the core.
    """
    OWNER = 'owner', _('Proprietário')
    MANAGER = 'manager', _('Gerente')
    STAFF = 'staff', _('Equipe')


class POStatus(models.TextChoices):
    """Purchase order lifecycle status."""
    DRAFT = 'draft', _('Rascunho')           # Created, editable
    SENT = 'sent', _('Enviado')              # Sent to supplier
    CONFIRMED = 'confirmed', _('Confirmado') # Supplier confirmed, stock incoming
    RECEIVED = 'received', _('Recebido')     # Every item fully received


# Forward-only lifecycle; RECEIVED is reached only through receipts
PO_TRANSITIONS = {
    POStatus.DRAFT: POStatus.SENT,
    POStatus.SENT: POStatus.CONFIRMED,
}


class MovementType(models.TextChoices):
    """
    Cause of a stock movement.

    Sign convention of StockMovement.quantity:
    PURCHASE and RETURN are positive, SALE is negative,
    ADJUSTMENT carries whichever sign the correction needs.
    """
    PURCHASE = 'purchase', _('Compra')
    SALE = 'sale', _('Venda')
    RETURN = 'return', _('Devolução')
    ADJUSTMENT = 'adjustment', _('Ajuste')
