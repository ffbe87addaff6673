"""
Storeman Models.

Core models for multi-tenant inventory:
- Tenant / Member: identity boundary and roles
- Product / Variant: catalog with per-variant stock
- Supplier: vendor directory
- PurchaseOrder / PurchaseOrderItem: replenishment workflow
- StockMovement: Immutable ledger of stock changes
"""

from storeman.models.enums import MovementType, POStatus, Role
from storeman.models.movement import StockMovement
from storeman.models.product import Product, Variant
from storeman.models.purchase_order import PurchaseOrder, PurchaseOrderItem
from storeman.models.supplier import Supplier
from storeman.models.tenant import Member, Tenant

__all__ = [
    'Role',
    'POStatus',
    'MovementType',
    'Tenant',
    'Member',
    'Product',
    'Variant',
    'Supplier',
    'PurchaseOrder',
    'PurchaseOrderItem',
    'StockMovement',
]
