"""
Inventory services — modular organization of inventory operations.

Re-exports all public classes:
    from storeman.services import Catalog, StockMovements, Purchasing, InventoryQueries
"""

from storeman.services.catalog import Catalog, ProductPage
from storeman.services.dashboard import Dashboard
from storeman.services.movements import StockMovements
from storeman.services.purchasing import Purchasing
from storeman.services.queries import InventoryQueries, LowStockEntry
from storeman.services.suppliers import Suppliers

__all__ = [
    'Catalog',
    'ProductPage',
    'Dashboard',
    'StockMovements',
    'Purchasing',
    'InventoryQueries',
    'LowStockEntry',
    'Suppliers',
]
