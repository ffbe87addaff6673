"""
Storeman Admin.

Provides views for support and production debugging:
- Tenant: list + edit, with members inline
- Product: edit catalog fields, variants inline (stock read-only)
- Supplier: list + edit
- PurchaseOrder: read-only lines, status visible
- StockMovement: read-only audit trail (timestamp, type, quantity)

Stock only changes via the inventory service, never through the admin.
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from storeman.models import (
    Member,
    Product,
    PurchaseOrder,
    PurchaseOrderItem,
    StockMovement,
    Supplier,
    Tenant,
    Variant,
)


# =========================================================================
# TENANT ADMIN
# =========================================================================

class MemberInline(admin.TabularInline):
    model = Member
    extra = 0
    fields = ['user', 'role']
    raw_id_fields = ['user']


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    """Tenant admin — editable."""

    list_display = ['name', 'created_at']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [MemberInline]


# =========================================================================
# PRODUCT ADMIN
# =========================================================================

class VariantInline(admin.TabularInline):
    """Variants of a product. Stock is read-only (ledger-backed)."""

    model = Variant
    extra = 0
    fields = ['sku', 'attributes', 'price', 'stock', 'low_stock_threshold']
    readonly_fields = ['stock']

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Product admin — catalog fields editable, variants inline."""

    list_display = ['name', 'tenant', 'category', 'variant_count', 'total_stock']
    list_filter = ['tenant', 'category']
    search_fields = ['name', 'variants__sku']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [VariantInline]

    @admin.display(description=_('Variantes'))
    def variant_count(self, obj):
        return obj.variants.count()

    @admin.display(description=_('Estoque total'))
    def total_stock(self, obj):
        return sum(v.stock for v in obj.variants.all())


# =========================================================================
# SUPPLIER ADMIN
# =========================================================================

@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    """Supplier admin — editable."""

    list_display = ['name', 'tenant', 'email', 'phone']
    list_filter = ['tenant']
    search_fields = ['name', 'email']
    readonly_fields = ['created_at', 'updated_at']


# =========================================================================
# PURCHASE ORDER ADMIN (read-only)
# =========================================================================

class PurchaseOrderItemInline(admin.TabularInline):
    model = PurchaseOrderItem
    extra = 0
    fields = ['product', 'variant', 'ordered_qty', 'received_qty', 'price']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    """PurchaseOrder admin — read-only. Status changes via inventory service."""

    list_display = ['id', 'tenant', 'supplier', 'status', 'expected_date', 'created_at']
    list_filter = ['status', 'tenant']
    search_fields = ['supplier__name']
    readonly_fields = ['tenant', 'supplier', 'status', 'expected_date', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    inlines = [PurchaseOrderItemInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# STOCK MOVEMENT ADMIN (read-only audit trail)
# =========================================================================

@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    """StockMovement admin — read-only. Immutable audit trail."""

    list_display = ['timestamp', 'tenant', 'variant', 'type', 'quantity', 'reference', 'user']
    list_filter = ['type', 'tenant', 'timestamp']
    search_fields = ['variant__sku', 'reference', 'reason']
    readonly_fields = ['tenant', 'product', 'variant', 'type', 'quantity',
                       'reference', 'reason', 'user', 'timestamp']
    date_hierarchy = 'timestamp'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
