"""
Catalog — products and variants of a tenant.

Stock is not editable here: initial stock is set when a variant is
created, and every later change goes through StockMovements or
Purchasing so it lands in the ledger.
"""

import logging
import math
from dataclasses import dataclass

from django.db import transaction

from storeman.conf import storeman_settings
from storeman.exceptions import ValidationError
from storeman.models.product import Product, Variant
from storeman.models.tenant import Tenant
from storeman.services.base import check_price, get_product, get_variant

logger = logging.getLogger('storeman')

PRODUCT_FIELDS = ('name', 'category', 'description')
VARIANT_FIELDS = ('sku', 'price', 'attributes', 'low_stock_threshold')


@dataclass(frozen=True)
class ProductPage:
    """One page of a tenant's product listing."""

    products: list[Product]
    total: int
    page: int
    total_pages: int


def _clean_attributes(attributes) -> dict[str, str]:
    if attributes is None:
        return {}
    if not isinstance(attributes, dict):
        raise ValidationError('INVALID_FIELD', field='attributes')
    return {str(k): str(v) for k, v in attributes.items()}


def _clean_threshold(value) -> int:
    if value is None:
        return storeman_settings.DEFAULT_LOW_STOCK_THRESHOLD
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError('INVALID_FIELD', field='low_stock_threshold')
    return value


def _build_variant(data) -> Variant:
    sku = (data.get('sku') or '').strip()
    if not sku:
        raise ValidationError('INVALID_FIELD', field='sku')

    stock = data.get('stock', 0)
    if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
        raise ValidationError('INVALID_QUANTITY', requested=stock, sku=sku)

    return Variant(
        sku=sku,
        price=check_price(data.get('price', 0)),
        stock=stock,
        low_stock_threshold=_clean_threshold(data.get('low_stock_threshold')),
        attributes=_clean_attributes(data.get('attributes')),
    )


class Catalog:
    """Product and variant methods."""

    @classmethod
    def create_product(cls, tenant_id, name: str, variants, category: str = '',
                       description: str = '') -> Product:
        """
        Create a product with its variants.

        Args:
            variants: list of {'sku', 'price', 'stock', 'low_stock_threshold', 'attributes'}

        Raises:
            ValidationError('INVALID_TENANT'): Unknown tenant
            ValidationError('EMPTY_VARIANTS'): No variants given
            ValidationError('DUPLICATE_SKU'): Same SKU twice in the product
        """
        if not Tenant.objects.filter(pk=tenant_id).exists():
            raise ValidationError('INVALID_TENANT', tenant_id=tenant_id)
        if not name:
            raise ValidationError('INVALID_FIELD', field='name')
        if not variants:
            raise ValidationError('EMPTY_VARIANTS')

        built = [_build_variant(data) for data in variants]
        skus = [v.sku for v in built]
        if len(set(skus)) != len(skus):
            raise ValidationError('DUPLICATE_SKU', skus=skus)

        with transaction.atomic():
            product = Product.objects.create(
                tenant_id=tenant_id,
                name=name,
                category=category,
                description=description,
            )
            for variant in built:
                variant.product = product
            Variant.objects.bulk_create(built)

        logger.info(
            "catalog.product.create",
            extra={
                "tenant_id": tenant_id,
                "product_id": product.pk,
                "variants": len(built),
            },
        )
        return product

    @classmethod
    def get_product(cls, tenant_id, product_id) -> Product:
        """Product with variants. Raises NotFoundError('PRODUCT_NOT_FOUND')."""
        product = get_product(tenant_id, product_id)
        return Product.objects.prefetch_related('variants').get(pk=product.pk)

    @classmethod
    def list_products(cls, tenant_id, page: int = 1, limit: int | None = None) -> ProductPage:
        """Paginated listing, newest first."""
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValidationError('INVALID_PAGE', page=page)

        limit = limit or storeman_settings.DEFAULT_PAGE_SIZE
        limit = max(1, min(limit, storeman_settings.MAX_PAGE_SIZE))

        qs = Product.objects.for_tenant(tenant_id).order_by('-created_at', '-id')
        total = qs.count()
        offset = (page - 1) * limit
        products = list(qs.prefetch_related('variants')[offset:offset + limit])

        return ProductPage(
            products=products,
            total=total,
            page=page,
            total_pages=math.ceil(total / limit),
        )

    @classmethod
    def update_product(cls, tenant_id, product_id, **fields) -> Product:
        """Edit name/category/description."""
        unknown = set(fields) - set(PRODUCT_FIELDS)
        if unknown:
            raise ValidationError('INVALID_FIELD', field=sorted(unknown))
        if 'name' in fields and not fields['name']:
            raise ValidationError('INVALID_FIELD', field='name')

        with transaction.atomic():
            product = get_product(tenant_id, product_id)
            for key, value in fields.items():
                setattr(product, key, value)
            product.save()

        return product

    @classmethod
    def add_variant(cls, tenant_id, product_id, sku: str, price, stock: int = 0,
                    low_stock_threshold: int | None = None, attributes=None) -> Variant:
        """Append a variant to an existing product."""
        variant = _build_variant({
            'sku': sku,
            'price': price,
            'stock': stock,
            'low_stock_threshold': low_stock_threshold,
            'attributes': attributes,
        })

        with transaction.atomic():
            product = get_product(tenant_id, product_id)
            if product.variants.filter(sku=variant.sku).exists():
                raise ValidationError('DUPLICATE_SKU', sku=variant.sku)
            variant.product = product
            variant.save()

        return variant

    @classmethod
    def update_variant(cls, tenant_id, product_id, variant_id, **fields) -> Variant:
        """Edit sku/price/attributes/threshold. Stock is not editable here."""
        unknown = set(fields) - set(VARIANT_FIELDS)
        if unknown:
            raise ValidationError('INVALID_FIELD', field=sorted(unknown))

        with transaction.atomic():
            variant = get_variant(tenant_id, product_id, variant_id, for_update=True)

            if 'sku' in fields:
                sku = (fields['sku'] or '').strip()
                if not sku:
                    raise ValidationError('INVALID_FIELD', field='sku')
                clash = Variant.objects.filter(product_id=product_id, sku=sku).exclude(pk=variant.pk)
                if clash.exists():
                    raise ValidationError('DUPLICATE_SKU', sku=sku)
                variant.sku = sku
            if 'price' in fields:
                variant.price = check_price(fields['price'])
            if 'attributes' in fields:
                variant.attributes = _clean_attributes(fields['attributes'])
            if 'low_stock_threshold' in fields:
                variant.low_stock_threshold = _clean_threshold(fields['low_stock_threshold'])

            variant.save()

        return variant
