"""
Exceptions for Storeman.

All errors are StoremanError with a structured code for programmatic handling.
Subclasses group codes by kind so a web layer can map them to a status:

    ValidationError          400  malformed input
    InvalidSupplierError     400  supplier outside the tenant
    InvalidProductError      400  product/variant outside the tenant
    NotFoundError            404  unknown id (or id owned by another tenant)
    InsufficientStockError   409  sell rejected by the conditional decrement
    OverReceiveError         409  receipt above remaining quantity
    ItemNotInOrderError      409  variant not part of the purchase order
    InvalidStatusError       409  illegal purchase order transition
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Exception carrying a code, a human-readable message and context data.

    The message defaults to the class's `_default_messages[code]`.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class StoremanError(BaseError):
    """
    Structured exception for inventory operations.

    Usage:
        try:
            inventory.sell_variant(tenant.pk, product.pk, variant.pk, 10)
        except StoremanError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Pedido de {e.requested} rejeitado")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
        status_code: HTTP-equivalent status for the calling layer
    """

    default_code = 'STOREMAN_ERROR'
    status_code = 400

    _default_messages = {
        'STOREMAN_ERROR': 'Erro de inventário',
        'INVALID_QUANTITY': 'Quantidade inválida (deve ser um inteiro positivo)',
        'INVALID_PRICE': 'Preço inválido (não pode ser negativo)',
        'INVALID_PAGE': 'Página inválida',
        'EMPTY_VARIANTS': 'Produto deve ter pelo menos uma variante',
        'EMPTY_ITEMS': 'Pedido de compra deve ter pelo menos um item',
        'DUPLICATE_ITEM': 'Variante repetida no pedido de compra',
        'INVALID_ID': 'Identificador inválido',
        'REASON_REQUIRED': 'Motivo é obrigatório',
        'INVALID_FIELD': 'Campo inválido',
        'INVALID_TENANT': 'Tenant inválido',
        'DUPLICATE_SKU': 'SKU duplicado neste produto',
        'PRODUCT_NOT_FOUND': 'Produto não encontrado',
        'VARIANT_NOT_FOUND': 'Variante não encontrada',
        'SUPPLIER_NOT_FOUND': 'Fornecedor não encontrado',
        'PURCHASE_ORDER_NOT_FOUND': 'Pedido de compra não encontrado',
        'INSUFFICIENT_STOCK': 'Estoque insuficiente',
        'OVER_RECEIVE': 'Recebendo mais do que o pedido',
        'ITEM_NOT_IN_ORDER': 'Variante não faz parte deste pedido',
        'INVALID_STATUS': 'Status inválido para esta operação',
        'INVALID_SUPPLIER': 'Fornecedor inválido para este tenant',
        'INVALID_PRODUCT': 'Produto inválido para este tenant',
        'INVALID_VARIANT': 'Variante não pertence ao produto',
    }

    def __init__(self, code: str | None = None, message: str | None = None, **data):
        super().__init__(code or self.default_code, message, **data)

    @property
    def requested(self) -> Any:
        """Shortcut for data['requested']."""
        return self.data.get('requested')

    def as_dict(self) -> dict[str, Any]:
        """Serialize to the response envelope (useful for APIs)."""
        return {
            'success': False,
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class ValidationError(StoremanError):
    default_code = 'INVALID_QUANTITY'
    status_code = 400


class NotFoundError(StoremanError):
    """Unknown id. Ids owned by another tenant are reported the same way."""

    default_code = 'PRODUCT_NOT_FOUND'
    status_code = 404


class InsufficientStockError(StoremanError):
    default_code = 'INSUFFICIENT_STOCK'
    status_code = 409


class OverReceiveError(StoremanError):
    default_code = 'OVER_RECEIVE'
    status_code = 409

    @property
    def remaining(self) -> int:
        """Shortcut for data['remaining']."""
        return self.data.get('remaining', 0)


class ItemNotInOrderError(StoremanError):
    default_code = 'ITEM_NOT_IN_ORDER'
    status_code = 409


class InvalidStatusError(StoremanError):
    default_code = 'INVALID_STATUS'
    status_code = 409


class InvalidSupplierError(StoremanError):
    default_code = 'INVALID_SUPPLIER'
    status_code = 400


class InvalidProductError(StoremanError):
    default_code = 'INVALID_PRODUCT'
    status_code = 400
