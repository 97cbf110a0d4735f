"""
StockPro - Error Taxonomy
Erros de dominio levantados pelos servicos e convertidos em JSON pela API
"""
from fastapi import status


class StockProError(Exception):
    """Base de todos os erros de dominio"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "error"
    default_message = "Erro interno"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"detail": self.message, "error": self.code}


class ValidationError(StockProError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Dados invalidos"


class Unauthenticated(StockProError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Nao autenticado"


class Forbidden(StockProError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Sem permissao"


class NotFound(StockProError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Registro nao encontrado"


class ProductNotFound(NotFound):
    code = "product_not_found"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Produto nao encontrado: {product_id}")


class OrderNotFound(NotFound):
    code = "order_not_found"
    default_message = "Encomenda nao encontrada"


class DebtNotFound(NotFound):
    code = "debt_not_found"
    default_message = "Divida nao encontrada"


class NoteNotFound(NotFound):
    code = "note_not_found"
    default_message = "Anotacao nao encontrada"


class UserNotFound(NotFound):
    code = "user_not_found"
    default_message = "Usuario nao encontrado"


class InsufficientStock(StockProError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "insufficient_stock"

    def __init__(self, product_name: str, available: int, requested: int):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f'Stock insuficiente para "{product_name}". '
            f"Disponivel: {available}, solicitado: {requested}"
        )


class AmountExceedsBalance(StockProError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "amount_exceeds_balance"

    def __init__(self, amount: float, remaining: float):
        self.amount = amount
        self.remaining = remaining
        super().__init__(
            f"Valor {amount:.2f} excede o saldo restante {remaining:.2f}"
        )


class TransactionFailure(StockProError):
    code = "transaction_failure"
    default_message = "Falha ao gravar a transacao, tente novamente"
