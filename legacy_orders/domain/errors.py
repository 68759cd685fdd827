# legacy_orders/domain/errors.py
"""
Bledy domeny zamowien.

OrderRequestError -> blad po stronie klienta (HTTP 422).
OrderStorageError -> problem z baza; LockTimeout mozna ponowic, StorageFailure nie.
"""


class OrderError(Exception):
    pass


class OrderRequestError(OrderError, ValueError):
    pass


class InvalidStatusValue(OrderRequestError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid status value '{value}'")


class OrderNotFound(OrderRequestError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order #{order_id} not found")


class InvalidTransition(OrderRequestError):
    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Invalid status transition from '{current}' to '{requested}'")


class OrderStorageError(OrderError):
    retryable = False


class LockTimeout(OrderStorageError):
    retryable = True

    def __init__(self, order_id: int | None = None):
        self.order_id = order_id
        target = f"order #{order_id}" if order_id is not None else "orders"
        super().__init__(f"Timed out waiting for the row lock on {target}")


class StorageFailure(OrderStorageError):
    pass
