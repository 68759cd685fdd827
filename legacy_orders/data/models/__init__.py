#import modeli zeby SQLAlchemy zarejestrowal je w Base.metadata

from legacy_orders.data.models.order import OrderModel

__all__ = ["OrderModel"]
