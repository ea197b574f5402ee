#import wszystkich modeli żeby SQLAlchemy je zarejestrował w base metadata

from pcstore.data.models.user import UserModel
from pcstore.data.models.specification import SpecificationModel
from pcstore.data.models.product_specification import ProductSpecificationModel
from pcstore.data.models.product import ProductModel
from pcstore.data.models.order import OrderModel, order_products
from pcstore.data.models.payment import PaymentModel
from pcstore.data.models.comment import CommentModel
from pcstore.data.models.favorite import FavoriteModel

__all__ = [
    "UserModel",
    "SpecificationModel",
    "ProductSpecificationModel",
    "ProductModel",
    "OrderModel",
    "order_products",
    "PaymentModel",
    "CommentModel",
    "FavoriteModel",
]
