#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.user import UserModel
from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.watchlist_item import WatchlistItemModel
from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.data.models.banner import BannerModel
from storefront.data.models.app_setting import AppSettingModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "ProductModel",
    "CartItemModel",
    "WatchlistItemModel",
    "OrderModel",
    "OrderItemModel",
    "BannerModel",
    "AppSettingModel",
]
