from storefront.client.app import StorefrontApp
from storefront.client.cache import QueryCache, key_of
from storefront.client.guards import GuardResult, require_admin, require_login

__all__ = ["StorefrontApp", "QueryCache", "key_of", "GuardResult", "require_admin", "require_login"]
