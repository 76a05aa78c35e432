class StorefrontError(Exception):
    pass


class CartStoreError(StorefrontError):
    """The persistence backend rejected or failed a cart operation."""


class CartPersistenceError(StorefrontError):
    """A cart mutation could not be persisted; local state was reloaded."""


class LoginRequiredError(StorefrontError):
    pass


class CheckoutError(StorefrontError):
    pass
