"""Exceptions raised by the inventory rules engine."""


class DataIntegrityError(Exception):
    """Required record field missing or malformed."""
    pass


class PermissionDeniedError(Exception):
    """Organization role lacks the required permission."""
    pass


class SubscriptionError(Exception):
    """Missing or inactive subscription."""
    pass


class PlanTierError(SubscriptionError):
    """Subscription plan below the required tier."""
    pass
