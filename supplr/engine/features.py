"""Subscription feature gating.

- Maps a subscription to the feature flags its plan unlocks
- Missing or inactive subscriptions fall back to trial features
- Demo organizations get full enterprise access
- Plan tier and item limit checks for write paths
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from supplr.config import EngineConfig
from supplr.errors import PlanTierError, SubscriptionError

logger = logging.getLogger(__name__)

PLAN_HIERARCHY: list[str] = ["trial", "starter", "professional", "enterprise"]

PLAN_DISPLAY_NAMES: dict[str, str] = {
    "trial": "Trial",
    "starter": "Starter",
    "professional": "Professional",
    "enterprise": "Enterprise",
}

# Aliases accepted on stored subscriptions
PLAN_ALIASES: dict[str, str] = {
    "pro": "professional",
    "basic": "starter",
}


@dataclass
class Subscription:
    plan: str
    status: str
    is_active: bool
    item_limit: int
    advanced_analytics: bool = False
    custom_categories: bool = False
    api_access: bool = False
    multi_location: bool = False
    custom_reports: bool = False


@dataclass(frozen=True)
class SubscriptionFeatures:
    plan: str
    item_limit: int
    advanced_analytics: bool = False
    custom_categories: bool = False
    api_access: bool = False
    multi_location: bool = False
    custom_reports: bool = False
    ai_predictions: bool = False
    ai_automation: bool = False


TRIAL_FEATURES = SubscriptionFeatures(plan="trial", item_limit=5)

DEMO_FEATURES = SubscriptionFeatures(
    plan="enterprise",
    item_limit=999999,
    advanced_analytics=True,
    custom_categories=True,
    api_access=True,
    multi_location=True,
    custom_reports=True,
    ai_predictions=True,
    ai_automation=True,
)

FEATURE_FLAGS = frozenset({
    "advanced_analytics",
    "custom_categories",
    "api_access",
    "multi_location",
    "custom_reports",
    "ai_predictions",
    "ai_automation",
})


def normalize_plan(plan: str) -> str:
    key = (plan or "").strip().lower()
    return PLAN_ALIASES.get(key, key)


def is_subscription_active(subscription: Optional[Subscription]) -> bool:
    if subscription is None:
        return False
    return subscription.is_active and subscription.status == "active"


def _plan_features(subscription: Subscription) -> SubscriptionFeatures:
    base = SubscriptionFeatures(plan=subscription.plan, item_limit=subscription.item_limit)
    plan = normalize_plan(subscription.plan)

    if plan == "enterprise":
        return replace(
            base,
            advanced_analytics=subscription.advanced_analytics,
            custom_categories=subscription.custom_categories,
            api_access=subscription.api_access,
            multi_location=subscription.multi_location,
            custom_reports=subscription.custom_reports,
            ai_predictions=True,
            ai_automation=True,
        )
    if plan == "professional":
        # API access, multi-location and automation are enterprise only
        return replace(
            base,
            advanced_analytics=subscription.advanced_analytics,
            custom_categories=subscription.custom_categories,
            custom_reports=subscription.custom_reports,
            ai_predictions=True,
        )
    if plan == "starter":
        return replace(
            base,
            custom_categories=subscription.custom_categories,
            ai_predictions=True,
        )
    return TRIAL_FEATURES


def get_subscription_features(
    subscription: Optional[Subscription],
    member_emails: Iterable[str] = (),
    demo_email: Optional[str] = None,
) -> SubscriptionFeatures:
    """Resolves the feature flags an organization is entitled to.

    demo_email defaults to SUPPLR_DEMO_EMAIL; an empty string disables the
    demo override.
    """
    if demo_email is None:
        demo_email = EngineConfig.from_env().demo_email
    if demo_email and demo_email in member_emails:
        return DEMO_FEATURES

    if subscription is None:
        return TRIAL_FEATURES

    if not is_subscription_active(subscription):
        logger.warning(
            "Subscription inactive: status=%s, is_active=%s",
            subscription.status,
            subscription.is_active,
        )
        return TRIAL_FEATURES

    return _plan_features(subscription)


def has_feature_access(features: Optional[SubscriptionFeatures], feature: str) -> bool:
    if feature not in FEATURE_FLAGS:
        raise ValueError(f"Unknown feature: {feature}")
    if features is None:
        return False
    return getattr(features, feature)


def has_exceeded_item_limit(subscription: Optional[Subscription], item_count: int) -> bool:
    """Inactive subscriptions count as over the limit."""
    if not is_subscription_active(subscription):
        return True
    return item_count >= subscription.item_limit


def require_active_subscription(subscription: Optional[Subscription]) -> Subscription:
    if subscription is None:
        raise SubscriptionError("No subscription found")
    if not is_subscription_active(subscription):
        raise SubscriptionError(
            f"Subscription inactive: status={subscription.status}, "
            f"is_active={subscription.is_active}"
        )
    return subscription


def _plan_rank(plan: str) -> int:
    try:
        return PLAN_HIERARCHY.index(normalize_plan(plan))
    except ValueError:
        return -1


def require_plan_tier(subscription: Optional[Subscription], required_plan: str) -> Subscription:
    """Raises PlanTierError unless the subscription is at least required_plan."""
    active = require_active_subscription(subscription)
    if _plan_rank(required_plan) < 0:
        raise ValueError(f"Unknown plan: {required_plan}")
    if _plan_rank(active.plan) < _plan_rank(required_plan):
        raise PlanTierError(
            f"Feature requires {required_plan} plan or higher. "
            f"Current plan: {active.plan}"
        )
    return active


def plan_display_name(plan: str) -> str:
    return PLAN_DISPLAY_NAMES.get(normalize_plan(plan), "Unknown")
