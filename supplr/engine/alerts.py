"""Inventory alerts - groups items needing attention and sends digests.

- Expired and expiring items are grouped by expiration window
- Low stock is checked independently of expiration
- Digests are rendered as plain text and handed to a pluggable sender
- A failing recipient never aborts delivery to the others
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Iterable, Optional

from supplr.config import EngineConfig
from supplr.engine.status import require_int, resolve_threshold, to_naive_utc, utcnow
from supplr.models.inventory import Item, Settings

logger = logging.getLogger(__name__)

SMS_ITEMS_PER_GROUP = 3


class AlertType(str, Enum):
    EXPIRED = "expired"
    EXPIRING = "expiring"
    LOW_STOCK = "low_stock"


ALERT_TITLES: dict[AlertType, str] = {
    AlertType.EXPIRED: "EXPIRED",
    AlertType.EXPIRING: "EXPIRING SOON",
    AlertType.LOW_STOCK: "LOW STOCK",
}


@dataclass
class AlertItem:
    id: str
    name: str
    sku: Optional[str]
    category: str
    quantity: int
    expiration_date: datetime
    reorder_threshold: int
    days_until_expiration: int


@dataclass
class InventoryAlert:
    alert_type: AlertType
    items: list[AlertItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.alert_type.value,
            "items": [
                {
                    "id": i.id,
                    "name": i.name,
                    "sku": i.sku,
                    "category": i.category,
                    "quantity": i.quantity,
                    "expirationDate": i.expiration_date.isoformat(),
                    "reorderThreshold": i.reorder_threshold,
                    "daysUntilExpiration": i.days_until_expiration,
                }
                for i in self.items
            ],
        }


@dataclass
class NotificationResult:
    success: bool
    sent: int = 0
    errors: list[str] = field(default_factory=list)


# --- Alert grouping ---

def build_alerts(
    items: Iterable[Item], settings: Settings, now: Optional[datetime] = None
) -> list[InventoryAlert]:
    """Groups items into expired, expiring and low stock alerts.

    An item may appear in both an expiration group and the low stock group.
    Empty groups are left out.
    """
    current = to_naive_utc(now, "now") if now is not None else utcnow()
    warning_days = require_int(settings.expiration_warning_days, "expirationWarningDays")
    warning_date = current + timedelta(days=warning_days)

    groups: dict[AlertType, list[AlertItem]] = {t: [] for t in AlertType}

    for item in items:
        expiration = to_naive_utc(item.expiration_date, "expirationDate")
        threshold = resolve_threshold(item, settings)
        alert_item = AlertItem(
            id=item.id,
            name=item.name,
            sku=item.sku,
            category=item.category,
            quantity=item.quantity,
            expiration_date=expiration,
            reorder_threshold=threshold,
            days_until_expiration=(expiration - current).days,
        )

        if expiration < current:
            groups[AlertType.EXPIRED].append(alert_item)
        elif current < expiration < warning_date:
            groups[AlertType.EXPIRING].append(alert_item)

        if item.quantity <= threshold:
            groups[AlertType.LOW_STOCK].append(alert_item)

    return [
        InventoryAlert(alert_type=alert_type, items=group)
        for alert_type, group in groups.items()
        if group
    ]


def count_alert_items(alerts: Iterable[InventoryAlert]) -> int:
    return sum(len(alert.items) for alert in alerts)


# --- Rendering ---

def alert_subject(alerts: list[InventoryAlert]) -> str:
    return f"Inventory Alert - {count_alert_items(alerts)} items need attention"


def _sms_line(alert_type: AlertType, item: AlertItem) -> str:
    if alert_type == AlertType.EXPIRED:
        return f"- {item.name} - EXPIRED"
    if alert_type == AlertType.EXPIRING:
        return f"- {item.name} - {item.days_until_expiration}d left"
    return f"- {item.name} - {item.quantity} left"


def render_sms_text(
    alerts: list[InventoryAlert], organization_name: str, app_url: str = ""
) -> str:
    """Short plain-text digest, a few items per group."""
    lines = [f"{organization_name} Inventory Alert", ""]

    for alert in alerts:
        lines.append(f"{ALERT_TITLES[alert.alert_type]} ({len(alert.items)} items)")
        for item in alert.items[:SMS_ITEMS_PER_GROUP]:
            lines.append(_sms_line(alert.alert_type, item))
        remaining = len(alert.items) - SMS_ITEMS_PER_GROUP
        if remaining > 0:
            lines.append(f"- ...and {remaining} more items")
        lines.append("")

    lines.append(f"View details: {app_url.rstrip('/')}/dashboard/inventory")
    return "\n".join(lines)


# --- Delivery ---

Sender = Callable[[str, str, str], None]


class AlertNotifier:
    """Sends alert digests to organization members.

    sender(recipient, subject, body) does the actual delivery (SMTP, SMS
    gateway, queue) and raises on failure.
    """

    def __init__(self, sender: Sender, app_url: str = "") -> None:
        self._sender = sender
        self.app_url = app_url

    @classmethod
    def from_config(cls, config: EngineConfig, sender: Sender) -> "AlertNotifier":
        return cls(sender, app_url=config.app_url)

    def notify(
        self,
        recipients: Iterable[str],
        alerts: list[InventoryAlert],
        organization_name: str,
    ) -> NotificationResult:
        if not alerts:
            return NotificationResult(success=True)

        subject = alert_subject(alerts)
        body = render_sms_text(alerts, organization_name, self.app_url)
        result = NotificationResult(success=True)

        for recipient in recipients:
            try:
                self._sender(recipient, subject, body)
                result.sent += 1
            except Exception as e:
                logger.error("Alert delivery failed for %s: %s", recipient, e)
                result.errors.append(f"Delivery failed for {recipient}: {e}")

        logger.info(
            "Alert digest for %s: %d sent, %d failed",
            organization_name,
            result.sent,
            len(result.errors),
        )
        return result
