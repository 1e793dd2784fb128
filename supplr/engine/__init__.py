from supplr.engine.alerts import AlertNotifier, build_alerts
from supplr.engine.features import get_subscription_features
from supplr.engine.reports import ReportArchiver, build_inventory_report
from supplr.engine.status import add_status, classify
from supplr.engine.summary import summarize, waste_report

__all__ = [
    "AlertNotifier",
    "ReportArchiver",
    "add_status",
    "build_alerts",
    "build_inventory_report",
    "classify",
    "get_subscription_features",
    "summarize",
    "waste_report",
]
