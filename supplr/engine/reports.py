"""Inventory reports and their S3 archive."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Iterable, Optional

import boto3
from botocore.exceptions import ClientError

from supplr.config import EngineConfig
from supplr.engine.status import add_status, to_naive_utc, utcnow
from supplr.engine.summary import items_needing_attention, summarize, waste_report
from supplr.models.inventory import InventoryStatus, Item, Settings

logger = logging.getLogger(__name__)


def build_inventory_report(
    items: Iterable[Item],
    settings: Settings,
    now: Optional[datetime] = None,
    waste_window_days: Optional[int] = None,
) -> dict:
    """Classifies the inventory once and bundles summary and waste figures.

    The waste window defaults to the configured SUPPLR_WASTE_WINDOW_DAYS.
    """
    if waste_window_days is None:
        waste_window_days = EngineConfig.from_env().waste_window_days
    current = to_naive_utc(now, "now") if now is not None else utcnow()
    classified = add_status(items, settings, current)

    status_counts = {status.value: 0 for status in InventoryStatus}
    for entry in classified:
        status_counts[entry.status.value] += 1

    return {
        "reportDate": current.isoformat(),
        "summary": summarize(classified).to_dict(),
        "waste": waste_report(classified, waste_window_days, current).to_dict(),
        "needsAttention": len(items_needing_attention(classified)),
        "statusCounts": status_counts,
    }


class ReportArchiver:
    """Writes inventory reports to S3 as JSON, one object per report."""

    def __init__(
        self,
        bucket_name: str,
        s3_client: Optional[Any] = None,
        region_name: str = "us-east-1",
    ):
        if not bucket_name:
            raise ValueError("Report bucket name is required")
        self.bucket_name = bucket_name
        self.s3 = s3_client or boto3.client("s3", region_name=region_name)

    @classmethod
    def from_config(
        cls, config: EngineConfig, s3_client: Optional[Any] = None
    ) -> "ReportArchiver":
        return cls(config.report_bucket, s3_client=s3_client, region_name=config.region_name)

    def report_key(self, organization_id: str, report: dict) -> str:
        stamp = report.get("reportDate") or utcnow().isoformat()
        stamp = stamp.replace(":", "-").split(".")[0]
        return f"inventory-reports/{organization_id}/{stamp}.json"

    def archive(self, organization_id: str, report: dict) -> str:
        """Stores the report and returns its object key."""
        key = self.report_key(organization_id, report)
        try:
            self.s3.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=json.dumps(report, default=str),
                ContentType="application/json",
            )
        except ClientError as e:
            logger.error("Report archive failed [%s]: %s", organization_id, e)
            raise

        logger.info("Report archived: s3://%s/%s", self.bucket_name, key)
        return key
