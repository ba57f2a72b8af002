"""Revenue report tool: aggregated mediation statistics from /maxReport."""

from typing import Any, Mapping

from ..schema import (
    REPORT_FORMATS,
    ToolDescriptor,
    columns_param,
    not_zero_param,
    pagination_params,
    sort_param,
    string_param,
)
from . import MaxReportTool

REVENUE_COLUMNS = (
    # dimensions
    "day", "hour", "application", "package_name", "ad_format", "country",
    "platform", "network", "network_placement", "max_placement", "max_ad_unit_id",
    "custom_network_name", "ad_unit_waterfall_name", "device_type", "store_id",
    "has_idfa", "max_ad_unit_test",
    # metrics
    "impressions", "responses", "requests", "attempts", "estimated_revenue",
    "ecpm", "fill_rate",
)

REVENUE_REPORT = ToolDescriptor(
    name="revenue_report",
    description="sends a revenue report request to AppLovin Max API for aggregated mediation statistics",
    parameters=(
        string_param("start", "YYYY-MM-DD formatted starting date.", required=True),
        string_param("end", "YYYY-MM-DD formatted ending date.", required=True),
        string_param("format", "output format", required=True, enum=REPORT_FORMATS),
        columns_param(
            "Metrics to include in the report. Use dimension columns to group data "
            "(day, hour, application, country, platform) and metric columns to get "
            "performance data (impressions, responses, estimated_revenue, ecpm, fill_rate). "
            "You can combine multiple dimensions and metrics in a single request.",
            items=REVENUE_COLUMNS,
            default=("day", "application"),
        ),
        string_param("filter_application", "application filter", lowercase=False),
        string_param("filter_package_name", "package_name filter", lowercase=False),
        string_param("filter_ad_type", "ad_type filter (e.g., banner, inter, rewarded)"),
        string_param("filter_country", "country filter, two letter iso code"),
        string_param("filter_platform", "platform filter (e.g., android, ios)"),
        string_param("filter_network", "network filter", lowercase=False),
        string_param("filter_zone", "zone filter", lowercase=False),
        sort_param("sort_day", "Sort by day"),
        sort_param("sort_hour", "Sort by hour"),
        sort_param("sort_estimated_revenue", "Sort by estimated revenue"),
        *pagination_params(
            "Limit number of results for pagination",
            "Offset for pagination",
        ),
        not_zero_param("Exclude results where all numerical metrics equal zero"),
    ),
)


class RevenueReportTool(MaxReportTool):
    """Tool for requesting aggregated revenue reports."""

    descriptor = REVENUE_REPORT

    def endpoint(self, arguments: Mapping[str, Any]) -> str:
        return "/maxReport"
