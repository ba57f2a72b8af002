"""Cohort tool: install cohort revenue, impression and session analyses."""

from typing import Any, List, Mapping

from ..arguments import get_string
from ..query import COHORT_INTERVALS, expand_cohort_column
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

COHORT_ENDPOINTS = {
    "revenue": "/maxCohort",
    "impression": "/maxCohort/imp",
    "session": "/maxCohort/session",
}
DEFAULT_COHORT_TYPE = "revenue"

COHORT_COLUMNS = (
    "day", "installs", "country", "platform", "package_name", "application",
    "ads_rpi", "iap_rpi", "pub_revenue", "inter_rpi", "banner_rpi", "reward_rpi",
    "imp", "imp_per_user", "banner_imp", "inter_imp", "reward_imp",
    "retention", "sessions", "session_length", "daily_usage",
)

COHORT_REQUEST = ToolDescriptor(
    name="cohort_request",
    description=(
        "retrieves user cohort performance data segmented by installation date from AppLovin Max. "
        "Use this to analyze how revenue, impressions, or sessions evolve over time for users who "
        "installed on specific dates. Choose the cohort_type based on what metrics you need: "
        "'revenue' for ad revenue and IAP, 'impression' for ad impressions, or 'session' for "
        "retention and usage patterns."
    ),
    parameters=(
        string_param(
            "cohort_type",
            "Type of cohort data to retrieve: 'revenue' for ad revenue/IAP metrics (default), "
            "'impression' for ad impression data, 'session' for retention/session metrics",
            enum=tuple(COHORT_ENDPOINTS),
            default=DEFAULT_COHORT_TYPE,
            in_query=False,
        ),
        string_param(
            "start",
            "Start date for the cohort analysis in YYYY-MM-DD format. "
            "This is the installation date to start from.",
            required=True,
        ),
        string_param(
            "end",
            "End date for the cohort analysis in YYYY-MM-DD format. "
            "Maximum 45-day range from start date.",
            required=True,
        ),
        string_param(
            "format",
            "Response format: 'json' for structured data or 'csv' for comma-separated values",
            required=True,
            enum=REPORT_FORMATS,
        ),
        columns_param(
            "Metrics to include in the report. IMPORTANT: When requesting time-based metrics "
            "(columns ending in _rpi, _imp, _retention, containing _per_user, or pub_revenue, "
            "sessions, session_length, daily_usage), you MUST also specify cohort_interval. "
            "Common dimension columns: day (install date), installs, country, platform, "
            "package_name, application. Common revenue metrics: ads_rpi (ad revenue per install), "
            "iap_rpi (in-app purchase revenue per install), pub_revenue (publisher revenue), "
            "inter_rpi/banner_rpi/reward_rpi (by ad type). Common impression metrics: imp, "
            "imp_per_user, banner_imp, inter_imp, reward_imp. Common session metrics: retention, "
            "sessions, session_length, daily_usage.",
            items=COHORT_COLUMNS,
            default=("day", "installs"),
        ),
        string_param(
            "cohort_interval",
            "REQUIRED when using time-based metrics. Specifies how many days post-install to "
            "track. For example, cohort_interval=7 returns metrics for days 0 through 7 after "
            "install (e.g., ads_rpi_0, ads_rpi_1, ... ads_rpi_7). Use 0 for install day only, "
            "7 for first week, 30 for first month, 45 for maximum range.",
            enum=tuple(str(day) for day in sorted(COHORT_INTERVALS)),
            in_query=False,
        ),
        string_param(
            "filter_country",
            "Filter results to a specific country using two-letter ISO code (e.g., 'US', 'GB', 'JP')",
        ),
        string_param(
            "filter_package_name",
            "Filter results to a specific app package name (e.g., 'com.example.app')",
            lowercase=False,
        ),
        string_param(
            "filter_platform",
            "Filter results to a specific platform: 'android' or 'ios'",
        ),
        string_param(
            "filter_application",
            "Filter results to a specific application name",
            lowercase=False,
        ),
        sort_param(
            "sort_day",
            "Sort results by installation day in ascending (ASC) or descending (DESC) order",
        ),
        sort_param(
            "sort_installs",
            "Sort results by number of installs in ascending (ASC) or descending (DESC) order",
        ),
        *pagination_params(
            "Limit the number of results returned (for pagination)",
            "Skip the first N results (for pagination, use with limit)",
        ),
        not_zero_param("When true, exclude rows where all metric values are zero"),
    ),
)


def cohort_endpoint(cohort_type: str) -> str:
    """Endpoint path for a cohort type; unknown types fall back to revenue."""
    return COHORT_ENDPOINTS.get(cohort_type, COHORT_ENDPOINTS[DEFAULT_COHORT_TYPE])


class CohortRequestTool(MaxReportTool):
    """Tool for requesting install cohort analyses."""

    descriptor = COHORT_REQUEST

    def endpoint(self, arguments: Mapping[str, Any]) -> str:
        cohort_type = get_string(arguments, "cohort_type") or DEFAULT_COHORT_TYPE
        return cohort_endpoint(cohort_type.lower())

    def expand_column(self, column: str, arguments: Mapping[str, Any]) -> List[str]:
        return expand_cohort_column(column, arguments)
