"""Translation of tool arguments into the MAX reporting query-string dialect."""

from typing import Any, Callable, Iterator, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlencode

from .arguments import get_boolean, get_number, get_string, get_string_list
from .errors import InvalidCohortInterval, MissingRequiredArgument
from .schema import ParameterSpec, ParamKind


# Days-since-install windows accepted by the cohort endpoints
COHORT_INTERVALS = frozenset({0, 1, 2, 3, 4, 5, 6, 7, 10, 14, 18, 21, 24, 27, 30, 45})

TIME_SERIES_SUFFIXES = ("_rpi", "_imp", "_retention")
TIME_SERIES_COLUMNS = frozenset({"pub_revenue", "sessions", "session_length", "daily_usage"})

ColumnExpander = Callable[[str, Mapping[str, Any]], List[str]]


class QueryParameters:
    """Ordered collection of query parameters, encoded in insertion order."""

    def __init__(self):
        self._pairs: List[Tuple[str, str]] = []

    def add(self, key: str, value: str) -> None:
        self._pairs.append((key, value))

    def get(self, key: str) -> Optional[str]:
        for k, v in self._pairs:
            if k == key:
                return v
        return None

    def items(self) -> List[Tuple[str, str]]:
        return list(self._pairs)

    def keys(self) -> List[str]:
        return [k for k, _ in self._pairs]

    def encode(self) -> str:
        return urlencode(self._pairs)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._pairs)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"QueryParameters({self._pairs!r})"


def is_time_series_column(column: str) -> bool:
    """Whether a cohort column is reported per day since install."""
    return (
        column.endswith(TIME_SERIES_SUFFIXES)
        or "_per_user" in column
        or column in TIME_SERIES_COLUMNS
    )


def parse_cohort_interval(value: Any) -> int:
    """
    Parse and validate a cohort_interval argument.

    Args:
        value: String such as "7", or an integral JSON number

    Returns:
        The interval in days

    Raises:
        InvalidCohortInterval if the value is not an integer or not an allowed window
    """
    if isinstance(value, bool):
        raise InvalidCohortInterval("cohort_interval string couldn't be parsed to int")

    if isinstance(value, str):
        try:
            interval = int(value.strip())
        except ValueError:
            raise InvalidCohortInterval("cohort_interval string couldn't be parsed to int")
    elif isinstance(value, int):
        interval = value
    elif isinstance(value, float) and value.is_integer():
        interval = int(value)
    else:
        raise InvalidCohortInterval("cohort_interval string couldn't be parsed to int")

    if interval not in COHORT_INTERVALS:
        raise InvalidCohortInterval(f"invalid cohort_interval: {value}")

    return interval


def expand_cohort_column(column: str, arguments: Mapping[str, Any]) -> List[str]:
    """
    Expand a time-series cohort metric into one column per day since install.

    ads_rpi with cohort_interval=3 becomes ads_rpi_0, ads_rpi_1, ads_rpi_2, ads_rpi_3.
    Other columns are returned unchanged.

    Raises:
        MissingRequiredArgument if the column needs cohort_interval and none was given
        InvalidCohortInterval if cohort_interval is not acceptable
    """
    if not is_time_series_column(column):
        return [column]

    raw_interval = arguments.get("cohort_interval") if arguments else None
    if raw_interval is None:
        raise MissingRequiredArgument(
            f"cohort_interval required when using time-based metric: {column}"
        )

    interval = parse_cohort_interval(raw_interval)
    return [f"{column}_{day}" for day in range(interval + 1)]


def _fold(spec: ParameterSpec, value: str) -> str:
    return value.lower() if spec.lowercase else value


def _columns_value(
    spec: ParameterSpec,
    arguments: Mapping[str, Any],
    expand_column: Optional[ColumnExpander],
) -> Optional[str]:
    columns = get_string_list(arguments, spec.name)
    if columns is None:
        return None

    expanded: List[str] = []
    for column in columns:
        column = _fold(spec, column)
        if expand_column is None:
            expanded.append(column)
        else:
            expanded.extend(expand_column(column, arguments))

    if not expanded:
        return None
    return ",".join(expanded)


def _parameter_value(
    spec: ParameterSpec,
    arguments: Mapping[str, Any],
    expand_column: Optional[ColumnExpander],
) -> Optional[str]:
    if spec.kind is ParamKind.STRING:
        value = get_string(arguments, spec.name)
        return _fold(spec, value) if value is not None else None

    if spec.kind is ParamKind.NUMBER:
        number = get_number(arguments, spec.name)
        return str(int(number)) if number is not None else None

    if spec.kind is ParamKind.BOOLEAN:
        # Flags are sent as 1 when set; false is never sent
        return "1" if get_boolean(arguments, spec.name) else None

    if spec.kind is ParamKind.STRING_ARRAY:
        return _columns_value(spec, arguments, expand_column)

    raise ValueError(f"Unsupported parameter kind: {spec.kind}")


def assemble_query(
    parameters: Sequence[ParameterSpec],
    arguments: Optional[Mapping[str, Any]],
    api_key: str,
    expand_column: Optional[ColumnExpander] = None,
) -> QueryParameters:
    """
    Build the MAX query for one tool invocation.

    Parameters are emitted in declaration order after api_key. Values the
    caller supplied with the wrong type are treated as absent.

    Args:
        parameters: Parameter specs of the tool being invoked
        arguments: Argument bag from the MCP client
        api_key: Report key sent as the api_key parameter
        expand_column: Optional hook that rewrites each requested column

    Returns:
        QueryParameters ready to be encoded

    Raises:
        MissingRequiredArgument if api_key or a required parameter is missing
        InvalidCohortInterval if column expansion rejects cohort_interval
    """
    if not api_key:
        raise MissingRequiredArgument("api_key required")

    arguments = arguments or {}
    query = QueryParameters()
    query.add("api_key", api_key)

    for spec in parameters:
        if not spec.in_query:
            continue

        value = _parameter_value(spec, arguments, expand_column)
        if value is None:
            if spec.required:
                raise MissingRequiredArgument(f"{spec.name} required")
            continue

        query.add(spec.name, value)

    return query
