"""Errors raised while turning tool arguments into a MAX query."""


class ToolError(Exception):
    """Raised when a tool invocation is rejected before any request is sent."""
    pass


class MissingRequiredArgument(ToolError):
    """Raised when a required argument is absent or has the wrong type."""
    pass


class InvalidCohortInterval(ToolError):
    """Raised when cohort_interval is unparsable or outside the allowed windows."""
    pass
