"""API key redaction and audit logging for report requests."""

import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

_API_KEY_PATTERN = re.compile(r'(api_key=)[^&\s]*')


def redact_api_key(text: str) -> str:
    """
    Mask the api_key query value in a URL or error message.

    Args:
        text: URL or free text that may contain api_key=<value>

    Returns:
        Text with the key replaced by REDACTED
    """
    return _API_KEY_PATTERN.sub(r'\1REDACTED', text)


class AuditLogger:
    """Append-only audit trail of tool invocations."""

    def __init__(self, log_path: Optional[Union[str, Path]] = None):
        """
        Initialize audit logger.

        Args:
            log_path: Path to audit log file. When None, entries are discarded.
        """
        self.log_path = Path(log_path) if log_path else None

    def log(self, tool: str, action: str, details: str):
        """
        Write audit log entry.

        Args:
            tool: Tool name (revenue_report, cohort_request)
            action: REJECTED, FAILED or SUCCESS
            details: Additional details, redacted before writing
        """
        if self.log_path is None:
            return

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        log_entry = f"[{timestamp}] TOOL={tool} ACTION={action} DETAILS={redact_api_key(details)}\n"

        try:
            with open(self.log_path, 'a') as f:
                f.write(log_entry)
        except OSError as e:
            print(f"Warning: Could not write to audit log: {e}", file=sys.stderr)
