"""
Severity filtering of the returned findings.

This is a whitelist on the finding type's pretty name, not an ordering:
- "Error" keeps findings whose pretty name contains "Error"
- "Warning" keeps findings whose pretty name contains "Error" or "Warning"
- anything else returns the findings unfiltered

The request token is matched ignoring case; the pretty-name match is a
case-sensitive substring test.
"""

from typing import Optional

from ccda_validation.models.enums import SeverityLevel
from ccda_validation.models.findings import Finding

ERROR = SeverityLevel.ERROR.value
WARNING = SeverityLevel.WARNING.value


def filter_results_on_severity(results: list[Finding], severity_level: Optional[str]) -> list[Finding]:
    """
    Narrow findings to the requested severity.

    Args:
        results: Merged findings in stage order
        severity_level: Raw severity token from the request

    Returns:
        Matching findings in their original order
    """
    level = SeverityLevel.from_token(severity_level)

    if level is SeverityLevel.ERROR:
        return [finding for finding in results if ERROR in finding.pretty_name]
    if level is SeverityLevel.WARNING:
        return [
            finding
            for finding in results
            if ERROR in finding.pretty_name or WARNING in finding.pretty_name
        ]
    return list(results)
