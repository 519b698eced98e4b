"""
Test result output format.

Results are printed as JSON wrapped in markers so a runner reading
stdout can pick them out of surrounding log lines.
"""

import json
from typing import Any, Dict, Optional

# Schema version - increment on breaking changes
SCHEMA_VERSION = "1.0"

START_MARKER = "===LABORANT_RESULTS==="
END_MARKER = "===LABORANT_RESULTS_END==="


def format_output(data: Dict[str, Any]) -> str:
    """
    Wrap test results JSON in markers.

    Args:
        data: Test results dictionary

    Returns:
        Formatted output string with markers
    """
    json_str = json.dumps(data, indent=2)
    return f"{START_MARKER}\n{json_str}\n{END_MARKER}"


def parse_test_output(stdout: str) -> Optional[Dict[str, Any]]:
    """
    Extract the JSON results block from test stdout.

    Returns:
        Parsed JSON dict or None if no well-formed block is present
    """
    start_idx = stdout.find(START_MARKER)
    end_idx = stdout.find(END_MARKER)

    if start_idx == -1 or end_idx == -1:
        return None

    json_str = stdout[start_idx + len(START_MARKER) : end_idx].strip()
    try:
        return json.loads(json_str)
    except json.JSONDecodeError:
        return None
