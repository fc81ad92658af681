"""Report renderers and writers: stdout, JSON, CSV and SARIF."""

from .filters import OutputFilters, build_filter_metadata, filter_findings
from .writer import build_summary, write_skill_reports

__all__ = ["OutputFilters", "build_filter_metadata", "build_summary", "filter_findings", "write_skill_reports"]
