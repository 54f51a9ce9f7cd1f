"""Version catalog package.

This package lists the released versions of a Go module:
- semver.py: Go module version ordering
- module_path.py: module path validation and proxy case-escaping
- modfile.py: retract directives from go.mod documents
- retractions.py: merging and retraction annotation of version records
- catalog.py: proxy and Go release index queries
- listing.py: selection of records for display
- proxies.py: GOPROXY-style mirror lists
"""

from .models import RetractionRange, VersionRecord
from .catalog import list_versions, std_versions
from .listing import latest_std_version, select_for_display
from .proxies import parse_goproxy

__all__ = [
    "RetractionRange",
    "VersionRecord",
    "list_versions",
    "std_versions",
    "latest_std_version",
    "select_for_display",
    "parse_goproxy",
]
