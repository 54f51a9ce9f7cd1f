"""Repository URL resolution package.

- patterns.py: static table of hosting conventions
- meta.py: go-import/go-source meta tag discovery
- golang.py: cs.opensource.google override for golang.org modules
- resolver.py: ordered resolution chain
"""

from .models import RepoResolution
from .resolver import resolve_repo

__all__ = [
    "RepoResolution",
    "resolve_repo",
]
