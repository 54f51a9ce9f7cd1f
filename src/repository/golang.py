"""Repository override for golang.org modules hosted on cs.opensource.google."""

from typing import Tuple

from constants import Constants

# Repos hosted at https://cs.opensource.google/go that are not an x/ repo.
CS_NON_X_REPOS = frozenset({"dl", "proposal", "vscode-go"})

# x/ repos hosted at https://cs.opensource.google/go. x/scratch is not.
CS_X_REPOS = frozenset({
    "x/arch", "x/benchmarks", "x/blog", "x/build", "x/crypto", "x/debug",
    "x/example", "x/exp", "x/image", "x/mobile", "x/mod", "x/net",
    "x/oauth2", "x/perf", "x/pkgsite", "x/playground", "x/review", "x/sync",
    "x/sys", "x/talks", "x/term", "x/text", "x/time", "x/tools", "x/tour",
    "x/vgo", "x/website", "x/xerrors",
})


def cs_repo_for(module_path: str) -> str:
    """Return the cs.opensource.google repo name for a golang.org path, or ""."""
    suffix = module_path[len(Constants.GOLANG_DOMAIN):] if module_path.startswith(Constants.GOLANG_DOMAIN) else ""
    parts = suffix.split("/")
    if len(parts) >= 2:
        suffix = parts[0] + "/" + parts[1]
    if suffix.startswith("x/"):
        return suffix if suffix in CS_X_REPOS else ""
    return suffix if suffix in CS_NON_X_REPOS else ""


def adjust_go_repo_info(repo: str, issues: str, module_path: str) -> Tuple[str, str]:
    """Point golang.org modules at their browsable mirror when one exists.

    Paths without a known mirror keep the URLs resolved so far.
    """
    name = cs_repo_for(module_path)
    if not name:
        return repo, issues
    return f"{Constants.CS_GO_BASE}/{name}", Constants.GO_ISSUES_URL
