"""Repository URL resolver.

Resolution is an ordered chain of steps; each returns a RepoResolution or
None to pass to the next:

1. the reserved example.com test domain,
2. the standard library,
3. the static pattern table,
4. go-import/go-source meta tags on the module's landing page.

The result for a golang.org module is then pointed at its
cs.opensource.google mirror when one exists.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from constants import Constants
from common.deadline import Deadline, unbounded
from common.errors import NotFound
from common.logging_utils import extra_context, is_debug_enabled
from .golang import adjust_go_repo_info
from .meta import fetch_meta
from .models import RepoResolution
from .patterns import match_static, remove_http_scheme, trim_vcs_suffix

logger = logging.getLogger(__name__)

Step = Callable[[str, Deadline], Optional[RepoResolution]]


def _test_domain(module: str, deadline: Deadline) -> Optional[RepoResolution]:
    # example.com can never be real; treat it as directly browsable.
    if not module.startswith(Constants.TEST_DOMAIN):
        return None
    repo = trim_vcs_suffix("https://" + module)
    return RepoResolution(repo_url=repo, issues_url=repo, source="test-domain")


def _standard_library(module: str, deadline: Deadline) -> Optional[RepoResolution]:
    if module != Constants.STD_MODULE:
        return None
    return RepoResolution(
        repo_url=Constants.GO_SOURCE_REPO_URL,
        issues_url=Constants.GO_ISSUES_URL,
        source="std",
    )


def _static_table(module: str, deadline: Deadline) -> Optional[RepoResolution]:
    match = match_static(module)
    if match is None:
        return None
    repo = trim_vcs_suffix("https://" + match.repo)
    return RepoResolution(repo_url=repo, issues_url=match.issues(repo), source=f"static:{match.rule.name}")


def _live_metadata(module: str, deadline: Deadline) -> Optional[RepoResolution]:
    meta = fetch_meta(module, deadline)
    repo = trim_vcs_suffix(meta.repo_url.rstrip("/"))
    match = match_static(remove_http_scheme(meta.repo_url))
    issues = match.issues(repo) if match is not None else repo
    return RepoResolution(repo_url=repo, issues_url=issues, source="meta")


STEPS: Sequence[Step] = (_test_domain, _standard_library, _static_table, _live_metadata)


def _run_steps(module: str, deadline: Deadline, steps: Sequence[Step]) -> RepoResolution:
    for step in steps:
        res = step(module, deadline)
        if res is None:
            continue
        if is_debug_enabled(logger):
            logger.debug(
                "Repository resolved",
                extra=extra_context(
                    event="decision",
                    component="repo_resolver",
                    action=step.__name__.lstrip("_"),
                    outcome="resolved",
                    target=module,
                )
            )
        return res
    raise NotFound(f"{module}: no repository declaration found")


def resolve_repo(
    module: str,
    deadline: Optional[Deadline] = None,
    steps: Sequence[Step] = STEPS,
) -> RepoResolution:
    """Return the source repository and issues URLs for a module path.

    Raises:
        NotFound: no static rule and no usable meta declaration
            (AmbiguousMetadata when declarations conflict).
        NetworkFailure: the landing page could not be fetched at all.
    """
    deadline = deadline or unbounded()
    res = _run_steps(module, deadline, steps)
    if module.startswith(Constants.GOLANG_DOMAIN):
        repo, issues = adjust_go_repo_info(res.repo_url, res.issues_url, module)
        if (repo, issues) != (res.repo_url, res.issues_url):
            res = RepoResolution(repo_url=repo, issues_url=issues, source="golang")
    logger.info("%s: repo %s, issues %s", module, res.repo_url, res.issues_url)
    return res
