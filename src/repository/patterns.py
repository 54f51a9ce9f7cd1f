"""Static table mapping module paths to source repositories.

Each rule's regular expression must match a prefix of a module path (or of
a repo URL with its scheme removed) and must define a group named "repo".
Rules are tried in order and the first match wins: later rules are more
permissive and must not shadow the specific hosting conventions before
them. The table is built once at import time and never mutated.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple

from common.errors import PatternTableError

logger = logging.getLogger(__name__)

IssuesFunc = Callable[[str], str]

_NAME = r"[a-z0-9A-Z_.\-]+"
_HOST = r"[a-z0-9A-Z.-]+"

APACHE_DOMAIN = "git.apache.org/"
BLITIRI_DOMAIN = "blitiri.com.ar/"


def _issues_suffix(suffix: str) -> IssuesFunc:
    return lambda repo: f"{repo}{suffix}"


def _same(repo: str) -> str:
    return repo


@dataclass(frozen=True)
class PatternRule:
    """A hosting convention: path pattern plus issues URL transform."""
    pattern: str
    issues: IssuesFunc
    name: str = ""
    regex: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        regex = re.compile(self.pattern)
        if "repo" not in regex.groupindex:
            raise PatternTableError(f"pattern {self.pattern} missing <repo> group")
        object.__setattr__(self, "regex", regex)

    def match(self, path: str) -> Optional[str]:
        """Return the repo captured from path, or None."""
        m = self.regex.search(path)
        if m is None:
            return None
        return m.group("repo")


@dataclass(frozen=True)
class StaticMatch:
    """Result of a static table lookup."""
    repo: str
    issues: IssuesFunc
    rule: PatternRule


def _build(specs: Sequence[Tuple[str, str, IssuesFunc]]) -> Tuple[PatternRule, ...]:
    return tuple(PatternRule(pattern=p, issues=f, name=n) for n, p, f in specs)


PATTERNS: Tuple[PatternRule, ...] = _build([
    ("github.com", rf"^(?P<repo>github\.com/{_NAME}/{_NAME})", _issues_suffix("/issues")),
    # Any site beginning with "github." works like github.com.
    ("github.*", rf"^(?P<repo>github\.{_HOST}/{_NAME}/{_NAME})(\.git|$)", _issues_suffix("/issues")),
    ("bitbucket.org", rf"^(?P<repo>bitbucket\.org/{_NAME}/{_NAME})", _issues_suffix("/issues")),
    ("gitlab.com", rf"^(?P<repo>gitlab\.com/{_NAME}/{_NAME})", _issues_suffix("/-/issues")),
    # Any site beginning with "gitlab." works like gitlab.com.
    ("gitlab.*", rf"^(?P<repo>gitlab\.{_HOST}/{_NAME}/{_NAME})(\.git|$)", _issues_suffix("/-/issues")),
    ("gitee.com", rf"^(?P<repo>gitee\.com/{_NAME}/{_NAME})(\.git|$)", _issues_suffix("/issues")),
    ("git.sr.ht", rf"^(?P<repo>git\.sr\.ht/~{_NAME}/{_NAME})",
     lambda repo: repo.replace("git.sr.ht", "todo.sr.ht", 1)),
    ("git.fd.io", rf"^(?P<repo>git\.fd\.io/{_NAME})", _same),
    ("git.pirl.io", rf"^(?P<repo>git\.pirl\.io/{_NAME}/{_NAME})", _same),
    ("gitea.com", rf"^(?P<repo>gitea\.com/{_NAME}/{_NAME})(\.git|$)", _issues_suffix("/issues")),
    # Any site beginning with "gitea." works like gitea.com.
    ("gitea.*", rf"^(?P<repo>gitea\.{_HOST}/{_NAME}/{_NAME})(\.git|$)", _issues_suffix("/issues")),
    ("go.isomorphicgo.org", rf"^(?P<repo>go\.isomorphicgo\.org/{_NAME}/{_NAME})(\.git|$)", _issues_suffix("/issues")),
    ("git.openprivacy.ca", rf"^(?P<repo>git\.openprivacy\.ca/{_NAME}/{_NAME})(\.git|$)", _issues_suffix("/issues")),
    ("gogs.*", rf"^(?P<repo>gogs\.{_HOST}/{_NAME}/{_NAME})(\.git|$)", _same),
    ("dmitri.shuralyov.com", r"^(?P<repo>dmitri\.shuralyov\.com/.+)$", _issues_suffix("$issues")),
    ("blitiri.com.ar", r"^(?P<repo>blitiri\.com\.ar/go/.+)$", lambda repo: "mailto:albertito@blitiri.com.ar"),
    # General go command conventions: import paths carry a VCS suffix, repo
    # URLs taken from meta tags do not.
    ("googlesource.com", r"^(?P<repo>[^.]+\.googlesource\.com/[^.]+)(\.git|$)", _same),
    ("git.apache.org", r"^(?P<repo>git\.apache\.org/[^.]+)(\.git|$)", _same),
    # Any host with a VCS suffixed path. The repo keeps its suffix; URL
    # templates are unknown so issues fall back to the repo. Must be last.
    # Host labels exclude "." so the repeated group cannot backtrack
    # exponentially on long dotted paths.
    ("vcs-suffix",
     r"(?P<repo>[a-z0-9\-]+(\.[a-z0-9\-]+)+(:[0-9]+)?(/~?[A-Za-z0-9_.\-]+)+?\.(bzr|fossil|git|hg|svn))",
     _same),
])


def match_static(path: str, patterns: Sequence[PatternRule] = PATTERNS) -> Optional[StaticMatch]:
    """Match a module path or scheme-less repo URL against the table.

    Returns None when no rule matches.
    """
    for rule in patterns:
        repo = rule.match(path)
        if repo is None:
            continue
        # git.apache.org go-import tags point at github.com/apache but drop
        # the ".git" the repo prefix needs.
        if repo.startswith(APACHE_DOMAIN):
            repo = repo.replace(APACHE_DOMAIN, "github.com/apache/", 1)
        # Module paths are blitiri.com.ar/go/..., repos blitiri.com.ar/git/r/...
        if repo.startswith(BLITIRI_DOMAIN):
            repo = repo.replace("/go/", "/git/r/", 1)
        logger.debug("Static rule %s matched %s -> %s", rule.name, path, repo)
        return StaticMatch(repo=repo, issues=rule.issues, rule=rule)
    return None


def trim_vcs_suffix(repo_url: str) -> str:
    """Remove a ".git" suffix where the host is known to redirect cleanly.

    GitHub redirects github.com/foo/bar.git but 404s on deeper paths built
    from it, so only github.com and gitlab.com are trimmed.
    """
    if not repo_url.endswith(".git"):
        return repo_url
    if repo_url.startswith(("https://github.com/", "https://gitlab.com/")):
        return repo_url[:-len(".git")]
    return repo_url


def remove_http_scheme(url: str) -> str:
    """Strip a leading http:// or https://; other schemes are left alone."""
    for prefix in ("https://", "http://"):
        if url.startswith(prefix):
            return url[len(prefix):]
    return url
