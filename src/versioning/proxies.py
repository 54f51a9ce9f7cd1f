"""GOPROXY-style mirror list handling."""

import re
from typing import Iterable, List, Union

from constants import Constants

_SEP_RE = re.compile(r"[,|]")


def parse_goproxy(value: Union[str, Iterable[str], None]) -> List[str]:
    """Return the network mirrors named by a GOPROXY value.

    Entries are separated by "," or "|"; blanks and the non-network
    entries "off" and "direct" are dropped. A list of entries is accepted
    as well, as loaded from a config file.
    """
    if value is None:
        return []
    if isinstance(value, str):
        entries = _SEP_RE.split(value)
    else:
        entries = [str(v) for v in value]
    proxies = []
    for entry in entries:
        entry = entry.strip()
        if not entry or entry in Constants.NON_NETWORK_PROXIES:
            continue
        proxies.append(entry.rstrip("/"))
    return proxies
