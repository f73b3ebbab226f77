"""JSON writers for publication lists."""

import json
from collections.abc import Iterable
from pathlib import Path

from bibfolio.models import Publication


def write_publications_json(
    publications: Iterable[Publication],
    path: Path,
    *,
    indent: int = 2,
) -> int:
    """Write publications as a JSON array in list order.

    Absent attributes are omitted from each object.

    Parameters
    ----------
    publications : Iterable[Publication]
        Publications to write.
    path : Path
        Output file path.
    indent : int, optional
        JSON indentation, by default 2.

    Returns
    -------
    int
        Number of publications written.
    """
    data = [pub.to_dict() for pub in publications]

    with path.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(data, f, ensure_ascii=False, indent=indent)
        f.write("\n")

    return len(data)


def write_publications_jsonl(publications: Iterable[Publication], path: Path) -> int:
    """Write publications to JSONL (one JSON object per line).

    Returns
    -------
    int
        Number of publications written.
    """
    count = 0
    with path.open("w", encoding="utf-8", newline="\n") as f:
        for pub in publications:
            f.write(json.dumps(pub.to_dict(), ensure_ascii=False))
            f.write("\n")
            count += 1
    return count
