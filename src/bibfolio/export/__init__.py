"""Export of publications and cleaned citations."""

from bibfolio.export.bibtex_writer import INTERNAL_FIELDS, reconstruct_bibtex, write_bib_file
from bibfolio.export.json_writer import write_publications_json, write_publications_jsonl

__all__ = [
    "INTERNAL_FIELDS",
    "reconstruct_bibtex",
    "write_bib_file",
    "write_publications_json",
    "write_publications_jsonl",
]
