import json
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pandas as pd

from .errors import ParameterValidationError
from .models import Document

RowFilter = Callable[[pd.Series], bool]


def load_jsonl(path: Path) -> List[Document]:
    documents: List[Document] = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            if not line.strip():
                continue
            payload = json.loads(line)
            documents.append(
                Document(
                    doc_id=str(payload.get("doc_id")),
                    text=payload.get("text") or "",
                    metadata={
                        k: v for k, v in payload.items() if k not in {"doc_id", "text"}
                    },
                )
            )
    return documents


def load_csv(
    path: Path,
    text_column: str = "final_submission",
    id_column: str = "user_id",
    filter_conditions: Sequence[RowFilter] = (),
    num_rows: Optional[int] = None,
    sort_by_id: bool = True,
) -> List[Document]:
    """Read submissions from a CSV file.

    Rows are sorted by id (numerically when every id is an integer), then kept
    only if every predicate in ``filter_conditions`` accepts them, then cut to
    the first ``num_rows``.
    """
    frame = pd.read_csv(path)
    if sort_by_id:
        frame = frame.sort_values(by=id_column, key=_id_sort_key, kind="stable")
    if filter_conditions and len(frame):
        mask = frame.apply(
            lambda row: all(condition(row) for condition in filter_conditions), axis=1
        )
        frame = frame[mask.astype(bool)]
    if num_rows is not None:
        frame = frame.head(num_rows)
    logging.info("Loaded %d rows from %s", len(frame), path)

    documents: List[Document] = []
    for _, row in frame.iterrows():
        doc_id = _format_id(row[id_column])
        text = str(row[text_column]) if not pd.isna(row[text_column]) else ""
        documents.append(Document(doc_id=doc_id, text=text, metadata=row.to_dict()))
    return documents


def column_equals(column: str, value: str) -> RowFilter:
    """Row filter comparing a column's string form to ``value``."""

    def condition(row: pd.Series) -> bool:
        cell = row[column]
        if pd.isna(cell):
            return False
        return _format_id(cell) == value

    return condition


def load_text_directory(
    directory: Path,
    pattern: str = "*.txt",
    encoding: str = "utf-8",
    limit: Optional[int] = None,
) -> List[Document]:
    if not directory.exists() or not directory.is_dir():
        raise FileNotFoundError(f"Directory {directory} not found")

    files = sorted(directory.glob(pattern), key=lambda p: p.name)
    documents: List[Document] = []

    for idx, file in enumerate(files, start=1):
        documents.append(
            Document(
                doc_id=file.stem,
                text=file.read_text(encoding=encoding),
                metadata={"source_path": str(file)},
            )
        )
        if idx % 100 == 0:
            logging.debug("Loaded %d text files", idx)
        if limit is not None and len(documents) >= limit:
            logging.info("Reached limit of %d files", limit)
            break

    return documents


def load_documents(
    path: Path,
    text_column: str = "final_submission",
    id_column: str = "user_id",
    filter_conditions: Sequence[RowFilter] = (),
    limit: Optional[int] = None,
) -> List[Document]:
    """Load a directory of text files, a JSONL file or a CSV file.

    Row filters only apply to CSV input.
    """
    if path.is_dir() or path.suffix.lower() == ".jsonl":
        if filter_conditions:
            raise ParameterValidationError(
                "Row filters are only supported for CSV input",
                field="filter_conditions",
                value=str(path),
            )
        if path.is_dir():
            return load_text_directory(path, limit=limit)
        documents = load_jsonl(path)
        return documents if limit is None else documents[:limit]
    return load_csv(
        path,
        text_column=text_column,
        id_column=id_column,
        filter_conditions=filter_conditions,
        num_rows=limit,
    )


def _id_sort_key(ids: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(ids, errors="coerce")
    if numeric.notna().all():
        return numeric
    return ids.astype(str)


def _format_id(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
