import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from .models import MatrixResult

ID_HEADER = "doc_id"
MAX_SHEET_NAME = 31
UNDEFINED_MARKER = "NaN"


def default_output_path(
    directory: Path, now: Optional[datetime] = None, suffix: str = ".xlsx"
) -> Path:
    stamp = (now or datetime.now()).strftime("%Y%m%d%H%M")
    return directory / f"similarity_matrix({stamp}){suffix}"


def write_xlsx(path: Path, result: MatrixResult) -> Path:
    """Write one worksheet per metric, ids along the first row and column.

    Diagonal and undefined cells hold the text ``NaN``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, frame in result.to_frames().items():
            frame.index.name = ID_HEADER
            frame.to_excel(writer, sheet_name=name[:MAX_SHEET_NAME], na_rep=UNDEFINED_MARKER)
    logging.info("Excel file - '%s' has been created.", path.name)
    return path


def write_csv_directory(directory: Path, result: MatrixResult) -> Path:
    """Write ``<metric>.csv`` per metric into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, frame in result.to_frames().items():
        frame.index.name = ID_HEADER
        frame.to_csv(directory / f"{name}.csv", na_rep=UNDEFINED_MARKER)
    logging.info("CSV matrices written to %s", directory)
    return directory
