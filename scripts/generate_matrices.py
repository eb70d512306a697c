import argparse
import logging
import sys
from pathlib import Path
from typing import List

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from similarity_matrix.export import default_output_path, write_csv_directory, write_xlsx
from similarity_matrix.loader import RowFilter, column_equals, load_documents
from similarity_matrix.matrix import MatrixGenerator
from similarity_matrix.models import DEFAULT_METRICS, METRIC_NAMES, MatrixConfig


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate pairwise similarity matrices for a set of submissions"
    )
    parser.add_argument(
        "dataset", type=Path, help="CSV file, JSONL file or directory of .txt files"
    )
    parser.add_argument(
        "output_dir", type=Path, help="Directory for the timestamped output"
    )
    parser.add_argument(
        "--format",
        choices=["xlsx", "csv"],
        default="xlsx",
        help="One workbook with a sheet per metric, or a directory of per-metric CSVs",
    )
    parser.add_argument("--text-column", default="final_submission")
    parser.add_argument("--id-column", default="user_id")
    parser.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="COLUMN=VALUE",
        help="Keep only CSV rows where COLUMN equals VALUE (repeatable)",
    )
    parser.add_argument(
        "--limit", type=int, help="Limit number of rows loaded (for testing)"
    )
    parser.add_argument(
        "--metrics",
        nargs="+",
        default=list(DEFAULT_METRICS),
        choices=list(METRIC_NAMES),
        help="Metrics to compute",
    )
    parser.add_argument("--tokenize-method", default="word")
    parser.add_argument("--vectorize-method", default="bow")
    parser.add_argument("--k", type=int, default=3, help="Winnowing k-gram size")
    parser.add_argument("--w", type=int, default=4, help="Winnowing window size")
    parser.add_argument(
        "--stopword-language",
        default="english",
        help="nltk stopword list; pass an empty string to keep stopwords",
    )
    parser.add_argument("--max-workers", type=int, default=1)
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser.parse_args()


def build_filters(expressions: List[str]) -> List[RowFilter]:
    filters: List[RowFilter] = []
    for expression in expressions:
        column, sep, value = expression.partition("=")
        if not sep or not column:
            raise SystemExit(f"Invalid filter {expression!r}, expected COLUMN=VALUE")
        filters.append(column_equals(column.strip(), value.strip()))
    return filters


def main() -> None:
    args = parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s %(message)s",
    )

    config = MatrixConfig(
        tokenize_method=args.tokenize_method,
        vectorize_method=args.vectorize_method,
        metrics=args.metrics,
        k=args.k,
        w=args.w,
        stopword_language=args.stopword_language or None,
        max_workers=args.max_workers,
    )
    generator = MatrixGenerator(config=config)

    logging.info("Loading documents from %s", args.dataset)
    documents = load_documents(
        args.dataset,
        text_column=args.text_column,
        id_column=args.id_column,
        filter_conditions=build_filters(args.filter),
        limit=args.limit,
    )
    if not documents:
        raise SystemExit("No documents left after filtering the dataset")

    logging.info("Loaded %d documents. Computing matrices...", len(documents))
    result = generator.generate(documents)

    if args.format == "csv":
        output_path = default_output_path(args.output_dir, suffix="")
        logging.info("Writing matrices to %s", output_path)
        write_csv_directory(output_path, result)
    else:
        output_path = default_output_path(args.output_dir)
        logging.info("Writing matrices to %s", output_path)
        write_xlsx(output_path, result)
    logging.info("Done.")


if __name__ == "__main__":
    main()
