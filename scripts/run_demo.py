#!/usr/bin/env python3
import argparse
import os
import sys
from pathlib import Path

import requests


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Similarity matrix API demo")
    parser.add_argument(
        "files", type=Path, nargs="+", help="Text files to compare with each other"
    )
    parser.add_argument(
        "--metrics", nargs="+", help="Metric names (server defaults when omitted)"
    )
    parser.add_argument(
        "--api-url",
        default=os.environ.get("SIMILARITY_API_URL", "http://localhost:8000"),
        help="Base URL of the similarity matrix API",
    )
    return parser.parse_args()


def call_matrix(api_url: str, documents: list, metrics=None) -> dict:
    payload = {"documents": documents}
    if metrics:
        payload["metrics"] = metrics
    response = requests.post(
        f"{api_url}/similarity/matrix",
        json=payload,
        timeout=120,
    )
    response.raise_for_status()
    return response.json()


def format_cell(value) -> str:
    return "   n/a" if value is None else f"{value:6.3f}"


def main() -> None:
    args = parse_args()

    if len(args.files) < 2:
        print("Provide at least two text files to compare.")
        sys.exit(1)

    documents = [
        {"doc_id": path.stem, "text": path.read_text(encoding="utf-8")}
        for path in args.files
    ]
    result = call_matrix(args.api_url, documents, args.metrics)

    doc_ids = result["doc_ids"]
    width = max(len(doc_id) for doc_id in doc_ids)
    for name, matrix in result["matrices"].items():
        print("-" * 80)
        print(name)
        print(" " * width + " " + " ".join(f"{doc_id[:6]:>6}" for doc_id in doc_ids))
        for doc_id, row in zip(doc_ids, matrix):
            print(f"{doc_id:<{width}} " + " ".join(format_cell(value) for value in row))
    print("-" * 80)
    print(f"Process time: {result['process_time']:.2f}s")


if __name__ == "__main__":
    main()
