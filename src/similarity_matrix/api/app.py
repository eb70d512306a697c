import os
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from similarity_matrix.errors import SimilarityError
from similarity_matrix.matrix import MatrixGenerator
from similarity_matrix.models import DEFAULT_METRICS, Document, MatrixConfig

DEFAULT_METRIC_NAMES = [
    name.strip()
    for name in os.environ.get("SIMILARITY_METRICS", ",".join(DEFAULT_METRICS)).split(",")
    if name.strip()
]
DEFAULT_MAX_WORKERS = int(os.environ.get("SIMILARITY_MAX_WORKERS", "1"))
DEFAULT_STOPWORD_LANGUAGE = os.environ.get("SIMILARITY_STOPWORD_LANGUAGE", "english") or None

app = FastAPI(title="Similarity Matrix Service")


class DocumentPayload(BaseModel):
    doc_id: str
    text: str


class MatrixRequest(BaseModel):
    documents: List[DocumentPayload]
    metrics: Optional[List[str]] = None
    tokenize_method: str = "word"
    vectorize_method: str = "bow"
    k: int = 3
    w: int = 4
    jaccard_ngram: Optional[int] = None
    stopword_language: Optional[str] = DEFAULT_STOPWORD_LANGUAGE


class MatrixResponse(BaseModel):
    doc_ids: List[str]
    matrices: Dict[str, List[List[Optional[float]]]]
    process_time: float


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/similarity/matrix", response_model=MatrixResponse)
def similarity_matrix(req: MatrixRequest) -> MatrixResponse:
    config = MatrixConfig(
        tokenize_method=req.tokenize_method,
        vectorize_method=req.vectorize_method,
        metrics=req.metrics or DEFAULT_METRIC_NAMES,
        k=req.k,
        w=req.w,
        jaccard_ngram=req.jaccard_ngram,
        stopword_language=req.stopword_language,
        max_workers=DEFAULT_MAX_WORKERS,
    )
    try:
        generator = MatrixGenerator(config=config)
    except SimilarityError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc

    documents = [Document(doc_id=doc.doc_id, text=doc.text) for doc in req.documents]
    result = generator.generate(documents)
    return MatrixResponse(
        doc_ids=result.doc_ids,
        matrices=result.to_lists(),
        process_time=result.process_time,
    )
