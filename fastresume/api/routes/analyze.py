from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from fastresume.core.analyzer import analyze_batch, analyze_cached
from fastresume.core.schemas import AnalysisResponse, AnalyzeRequest, BatchAnalyzeRequest

router = APIRouter(tags=["analysis"])

MIN_TEXT_CHARS = 10
MIN_PRINTABLE_RATIO = 0.35

TEXT_CONTENT_TYPES = {"text/plain", "text/markdown", "application/json"}
TEXT_EXTENSIONS = (".txt", ".md", ".json")
BINARY_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
BINARY_EXTENSIONS = (".pdf", ".doc", ".docx", ".png", ".jpg", ".jpeg", ".webp", ".gif")


def _non_blank_len(text: Optional[str]) -> int:
    return sum(1 for c in (text or "") if not c.isspace())


def _printable_ratio(text: str) -> float:
    if not text:
        return 0.0
    ok = sum(1 for c in text if (c.isprintable() and c != "�") or c in "\n\r\t")
    return ok / len(text)


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    summary="Analyze Resume Text",
    description="Parse résumé text, extract JD requirements and score coverage. Returns work entries, skills, requirement matches, category coverage and the primary/additional experience selection.",
    responses={
        400: {"description": "Résumé text too short"},
    },
)
def analyze_text(req: AnalyzeRequest):
    """
    Analyze pasted résumé text against an optional job description.

    **Returns:**
    - **contact** / **education** / **work_entries**: parsed résumé fields
    - **resume_skills** / **jd_skills**: hard and soft skills of each side
    - **requirements** / **matches** / **coverage_pct**: JD requirements and their best résumé evidence
    - **coverage**: per-category coverage with bilingual labels
    - **selection**: primary and additional experience for the generated document
    """
    if _non_blank_len(req.resume_text) < MIN_TEXT_CHARS:
        raise HTTPException(status_code=400, detail="Résumé text is empty or too short.")
    return analyze_cached(req.resume_text, req.jd_text, req.options)


@router.post(
    "/analyze/file",
    response_model=AnalysisResponse,
    summary="Analyze Resume File",
    description="Analyze an uploaded plain-text résumé (TXT, MD or JSON). Pasted text takes precedence over the file. Binary formats must be converted to text upstream.",
    responses={
        400: {"description": "No résumé text supplied"},
        415: {"description": "Unsupported (binary) file format"},
        422: {"description": "File has no readable text"},
    },
)
async def analyze_file(
    file: Optional[UploadFile] = File(None, description="Résumé as TXT, MD or JSON"),
    text: Optional[str] = Form(None, description="Pasted résumé text, preferred over the file"),
    jd: Optional[str] = Form(None, description="Job description text"),
):
    if text and text.strip():
        resume_text = text.strip()
    elif file is not None:
        raw = await file.read()
        if not raw:
            raise HTTPException(status_code=400, detail="Empty file uploaded.")

        filename = (file.filename or "").lower()
        content_type = (file.content_type or "").lower()

        if content_type in BINARY_CONTENT_TYPES or content_type.startswith("image/") or filename.endswith(BINARY_EXTENSIONS):
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported content type: {file.content_type}. Paste the résumé text or upload a TXT/MD file.",
            )
        if content_type not in TEXT_CONTENT_TYPES and not filename.endswith(TEXT_EXTENSIONS):
            raise HTTPException(status_code=415, detail=f"Unsupported content type for now: {file.content_type}")

        resume_text = raw.decode("utf-8", errors="replace")
        if _printable_ratio(resume_text) < MIN_PRINTABLE_RATIO:
            raise HTTPException(status_code=422, detail="File does not contain readable text.")
    else:
        raise HTTPException(status_code=400, detail="Provide a résumé file or pasted text.")

    if _non_blank_len(resume_text) < MIN_TEXT_CHARS:
        raise HTTPException(status_code=400, detail="Résumé text is empty or too short.")
    return analyze_cached(resume_text, jd or "")


@router.post(
    "/analyze/batch",
    response_model=List[AnalysisResponse],
    summary="Analyze Resumes In Batch",
    description="Analyze several résumés against one job description. Results keep input order.",
)
def analyze_many(req: BatchAnalyzeRequest):
    return analyze_batch(req.resumes, req.jd_text, req.options)
