# designlens/main.py

from functools import lru_cache
from typing import Any, Callable

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from designlens.config import configure_logging, get_settings
from designlens.errors import AnalyzerConfigError, NoContentError
from designlens.schemas import (
    AnalyzeRequest,
    CompareRequest,
    ComparisonAnalysisResponse,
    DesignAnalysisResponse,
    FlowAnalysisResponse,
    FlowRequest,
    HealthResponse,
)
from designlens.services.documents import extract_text_from_bytes, is_image, to_data_url
from designlens.services.llm import DesignAnalyzer

settings = get_settings()
configure_logging(settings.log_level)


@lru_cache(maxsize=1)
def get_analyzer() -> DesignAnalyzer:
    return DesignAnalyzer.from_settings(get_settings())


def _run(action: Callable[..., Any], *args: Any) -> Any:
    try:
        return action(*args)
    except (AnalyzerConfigError, NoContentError, HTTPException):
        raise
    except Exception as e:
        logger.exception("Analysis failed")
        raise HTTPException(status_code=500, detail=str(e) or "Failed to analyze design")


# --------------------------------------------
# FASTAPI APP
# --------------------------------------------
app = FastAPI(title="DesignLens", description="LLM feedback for UI designs and user flows.")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(AnalyzerConfigError)
async def analyzer_config_error(request: Request, exc: AnalyzerConfigError):
    logger.error("Model client not configured: {}", exc)
    return JSONResponse(status_code=500, content={"detail": "API key is not configured"})


@app.exception_handler(NoContentError)
async def no_content_error(request: Request, exc: NoContentError):
    logger.error("Model returned no content for {}", request.url.path)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


# --------------------------------------------
# Design review
# --------------------------------------------
@app.post("/api/analyze", response_model=DesignAnalysisResponse)
def analyze(payload: AnalyzeRequest, analyzer: DesignAnalyzer = Depends(get_analyzer)):
    if not payload.image:
        raise HTTPException(status_code=400, detail="No image provided")

    analysis = _run(analyzer.analyze_design, payload.image, payload.concise)
    return DesignAnalysisResponse(analysis=analysis)


@app.post("/api/analyze/upload", response_model=DesignAnalysisResponse)
async def analyze_upload(
    file: UploadFile = File(...),
    concise: bool = False,
    analyzer: DesignAnalyzer = Depends(get_analyzer),
):
    image_url = await _read_image(file)
    analysis = await run_in_threadpool(_run, analyzer.analyze_design, image_url, concise)
    return DesignAnalysisResponse(analysis=analysis)


# --------------------------------------------
# Design comparison
# --------------------------------------------
@app.post("/api/compare", response_model=ComparisonAnalysisResponse)
def compare(payload: CompareRequest, analyzer: DesignAnalyzer = Depends(get_analyzer)):
    if not payload.your_design or not payload.competitor_design:
        raise HTTPException(status_code=400, detail="Both designs are required")

    analysis = _run(analyzer.compare_designs, payload.your_design, payload.competitor_design)
    return ComparisonAnalysisResponse(analysis=analysis)


@app.post("/api/compare/upload", response_model=ComparisonAnalysisResponse)
async def compare_upload(
    your_design: UploadFile = File(...),
    competitor_design: UploadFile = File(...),
    analyzer: DesignAnalyzer = Depends(get_analyzer),
):
    yours = await _read_image(your_design)
    theirs = await _read_image(competitor_design)
    analysis = await run_in_threadpool(_run, analyzer.compare_designs, yours, theirs)
    return ComparisonAnalysisResponse(analysis=analysis)


# --------------------------------------------
# User flow
# --------------------------------------------
@app.post("/api/analyze-flow", response_model=FlowAnalysisResponse)
def analyze_flow(payload: FlowRequest, analyzer: DesignAnalyzer = Depends(get_analyzer)):
    if payload.mode == "text" and payload.flow_description and payload.flow_description.strip():
        logger.info("Processing text-based flow analysis")
        analysis = _run(analyzer.analyze_user_flow, payload.flow_description)
    elif payload.mode == "image" and payload.image:
        logger.info("Processing image-based flow analysis")
        analysis = _run(analyzer.analyze_flow_from_image, payload.image)
    else:
        raise HTTPException(
            status_code=400,
            detail="Invalid request format. Please provide either flowDescription or image.",
        )
    return FlowAnalysisResponse(analysis=analysis)


@app.post("/api/analyze-flow/upload", response_model=FlowAnalysisResponse)
async def analyze_flow_upload(
    file: UploadFile = File(...),
    analyzer: DesignAnalyzer = Depends(get_analyzer),
):
    file_bytes = await file.read()
    if not file_bytes:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    if is_image(file.content_type):
        image_url = to_data_url(file_bytes, file.content_type)
        analysis = await run_in_threadpool(_run, analyzer.analyze_flow_from_image, image_url)
        return FlowAnalysisResponse(analysis=analysis)

    text = extract_text_from_bytes(file_bytes, file.content_type or file.filename or "")
    if not text.strip():
        raise HTTPException(status_code=400, detail="Could not read a flow description from the uploaded file")

    analysis = await run_in_threadpool(_run, analyzer.analyze_user_flow, text)
    return FlowAnalysisResponse(analysis=analysis)


async def _read_image(file: UploadFile) -> str:
    if not is_image(file.content_type):
        raise HTTPException(status_code=400, detail=f"Unsupported image type: {file.content_type}")
    file_bytes = await file.read()
    if not file_bytes:
        raise HTTPException(status_code=400, detail="No image provided")
    return to_data_url(file_bytes, file.content_type)


# --------------------------------------------
# Service
# --------------------------------------------
@app.get("/health", response_model=HealthResponse)
def health():
    current = get_settings()
    return HealthResponse(llm_provider=DesignAnalyzer.provider, has_api_key=current.has_api_key)


@app.get("/")
def root():
    return {
        "service": "designlens",
        "endpoints": ["/api/analyze", "/api/compare", "/api/analyze-flow", "/health"],
    }


def run() -> None:
    import uvicorn

    uvicorn.run("designlens.main:app", host="0.0.0.0", port=8000)
