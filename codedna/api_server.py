from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from pathlib import Path
from typing import List, Dict, Any

from .pipeline import analyze_directory, analyze_records
from .types import InvalidFileRecordError
from .utils.logger import app_logger


logger = app_logger.bind(component="api_server")

app = FastAPI(title="CodeDNA Dependency Analytics API", version="1.0.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ImportModel(BaseModel):
    module: str
    isRelative: bool


class FileRecordModel(BaseModel):
    path: str = Field(min_length=1)
    language: str
    loc: int = Field(ge=0)
    complexity: int = Field(ge=1)
    imports: List[ImportModel]


class AnalyzeRequest(BaseModel):
    files: List[FileRecordModel]


class AnalyzePathRequest(BaseModel):
    path: str


class AnalyzeResponse(BaseModel):
    success: bool
    graph: Dict[str, Any]
    analytics: Dict[str, Any]
    stats: Dict[str, int]


@app.get("/api/health")
async def health():
    """Liveness check."""
    return {"status": "ok"}


@app.post("/api/analyze", response_model=AnalyzeResponse)
def analyze(request: AnalyzeRequest):
    """Build the dependency graph for the submitted file records and analyze it."""
    try:
        result = analyze_records(file.model_dump() for file in request.files)
    except InvalidFileRecordError as e:
        logger.warning(f"Rejected analysis request: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error analyzing file records: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return AnalyzeResponse(success=True, **result.to_dict())


@app.post("/api/analyze/path", response_model=AnalyzeResponse)
def analyze_path(request: AnalyzePathRequest):
    """Scan a local directory and analyze it."""
    if not Path(request.path).is_dir():
        raise HTTPException(status_code=404, detail="Directory not found")
    try:
        result = analyze_directory(request.path)
    except Exception as e:
        logger.error(f"Error analyzing {request.path}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return AnalyzeResponse(success=True, **result.to_dict())
