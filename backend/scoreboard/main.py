from __future__ import annotations

import logging

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from scoreboard.decoding import decode_bytes
from scoreboard.env import load_env
from scoreboard.exporter import to_csv
from scoreboard.models import HealthResponse, MatchReportResponse
from scoreboard.normalizer import ParseError, normalize
from scoreboard.report import MatchReport
from scoreboard.settings import Settings

env_files = load_env()

settings = Settings.from_env()

# Configure logging
logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
if env_files:
    logger.info(f"[CONFIG] loaded env from {', '.join(str(path) for path in env_files)}")

app = FastAPI(title="Ascend Scoreboard API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

JSON_CONTENT_TYPES = {"application/json", "text/json"}


def _is_json_upload(file: UploadFile) -> bool:
    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    return filename.endswith(".json") or content_type in JSON_CONTENT_TYPES


async def _read_report(file: UploadFile) -> MatchReport:
    if not _is_json_upload(file):
        logger.warning(f"[UPLOAD] rejected non-JSON file {file.filename!r}")
        raise HTTPException(status_code=422, detail="Only JSON files are supported")

    # One byte past the limit is enough to tell an oversized upload apart.
    raw = await file.read(settings.max_upload_bytes + 1)
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds {settings.max_upload_bytes} bytes",
        )

    try:
        text = decode_bytes(raw)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    try:
        report = normalize(text)
    except ParseError as exc:
        logger.warning(f"[UPLOAD] invalid JSON in {file.filename!r}: {exc}")
        raise HTTPException(status_code=400, detail="Invalid JSON file.")
    logger.info(
        f"[UPLOAD] {file.filename!r}: {len(report.leaderboard)} players, "
        f"map={report.map}, score={report.match_score}"
    )
    return report


@app.post("/api/match/report", response_model=MatchReportResponse)
async def match_report(file: UploadFile = File(...)) -> MatchReportResponse:
    try:
        report = await _read_report(file)
        return MatchReportResponse.from_report(report)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("[UPLOAD] failed to build report")
        raise HTTPException(status_code=500, detail=str(exc))


@app.post("/api/match/csv")
async def match_csv(file: UploadFile = File(...)) -> Response:
    try:
        report = await _read_report(file)
        body = to_csv(report)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("[UPLOAD] failed to export CSV")
        raise HTTPException(status_code=500, detail=str(exc))
    return Response(
        content=body.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{settings.csv_filename}"'},
    )


@app.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        debug_mode=settings.debug_mode,
        csv_filename=settings.csv_filename,
    )
