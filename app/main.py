from typing import List

from fastapi import FastAPI, UploadFile, File, Form, HTTPException, Response

from .config import get_settings
from .exceptions import StructureError
from .logs import configure_logging
from .models import CleanResponse, HealthResponse
from .normalize import clean_csv_bytes, parse_column_names

settings = get_settings()
configure_logging(settings.log_level, settings.log_json)

app = FastAPI(
    title="csv-email-cleaner",
    description="Drop CSV rows with invalid emails, repair common typos",
    version="0.1.0",
)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


async def _clean_upload(file: UploadFile, columns: List[str]) -> dict:
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    expected = parse_column_names(columns)
    if not expected:
        raise HTTPException(status_code=422, detail="Please add at least one column name.")

    too_large = HTTPException(status_code=413, detail=f"CSV exceeds {settings.max_upload_mb} MB")
    if file.size is not None and file.size > settings.max_upload_bytes:
        raise too_large

    raw = await file.read()
    if len(raw) > settings.max_upload_bytes:
        raise too_large

    try:
        return clean_csv_bytes(
            raw,
            file.filename,
            expected,
            max_workers=settings.max_workers,
            parallel_min_rows=settings.parallel_min_rows,
        )
    except StructureError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())


@app.post("/clean", response_model=CleanResponse)
async def clean_csv(file: UploadFile = File(...), columns: List[str] = Form(...)):
    return await _clean_upload(file, columns)


@app.post("/clean/download")
async def download_cleaned_csv(file: UploadFile = File(...), columns: List[str] = Form(...)):
    cleaned = (await _clean_upload(file, columns))["cleaned_csv"]
    return Response(
        content=cleaned["content"],
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{cleaned["filename"]}"'},
    )
