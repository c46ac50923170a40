import base64
import hashlib
import io
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, UploadFile, File, HTTPException
from .encoding import decode_input
from .models import HealthResponse, NormalizedCsv, NormalizeResponse
from .normalize import Normalizer
from .pipeline import normalize_stream
from .rules import OUTPUT_ENCODING


@asynccontextmanager
async def lifespan(app: FastAPI):
    # a missing time zone raises StartupError here and the app never serves
    app.state.normalizer = Normalizer.from_zone_names()
    yield


app = FastAPI(
    title="recnorm",
    description="Timestamp, duration, zip and name normalization for fixed-layout CSV records",
    version="0.1.0",
    lifespan=lifespan,
)


def get_normalizer(request: Request) -> Normalizer:
    return request.app.state.normalizer


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/normalize", response_model=NormalizeResponse)
async def normalize_csv(file: UploadFile = File(...), normalizer: Normalizer = Depends(get_normalizer)):
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    text, _ = decode_input(raw, detect_encoding=True)

    sink = io.StringIO(newline="")
    report = normalize_stream(io.StringIO(text, newline=""), sink, normalizer)
    normalized = sink.getvalue().encode(OUTPUT_ENCODING, errors="surrogateescape")

    return NormalizeResponse(
        normalized_csv=NormalizedCsv(
            sha256=hashlib.sha256(normalized).hexdigest(),
            encoding=OUTPUT_ENCODING,
            content_b64=base64.b64encode(normalized).decode("ascii"),
        ),
        report=report,
    )
