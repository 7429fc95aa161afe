import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from prompt_builder import config, core, limits, llm, models

logger = logging.getLogger(__name__)


app = FastAPI(title="Design Prompt Builder")


def _error(message: str) -> dict:
    return models.ErrorResponse(message=message).model_dump()


@app.exception_handler(limits.UnknownPlatformError)
async def unknown_platform_handler(request: Request, exc: limits.UnknownPlatformError) -> JSONResponse:
    logger.error(f"Platform error: {exc}")
    return JSONResponse(
        status_code=400,
        content=_error(str(exc)),
    )


@app.exception_handler(llm.LLMNotConfiguredError)
async def llm_not_configured_handler(request: Request, exc: llm.LLMNotConfiguredError) -> JSONResponse:
    return JSONResponse(
        status_code=501,
        content=_error(str(exc)),
    )


@app.exception_handler(llm.LLMError)
async def llm_error_handler(request: Request, exc: llm.LLMError) -> JSONResponse:
    logger.error(f"LLM error: {exc}")
    return JSONResponse(
        status_code=502,
        content=_error(f"AI request failed: {exc}"),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content=_error(messages),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error")
    return JSONResponse(
        status_code=500,
        content=_error("Internal server error"),
    )


@app.get("/")
async def root():
    return {
        "service": "Design Prompt Builder",
        "usage": "POST /assemble with {\"data\": {...}, \"mode\": \"idea|product|team\"}",
        "docs": "/docs",
    }


@app.get("/platforms")
async def platforms() -> dict[str, models.PlatformLimit]:
    return dict(config.PLATFORM_LIMITS)


@app.post("/assemble", response_model=models.AssembleResponse)
async def assemble(request: models.AssembleRequest) -> models.AssembleResponse:
    return core.assemble_prompt(request)


@app.post("/split", response_model=models.SplitResponse)
async def split(request: models.SplitRequest) -> models.SplitResponse:
    return core.split_for_platform(request.text, request.platform)


@app.post("/export/cursor", response_model=models.CursorExportResponse)
async def export_cursor(data: models.ProjectData) -> models.CursorExportResponse:
    return core.export_cursor(data)


@app.post("/extract", response_model=models.ExtractionResult)
async def extract(request: models.ExtractRequest) -> models.ExtractionResult:
    return await core.extract(request)


@app.post("/extract/apply", response_model=models.ApplyExtractionResponse)
async def apply_extraction(request: models.ApplyExtractionRequest) -> models.ApplyExtractionResponse:
    return core.apply_extraction(request)


@app.post("/prd", response_model=models.PrdResponse)
async def prd(request: models.PrdRequest) -> models.PrdResponse:
    return await core.generate_prd(request.prompt_data)


@app.post("/refine", response_model=models.RefineResponse)
async def refine(request: models.RefineRequest) -> models.RefineResponse:
    return await core.refine_and_split(request.prompt, request.platform)
