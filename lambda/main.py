from fastapi import FastAPI, Request, HTTPException, Depends
from fastapi.responses import JSONResponse, Response
from mangum import Mangum
from models import *
from extraction_service import ExtractionError
import render_service
import time
from utils import logging
import word_service

EXTRACTION_FAILED_MESSAGE = "Unable to find a word. Please try describing your feeling differently."

# FASTAPI app and AWS Lambda handler
app = FastAPI()
handler = Mangum(app)

# Dependency to extract user info from the request
def get_current_user(request: Request):
    claims = request.scope.get("aws.event", {}).get("requestContext", {}).get("authorizer", {}).get("claims", {})
    if not claims:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return {
        "user_id": claims.get("sub"),
        "email": claims.get("email"),
        "username": claims.get("cognito:username"),
    }

@app.middleware("http")
async def log_requests(request: Request, call_next):
    # Generate a request ID for tracking
    logging.set_request_id()

    start_time = time.time()
    logging.info(f"Incoming request: {request.method} {request.url}")

    try:
        response = await call_next(request)

        process_time = time.time() - start_time
        logging.info(f"Completed request: {request.method} {request.url} with {response.status_code} in {process_time:.2f} seconds")

        return response
    finally:
        logging.clear_request_id()

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logging.exception(f"Unhandled exception at {request.method} {request.url.path} - {str(exc)}")

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error", "error": str(exc)},
    )

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )

@app.exception_handler(ExtractionError)
async def extraction_exception_handler(request: Request, exc: ExtractionError):
    logging.warning(f"Extraction failed at {request.url.path} - {exc.reason}")
    return JSONResponse(
        status_code=422,
        content={"detail": EXTRACTION_FAILED_MESSAGE, "reason": exc.reason},
    )

@app.post("/word/extract", response_model=WordResult)
async def extract_word(req: CompletionRequest):
    return word_service.find_word(req.completion, req.query)

@app.post("/word/card")
async def create_card(result: WordResult, variant: CardVariantEnum = CardVariantEnum.ARCHIVE):
    png = word_service.build_card(result, variant)
    headers = {}
    if variant == CardVariantEnum.ARCHIVE:
        headers["Content-Disposition"] = f'attachment; filename="{render_service.card_filename(result.word)}"'
    return Response(content=png, media_type="image/png", headers=headers)

@app.get("/archive", response_model=ArchiveList)
async def get_archive(current_user: dict = Depends(get_current_user)):
    user_id = current_user["user_id"]
    return word_service.get_archive(user_id)

@app.post("/archive", response_model=ArchiveList)
async def archive_word(result: WordResult, current_user: dict = Depends(get_current_user)):
    user_id = current_user["user_id"]
    return word_service.archive_word(user_id, result)

@app.delete("/archive")
async def clear_archive(current_user: dict = Depends(get_current_user)):
    user_id = current_user["user_id"]
    return word_service.clear_archive(user_id)
