import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from consult_copilot import __version__
from consult_copilot.api.routes.consultation_routes import router as consultation_routes
from consult_copilot.core.config import settings
from consult_copilot.core.errors import (
    ConsultationBusyError,
    EmptyInputError,
    NoActivePatientError,
    PatientNotFoundError,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("consult_copilot")

app = FastAPI(
    title="Consultation Copilot",
    description="Live question suggestions and end-of-visit summaries for doctor-patient consultations",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EmptyInputError)
async def empty_input_handler(request: Request, exc: EmptyInputError):
    return JSONResponse({"detail": str(exc)}, status_code=422)


@app.exception_handler(NoActivePatientError)
async def no_active_patient_handler(request: Request, exc: NoActivePatientError):
    return JSONResponse({"detail": str(exc)}, status_code=404)


@app.exception_handler(PatientNotFoundError)
async def patient_not_found_handler(request: Request, exc: PatientNotFoundError):
    return JSONResponse({"detail": str(exc)}, status_code=404)


@app.exception_handler(ConsultationBusyError)
async def busy_handler(request: Request, exc: ConsultationBusyError):
    return JSONResponse({"detail": str(exc)}, status_code=409)


app.include_router(consultation_routes)


@app.on_event("startup")
def startup_event():
    logger.info(f"Consultation Copilot {__version__} ready (max {settings.MAX_SUGGESTIONS} suggestions)")
