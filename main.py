import os
import logging
import importlib
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from config.settings import settings
from config.logging_config import setup_logging
from config.database import engine
from database.init_db import init_db

setup_logging()
logger = logging.getLogger("cre8kids")

@asynccontextmanager
async def lifespan(app: FastAPI):
    # open: tables + badge catalog
    init_db()
    logger.info("%s API started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield
    # close: release pooled connections
    engine.dispose()
    logger.info("%s API stopped", settings.APP_NAME)

app = FastAPI(title=f"{settings.APP_NAME} API", lifespan=lifespan)

# CORS: use our parsed list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type"],
)

# ─── Error shapes ──────────────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        # drop the "body"/"query"/"path" prefix, keep the field path
        loc = [str(part) for part in err.get("loc", ())[1:]]
        errors.append({"field": ".".join(loc) or None, "message": err.get("msg")})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )

#load all routes
def load_routes(directory: Path):
    routers = []
    root = directory.parent
    for item in sorted(directory.rglob("*_routes.py")):
        module_name = ".".join(item.relative_to(root).with_suffix("").parts)
        module = importlib.import_module(module_name)
        if hasattr(module, "router"):
            routers.append(module.router)
    return routers

for router in load_routes(Path(__file__).parent / "api"):
    app.include_router(router, prefix="/api")

@app.get("/health")
def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}

@app.get("/api/status")
def api_status():
    return {"message": f"{settings.APP_NAME} API is running", "environment": settings.ENVIRONMENT}

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", settings.PORT or 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=settings.DEBUG)
