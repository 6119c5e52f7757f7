"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

logging, CORS, titre, version, tags

traduction des erreurs en réponses {"success": false, "message": ...}

schéma OpenAPI personnalisé

Inclut les routers (ex : /api/products).

Initialise la base (et le seed) au démarrage.

🔹 Point unique d’exécution : uvicorn app.main:app --reload.
"""

import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.logging import configure_logging
from app.core.openapi import custom_openapi
from app.db.seed import seed_all
from app.db.session import dispose_engine, engine, init_db
from app.domain.errors import CatalogError

from app.api.v1.routers import admins, categories, health, marques, produits, site_categories

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    openapi_tags=[
        {"name": "admins", "description": "Comptes administrateurs et authentification"},
        {"name": "site-categories", "description": "Catégories principales du site"},
        {"name": "categories", "description": "Catégories (sous-catégories) de produits"},
        {"name": "brands", "description": "Marques"},
        {"name": "products", "description": "Produits, stock et images"},
        {"name": "health", "description": "État du service"},
    ],
)

# CORS (ajustez selon vos besoins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

# Routers
app.include_router(admins.router, prefix="/api")
app.include_router(site_categories.router, prefix="/api")
app.include_router(categories.router, prefix="/api")
app.include_router(marques.router, prefix="/api")
app.include_router(produits.router, prefix="/api")
app.include_router(health.router, prefix="/api")

app.openapi = lambda: custom_openapi(app)


# -----------------------------
# Gestion des erreurs
# -----------------------------
@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    content = {"success": False, "message": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning("HTTP Exception: %s - %s Path=%s", exc.status_code, exc.detail, request.url.path)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    logger.warning("Validation Error: %s Path=%s", errors, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Erreur de validation", "errors": errors},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled Exception: %s Path=%s", exc.__class__.__name__, request.url.path)
    content = {"success": False, "message": "Erreur interne du serveur"}
    if settings.is_dev:
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# -----------------------------
# Routes racine
# -----------------------------
@app.get("/", include_in_schema=False)
def root():
    return {
        "success": True,
        "message": f"Bienvenue sur l'API {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "documentation": "/docs",
    }


# Démarrage / arrêt
@app.on_event("startup")
def on_startup():
    init_db()
    if settings.SEED_ON_STARTUP:
        with Session(engine) as session:
            seed_all(session, settings.SEED_PATH)
    logger.info("%s %s démarré (env=%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENV)


@app.on_event("shutdown")
def on_shutdown():
    dispose_engine()


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
