"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI :

description et conventions de l'API,

schéma de sécurité Bearer (JWT) : l'en-tête Authorization lu par get_current_admin
est remplacé par le bouton "Authorize" de Swagger.
"""

from fastapi.openapi.utils import get_openapi

BEARER_SCHEME = "bearerAuth"


def _use_bearer_security(openapi_schema: dict) -> None:
    components = openapi_schema.setdefault("components", {})
    components.setdefault("securitySchemes", {})[BEARER_SCHEME] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }
    for path_item in openapi_schema.get("paths", {}).values():
        for operation in path_item.values():
            params = operation.get("parameters", [])
            kept = [p for p in params if not (p.get("in") == "header" and p.get("name", "").lower() == "authorization")]
            if len(kept) != len(params):
                operation["parameters"] = kept
                operation["security"] = [{BEARER_SCHEME: []}]


def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API catalogue e-commerce : catégories principales, catégories, marques, produits.\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Réponses : `{success, message, data}` ; erreurs : `{success: false, message, details?}`.\n"
            "- Pagination (catégories principales) : query params `page` & `limit`.\n"
            "- Les éléments supprimés sont masqués sauf `include_deleted=true`.\n"
            "- Écritures protégées : `Authorization: Bearer <token>` (obtenu via POST /api/admins/login).\n"
        ),
        routes=app.routes,
        tags=app.openapi_tags,
    )
    _use_bearer_security(openapi_schema)
    app.openapi_schema = openapi_schema
    return app.openapi_schema
