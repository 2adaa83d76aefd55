"""
Filmovi API — API Documentation Routes
=======================================

What:  Serves the generated OpenAPI document and the Swagger UI.
How:   FastAPI builds the document from the route decorators and schemas
       (app.openapi()); these routes only publish it.

Paths:
    GET /swagger.json            OpenAPI document
    GET /api-docs/swagger.json   same document, next to the UI
    GET /api-docs                Swagger UI
"""

from fastapi import APIRouter, Request
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse

router = APIRouter(include_in_schema=False)

SWAGGER_JSON_PATH = "/api-docs/swagger.json"


@router.get("/swagger.json")
@router.get(SWAGGER_JSON_PATH)
async def swagger_json(request: Request) -> JSONResponse:
    return JSONResponse(request.app.openapi())


@router.get("/api-docs")
async def swagger_ui(request: Request) -> HTMLResponse:
    return get_swagger_ui_html(
        openapi_url=SWAGGER_JSON_PATH,
        title=f"{request.app.title} - Swagger UI",
    )
