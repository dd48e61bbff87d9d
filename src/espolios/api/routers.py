import logging
from typing import Any

from bson import ObjectId
from fastapi import APIRouter, Depends, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData

from ..application.use_cases import (
    CreateDocumentUseCase,
    DeleteDocumentUseCase,
    GetDocumentUseCase,
    ListDocumentsUseCase,
    UpdateDocumentUseCase,
)
from ..container import get_app_container
from ..domain.errors import DocumentNotFoundError, InvalidRequestError
from ..domain.models import FieldPart, FilePart, FormPart

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/espolios")

NOT_FOUND_MESSAGE = "Item não encontrado"
INVALID_REQUEST_MESSAGE = "Requisição inválida"
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def get_list_use_case() -> ListDocumentsUseCase:
    return get_app_container().list_documents_use_case


def get_get_use_case() -> GetDocumentUseCase:
    return get_app_container().get_document_use_case


def get_create_use_case() -> CreateDocumentUseCase:
    return get_app_container().create_document_use_case


def get_update_use_case() -> UpdateDocumentUseCase:
    return get_app_container().update_document_use_case


def get_delete_use_case() -> DeleteDocumentUseCase:
    return get_app_container().delete_document_use_case


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _encode(data: Any) -> Any:
    return jsonable_encoder(data, custom_encoder={ObjectId: str})


def _is_form(request: Request) -> bool:
    content_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    return content_type in FORM_CONTENT_TYPES


async def _json_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as exc:
        raise InvalidRequestError("Request body is not valid JSON") from exc
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return body


def _form_parts(form: FormData) -> list[FormPart]:
    """Convert a parsed form into ordered parts, files left unread."""
    parts: list[FormPart] = []
    for name, value in form.multi_items():
        if isinstance(value, str):
            parts.append(FieldPart(name=name, value=value))
        else:
            parts.append(
                FilePart(
                    name=name,
                    filename=value.filename or "",
                    content_type=value.content_type,
                    stream=value,
                )
            )
    return parts


@router.get("/{collection}")
async def list_documents(
    collection: str,
    use_case: ListDocumentsUseCase = Depends(get_list_use_case),
) -> Any:
    logger.info("GET /espolios/%s", collection)
    try:
        documents = await run_in_threadpool(use_case.execute, collection)
    except Exception:
        logger.exception("Failed to list documents of %s", collection)
        return _error(500, "Erro ao buscar itens")
    return _encode(documents)


@router.get("/{collection}/{document_id}")
async def get_document(
    collection: str,
    document_id: str,
    use_case: GetDocumentUseCase = Depends(get_get_use_case),
) -> Any:
    logger.info("GET /espolios/%s/%s", collection, document_id)
    try:
        document = await run_in_threadpool(use_case.execute, collection, document_id)
    except DocumentNotFoundError:
        return _error(404, NOT_FOUND_MESSAGE)
    except Exception:
        logger.exception("Failed to read %s/%s", collection, document_id)
        return _error(500, "Erro ao buscar o item")
    return _encode(document)


@router.post("/{collection}", status_code=201)
async def create_document(
    collection: str,
    request: Request,
    use_case: CreateDocumentUseCase = Depends(get_create_use_case),
) -> Any:
    logger.info("POST /espolios/%s", collection)
    try:
        if _is_form(request):
            async with request.form() as form:
                document = await use_case.execute_form(collection, _form_parts(form))
        else:
            body = await _json_body(request)
            document = await run_in_threadpool(use_case.execute, collection, body)
    except InvalidRequestError as exc:
        logger.warning("Rejected POST /espolios/%s: %s", collection, exc)
        return _error(400, INVALID_REQUEST_MESSAGE)
    except Exception:
        logger.exception("Failed to create a document in %s", collection)
        return _error(500, "Erro ao adicionar o item")
    return JSONResponse(status_code=201, content=_encode(document))


@router.put("/{collection}/{document_id}")
async def update_document(
    collection: str,
    document_id: str,
    request: Request,
    use_case: UpdateDocumentUseCase = Depends(get_update_use_case),
) -> Any:
    logger.info("PUT /espolios/%s/%s", collection, document_id)
    try:
        if _is_form(request):
            async with request.form() as form:
                document = await use_case.execute_form(collection, document_id, _form_parts(form))
        else:
            body = await _json_body(request)
            document = await run_in_threadpool(use_case.execute, collection, document_id, body)
    except DocumentNotFoundError:
        return _error(404, NOT_FOUND_MESSAGE)
    except InvalidRequestError as exc:
        logger.warning("Rejected PUT /espolios/%s/%s: %s", collection, document_id, exc)
        return _error(400, INVALID_REQUEST_MESSAGE)
    except Exception:
        logger.exception("Failed to update %s/%s", collection, document_id)
        return _error(500, "Erro ao editar o item")
    return _encode(document)


@router.delete("/{collection}/{document_id}", status_code=204)
async def delete_document(
    collection: str,
    document_id: str,
    use_case: DeleteDocumentUseCase = Depends(get_delete_use_case),
) -> Response:
    logger.info("DELETE /espolios/%s/%s", collection, document_id)
    try:
        await run_in_threadpool(use_case.execute, collection, document_id)
    except DocumentNotFoundError:
        return _error(404, NOT_FOUND_MESSAGE)
    except Exception:
        logger.exception("Failed to delete %s/%s", collection, document_id)
        return _error(500, "Erro ao deletar o item")
    return Response(status_code=204)
