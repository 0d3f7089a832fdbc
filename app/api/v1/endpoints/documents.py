"""Document API: thin routes delegating to DocumentService."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Response, UploadFile
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from app.api.v1.dependencies import get_document_service
from app.application.use_cases.documents import DocumentService
from app.domain.exceptions import MalformedRequestException
from app.schemas.document import DocumentItem
from app.shared.utils import content_disposition

router = APIRouter()


@router.post(
    "/upload",
    status_code=201,
    response_class=Response,
    responses={201: {"description": "Stored; Location points at the download URL"}},
)
async def upload_document(
    document_svc: Annotated[DocumentService, Depends(get_document_service)],
    file: UploadFile | None = File(None),
) -> Response:
    """Store the multipart field `file` as a new document. Empty 201 on success."""
    if file is None:
        raise MalformedRequestException("Multipart field 'file' is required", field="file")
    created = await document_svc.ingest(file.filename or "", file.file)
    return Response(status_code=201, headers={"Location": f"/dl/{created.id}"})


@router.get("/documents", response_model=list[DocumentItem])
async def list_documents(
    document_svc: Annotated[DocumentService, Depends(get_document_service)],
) -> list[DocumentItem]:
    """List every stored document with its download URL."""
    documents = await document_svc.list_documents()
    return [DocumentItem.model_validate(d) for d in documents]


@router.get(
    "/dl/{document_id}",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"application/octet-stream": {}}},
        404: {"description": "Unknown document id"},
    },
)
async def download_document(
    document_id: str,
    document_svc: Annotated[DocumentService, Depends(get_document_service)],
) -> StreamingResponse:
    """Stream the document bytes as an attachment under its original name."""
    download = await document_svc.fetch(document_id)
    return StreamingResponse(
        download.stream,
        media_type="application/octet-stream",
        headers={
            "Content-Disposition": content_disposition(download.filename),
            "Content-Length": str(download.size),
        },
        background=BackgroundTask(download.stream.aclose),
    )
