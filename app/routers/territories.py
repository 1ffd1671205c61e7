from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.database import get_db
from app.errors import ValidationError
from app.models.territory import TerritoryStatus
from app.schemas.territory import TerritoryUpdate, TerritoryResponse, TerritoryListItem, TerritoryDeleted
from app.services.storage_service import LocalBlobStore, get_blob_store
import app.services.territory_service as svc
import app.services.export_service as export_svc

router = APIRouter(prefix="/territorios", tags=["territorios"])


@router.get("", response_model=list[TerritoryListItem])
async def list_territories(
    status: TerritoryStatus | None = Query(None),
    search: str = Query(""),
    sort: str = Query(svc.SORT_NUMERO_ASC),
    nao_trabalhado_na_campanha: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    return await svc.list_territories(
        db, status=status, search=search, sort=sort, not_worked_in_campaign=nao_trabalhado_na_campanha
    )


@router.post("", response_model=TerritoryResponse, status_code=201)
async def create_territory(
    numero: str | None = Form(None),
    descricao: str | None = Form(None),
    tipo: str | None = Form(None),
    observacoes: str | None = Form(None),
    imagem: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    blobs: LocalBlobStore = Depends(get_blob_store),
):
    svc.validate_new_territory(numero, descricao)
    url_imagem = None
    if imagem is not None and imagem.filename:
        content = await imagem.read()
        if len(content) > settings.MAX_UPLOAD_BYTES:
            raise ValidationError("A imagem excede o tamanho máximo permitido.")
        url_imagem = await blobs.save(content, imagem.filename)
    return await svc.create_territory(db, numero, descricao, tipo, observacoes, url_imagem)


@router.get("/export")
async def export_csv(db: AsyncSession = Depends(get_db)):
    return Response(
        content=await export_svc.export_territories_csv(db),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_svc.report_filename("csv")}"'},
    )


@router.get("/export/excel")
async def export_excel(db: AsyncSession = Depends(get_db)):
    return Response(
        content=await export_svc.export_territories_excel(db),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{export_svc.report_filename("xlsx")}"'},
    )


@router.get("/export/pdf")
async def export_pdf(db: AsyncSession = Depends(get_db)):
    return Response(
        content=await export_svc.export_territories_pdf(db),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{export_svc.report_filename("pdf")}"'},
    )


@router.put("/{territory_id}", response_model=TerritoryResponse)
async def update_territory(territory_id: int, data: TerritoryUpdate, db: AsyncSession = Depends(get_db)):
    return await svc.update_territory(db, territory_id, data)


@router.delete("/{territory_id}", response_model=TerritoryDeleted)
async def delete_territory(territory_id: int, db: AsyncSession = Depends(get_db)):
    territory = await svc.delete_territory(db, territory_id)
    return {"message": "Território deletado com sucesso.", "data": territory}
