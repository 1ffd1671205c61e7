import io
from datetime import date, datetime, timezone

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.territory_service import list_territories
from app.time_utils import format_br

# Relatório S-13
S13_HEADERS = [
    "Número do Território",
    "Descrição/Limites",
    "Grupo",
    "Status Atual",
    "Designado Para",
    "Data de Saída",
    "Última Devolução",
]

CSV_BOM = "\ufeff"


async def get_report_rows(db: AsyncSession) -> list[dict]:
    return await list_territories(db)


def _status_text(row: dict) -> str:
    status = row["status"]
    return status.value if hasattr(status, "value") else (status or "")


def _single_line(text: str) -> str:
    return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def _csv_description(text: str | None) -> str:
    if not text:
        return '""'
    return '"' + _single_line(text).replace('"', '""') + '"'


def _csv_field(text: str | None) -> str:
    """Quotes free text only when it would break the row."""
    if not text:
        return ""
    if any(ch in text for ch in ';"\r\n'):
        return _csv_description(text)
    return text


def render_csv(rows: list[dict]) -> str:
    lines = [";".join(S13_HEADERS)]
    for row in rows:
        lines.append(";".join([
            row["numero"] or "",
            _csv_description(row["descricao"]),
            _csv_field(row["grupo_nome"]),
            _status_text(row),
            _csv_field(row["pessoa_nome"]),
            format_br(row["data_saida"]),
            format_br(row["ultima_devolucao"]),
        ]))
    return CSV_BOM + "\n".join(lines)


def report_filename(ext: str, today: date | None = None) -> str:
    today = today or date.today()
    return f"S-13_Relatorio_Territorios_{today.isoformat()}.{ext}"


async def export_territories_csv(db: AsyncSession) -> bytes:
    return render_csv(await get_report_rows(db)).encode("utf-8")


async def export_territories_excel(db: AsyncSession) -> bytes:
    rows = await get_report_rows(db)

    wb = Workbook()
    ws = wb.active
    ws.title = "S-13"

    header_fill = PatternFill(start_color="1C2D42", end_color="1C2D42", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF", size=11)
    for col, h in enumerate(S13_HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=h)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")

    for row_num, row in enumerate(rows, 2):
        ws.cell(row=row_num, column=1, value=int(row["numero"]) if row["numero"].isdigit() else row["numero"])
        ws.cell(row=row_num, column=2, value=(row["descricao"] or "").replace("\n", " "))
        ws.cell(row=row_num, column=3, value=row["grupo_nome"] or "")
        ws.cell(row=row_num, column=4, value=_status_text(row))
        ws.cell(row=row_num, column=5, value=row["pessoa_nome"] or "")
        ws.cell(row=row_num, column=6, value=format_br(row["data_saida"]))
        ws.cell(row=row_num, column=7, value=format_br(row["ultima_devolucao"]))

    for i, w in enumerate([12, 48, 20, 14, 28, 14, 16], 1):
        ws.column_dimensions[get_column_letter(i)].width = w
    ws.row_dimensions[1].height = 22
    ws.freeze_panes = "A2"

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


# PDF column layout: (header index, width in mm, max characters)
_PDF_COLUMNS = [(0, 18, 8), (1, 95, 62), (2, 30, 18), (3, 22, 12), (4, 50, 30), (5, 24, 10), (6, 24, 10)]


async def export_territories_pdf(db: AsyncSession) -> bytes:
    rows = await get_report_rows(db)

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=landscape(A4))
    c.setTitle("S-13 Registro de Designação de Território")
    pw, ph = landscape(A4)
    margin = 12 * mm
    content_w = pw - 2 * margin
    row_h = 6 * mm
    bottom_y = 16 * mm
    page_num = [1]

    def _draw_header() -> float:
        c.setFillColor(colors.HexColor("#1C2D42"))
        c.rect(0, ph - 18 * mm, pw, 18 * mm, fill=True, stroke=False)
        c.setFillColor(colors.white)
        c.setFont("Helvetica-Bold", 13)
        c.drawString(margin, ph - 11 * mm, "S-13 - Registro de Designação de Território")
        y = ph - 26 * mm
        c.setFillColor(colors.HexColor("#404040"))
        c.rect(margin, y - 1.5 * mm, content_w, row_h, fill=True, stroke=False)
        c.setFillColor(colors.white)
        c.setFont("Helvetica-Bold", 8)
        x = margin + 2 * mm
        for idx, width, _ in _PDF_COLUMNS:
            c.drawString(x, y, S13_HEADERS[idx])
            x += width * mm
        c.setFillColor(colors.black)
        return y - row_h

    def _draw_footer() -> None:
        c.setFillColor(colors.HexColor("#888888"))
        c.setFont("Helvetica", 7)
        c.drawString(margin, 6 * mm, "Gerenciador de Territórios")
        c.drawRightString(pw - margin, 6 * mm,
                          f"Página {page_num[0]}  |  "
                          f"Gerado em: {datetime.now(timezone.utc).strftime('%d/%m/%Y %H:%M')} UTC")

    y = _draw_header()
    for i, row in enumerate(rows):
        if y < bottom_y:
            _draw_footer()
            c.showPage()
            page_num[0] += 1
            y = _draw_header()
        if i % 2 == 0:
            c.setFillColor(colors.HexColor("#f5f5f5"))
            c.rect(margin, y - 1.5 * mm, content_w, row_h, fill=True, stroke=False)
        c.setFillColor(colors.black)
        c.setFont("Helvetica", 8)
        values = [
            row["numero"] or "",
            (row["descricao"] or "").replace("\n", " "),
            row["grupo_nome"] or "",
            _status_text(row),
            row["pessoa_nome"] or "",
            format_br(row["data_saida"]),
            format_br(row["ultima_devolucao"]),
        ]
        x = margin + 2 * mm
        for idx, width, max_chars in _PDF_COLUMNS:
            c.drawString(x, y, values[idx][:max_chars])
            x += width * mm
        y -= row_h

    _draw_footer()
    c.save()
    return buf.getvalue()
