"""
Export service: writes the rows of a list view to CSV or Excel.
"""

import csv
import io
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationException
from app.core.logging import get_logger
from app.services.assembly_service import AssemblyService
from app.services.client_service import ClientService
from app.services.material_service import MaterialService
from app.services.user_service import UserService
from app.utils.list_view import ListViewState

logger = get_logger(__name__)

CSV_MEDIA_TYPE = "text/csv"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXPORT_FORMATS = ("csv", "xlsx")
MAX_COLUMN_WIDTH = 50
HEADER_FILL = "305496"


@dataclass(frozen=True)
class ExportColumn:
    header: str
    value: Callable[[Any], Any]


def _field(name: str) -> Callable[[Any], Any]:
    return lambda row: getattr(row, name)


COLUMNS: Dict[str, Sequence[ExportColumn]] = {
    "materials": (
        ExportColumn("Name", _field("name")),
        ExportColumn("Part Number", _field("part_number")),
        ExportColumn("Manufacturer", _field("manufacturer")),
        ExportColumn("Unit", _field("unit")),
        ExportColumn("Price", _field("price")),
        ExportColumn("Purchase URL", _field("purchase_url")),
    ),
    "assemblies": (
        ExportColumn("Name", _field("name")),
        ExportColumn("Category", lambda row: row.category.name if row.category else None),
        ExportColumn("Module", _field("module")),
        ExportColumn("Part Number", _field("part_number")),
        ExportColumn("Manufacturer", _field("manufacturer")),
        ExportColumn("Unit", _field("unit")),
        ExportColumn("Price", _field("price")),
        ExportColumn("Material Cost", _field("material_cost")),
        ExportColumn("Materials", lambda row: len(row.materials)),
    ),
    "clients": (
        ExportColumn("Contact Person", _field("contact_person")),
        ExportColumn("Company", _field("company_name")),
        ExportColumn("Type", _field("client_type")),
        ExportColumn("Category", _field("category")),
        ExportColumn("Status", _field("status")),
        ExportColumn("Email", _field("contact_email")),
        ExportColumn("Phone", _field("contact_phone")),
        ExportColumn("City", _field("city")),
        ExportColumn("Province", _field("province")),
        ExportColumn("Projects", _field("total_projects")),
        ExportColumn("Contract Value", _field("total_contract_value")),
        ExportColumn("Outstanding", _field("outstanding_balance")),
    ),
    "users": (
        ExportColumn("Name", _field("name")),
        ExportColumn("Email", _field("email")),
        ExportColumn("Role", _field("role")),
        ExportColumn("Status", _field("status")),
        ExportColumn("Employee ID", _field("employee_id")),
        ExportColumn("Department", _field("department")),
        ExportColumn("Position", _field("position")),
        ExportColumn("Hire Date", _field("hire_date")),
    ),
}


def _cell_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_table(columns: Sequence[ExportColumn], rows: Sequence[Any]) -> Tuple[List[str], List[List[Any]]]:
    """Headers and cell values for the rows."""
    headers = [column.header for column in columns]
    body = [[_cell_value(column.value(row)) for column in columns] for row in rows]
    return headers, body


def write_csv(headers: List[str], body: List[List[Any]]) -> io.BytesIO:
    text = io.StringIO()
    writer = csv.writer(text)
    writer.writerow(headers)
    for values in body:
        writer.writerow(["" if value is None else value for value in values])
    return io.BytesIO(text.getvalue().encode("utf-8-sig"))


def write_xlsx(title: str, headers: List[str], body: List[List[Any]]) -> io.BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]

    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = PatternFill(start_color=HEADER_FILL, end_color=HEADER_FILL, fill_type="solid")
    for values in body:
        ws.append(values)
    ws.freeze_panes = "A2"

    # Fit columns to content, capped
    for index, header in enumerate(headers, start=1):
        longest = max([len(str(header))] + [len(str(values[index - 1])) for values in body if values[index - 1] is not None])
        ws.column_dimensions[get_column_letter(index)].width = min(longest + 2, MAX_COLUMN_WIDTH)

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output


class ExportService:
    """Service for exporting list views."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.listers = {
            "materials": MaterialService(session).list_materials,
            "assemblies": AssemblyService(session).list_assemblies,
            "clients": ClientService(session).list_clients,
            "users": UserService(session).list_users,
        }

    async def export(self, resource: str, state: ListViewState, fmt: str) -> Tuple[io.BytesIO, str, str]:
        """
        Export every row the list view matches, ignoring pagination.

        Returns:
            (file contents, media type, file name)
        """
        if fmt not in EXPORT_FORMATS:
            raise ValidationException(f"Unsupported export format: {fmt}", "Use csv or xlsx")
        if resource not in COLUMNS:
            raise ValidationException(f"Export is not available for {resource}")

        rows, total = await self.listers[resource](state.unpaginated())
        headers, body = to_table(COLUMNS[resource], rows)
        stamp = date.today().isoformat()

        logger.info("List exported", extra={"resource": resource, "format": fmt, "rows": total})
        if fmt == "csv":
            return write_csv(headers, body), CSV_MEDIA_TYPE, f"{resource}_{stamp}.csv"
        return write_xlsx(resource.capitalize(), headers, body), XLSX_MEDIA_TYPE, f"{resource}_{stamp}.xlsx"
