"""Bulk document import from spreadsheets."""

import csv
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.datavalidation import DataValidation
from zipfile import BadZipFile

from letterdesk.database.base import Database
from letterdesk.domain.category import CategoryService
from letterdesk.domain.document import DocumentService
from letterdesk.domain.entities import Actor
from letterdesk.domain.errors import DomainError, StorageError, ValidationError
from letterdesk.domain.letter_type import LetterTypeService
from letterdesk.utils.date_parser import coerce_date

logger = logging.getLogger(__name__)

TITLE = "Document Title"
CATEGORY = "Category Name"
LETTER_TYPE = "Letter Type Name"
LETTER_NUMBER = "Letter Number"
REFERENCE_NUMBER = "Reference Number"
ISSUE_DATE = "Issue Date"
CONTENT = "Content"

COLUMNS = [TITLE, CATEGORY, LETTER_TYPE, LETTER_NUMBER, REFERENCE_NUMBER, ISSUE_DATE, CONTENT]
REQUIRED_COLUMNS = [TITLE, CATEGORY, LETTER_TYPE, ISSUE_DATE, CONTENT]
COLUMN_WIDTHS = [25, 30, 30, 25, 25, 15, 40]
TEMPLATE_ROWS = 100


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def read_rows(file_path: str) -> list[dict[str, Any]]:
    """Read a spreadsheet into row dicts keyed by header.

    ``.xlsx`` files are read from their first sheet; ``.csv`` files have
    their delimiter sniffed.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the file type is unsupported, unreadable, or lacks required columns
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Spreadsheet not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix in (".xlsx", ".xlsm"):
        headers, rows = _read_xlsx(path)
    elif suffix == ".csv":
        headers, rows = _read_csv(path)
    else:
        raise ValidationError(f"Unsupported spreadsheet type '{suffix}'; use .xlsx or .csv")

    missing = [col for col in REQUIRED_COLUMNS if col.lower() not in {h.lower() for h in headers}]
    if missing:
        raise ValidationError(f"Spreadsheet missing required columns: {', '.join(missing)}")
    return rows


def _read_xlsx(path: Path) -> tuple[list[str], list[dict[str, Any]]]:
    try:
        wb = load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile) as e:
        raise ValidationError(f"Invalid or corrupted xlsx file: {e}") from e
    try:
        sheet = wb.worksheets[0]
        values = sheet.iter_rows(values_only=True)
        header_row = next(values, None)
        if header_row is None:
            raise ValidationError("Spreadsheet is empty")
        headers = [_cell_text(h) for h in header_row]
        rows = [dict(zip(headers, row)) for row in values]
    finally:
        wb.close()
    return headers, rows


def _read_csv(path: Path) -> tuple[list[str], list[dict[str, Any]]]:
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","
            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValidationError("Spreadsheet is empty")
            headers = [h.strip() for h in reader.fieldnames]
            rows = [{(k or "").strip(): v for k, v in row.items()} for row in reader]
    except UnicodeDecodeError as e:
        raise ValidationError("Spreadsheet is not valid UTF-8 text; save it as CSV UTF-8") from e
    except csv.Error as e:
        raise ValidationError(f"Could not read CSV file: {e}") from e
    return headers, rows


class SpreadsheetImportService:
    """Service turning spreadsheet rows into draft documents."""

    def __init__(self, db: Database, document_service: Optional[DocumentService] = None):
        """Initialize import service.

        Args:
            db: Database instance
            document_service: Service used to create each document
        """
        self.db = db
        self.document_service = document_service or DocumentService(db)
        self.category_service = CategoryService(db)
        self.letter_type_service = LetterTypeService(db)

    def import_file(self, actor: Actor, file_path: str) -> dict[str, Any]:
        """Import documents from an .xlsx or .csv file. See import_rows."""
        rows = read_rows(file_path)
        result = self.import_rows(actor, rows)
        logger.info(
            "Imported %s: %d created, %d skipped",
            file_path,
            result["created"],
            result["skipped"],
        )
        return result

    def import_rows(self, actor: Actor, rows: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
        """Create a draft document for every valid row.

        Rows are numbered from 2 (the header is row 1). Invalid rows are
        skipped and reported; they never abort the batch. Entirely blank
        rows are ignored.

        Returns:
            Dict with import statistics:
            - created: number of documents created
            - skipped: number of rows skipped
            - errors: list of "Row N: ..." messages, in input order
            - document_ids: IDs of the created documents
        """
        categories = {c.name.lower(): c for c in self.category_service.list_categories()}
        letter_types = self.letter_type_service.list_letter_types()

        created = 0
        skipped = 0
        errors: list[str] = []
        document_ids: list[int] = []

        for row_num, raw in enumerate(rows, start=2):
            row = {(k or "").strip().lower(): v for k, v in raw.items()}
            if all(_cell_text(v) == "" for v in row.values()):
                continue

            problems: list[str] = []
            title = _cell_text(row.get(TITLE.lower()))
            if not title:
                problems.append(f"{TITLE} is required")
            content = _cell_text(row.get(CONTENT.lower()))
            if not content:
                problems.append(f"{CONTENT} is required")

            category = None
            category_name = _cell_text(row.get(CATEGORY.lower()))
            if not category_name:
                problems.append(f"{CATEGORY} is required")
            else:
                category = categories.get(category_name.lower())
                if category is None:
                    problems.append(f"Category '{category_name}' not found")

            letter_type = None
            letter_type_name = _cell_text(row.get(LETTER_TYPE.lower()))
            if not letter_type_name:
                problems.append(f"{LETTER_TYPE} is required")
            else:
                matches = [lt for lt in letter_types if lt.name.lower() == letter_type_name.lower()]
                if not matches:
                    problems.append(f"Letter Type '{letter_type_name}' not found")
                elif category is not None:
                    letter_type = next((lt for lt in matches if lt.category_id == category.id), None)
                    if letter_type is None:
                        problems.append(
                            f"Letter Type '{letter_type_name}' does not belong to category '{category.name}'"
                        )

            issue_date: Optional[date] = None
            raw_date = row.get(ISSUE_DATE.lower())
            if raw_date is None or _cell_text(raw_date) == "":
                problems.append(f"{ISSUE_DATE} is required")
            else:
                try:
                    if not isinstance(raw_date, (date, datetime)):
                        raw_date = _cell_text(raw_date)
                    issue_date = coerce_date(raw_date)
                except ValueError:
                    problems.append("Invalid Issue Date format. Use YYYY-MM-DD format")

            if problems:
                errors.append(f"Row {row_num}: {'; '.join(problems)}")
                skipped += 1
                continue

            try:
                document = self.document_service.create_document(
                    actor,
                    title=title,
                    category_id=category.id,
                    letter_type_id=letter_type.id,
                    issue_date=issue_date,
                    content=content,
                    letter_number=_cell_text(row.get(LETTER_NUMBER.lower())) or None,
                    reference_number=_cell_text(row.get(REFERENCE_NUMBER.lower())) or None,
                )
            except StorageError:
                raise
            except DomainError as e:
                logger.debug("Row %d rejected: %s", row_num, e)
                errors.append(f"Row {row_num}: {e}")
                skipped += 1
                continue

            document_ids.append(document.id)
            created += 1

        return {
            "created": created,
            "skipped": skipped,
            "errors": errors,
            "document_ids": document_ids,
        }

    def write_template(self, file_path: str) -> Path:
        """Write an .xlsx import template.

        The template has the import columns, one example row, and a hidden
        ``Options`` sheet listing active categories (column A) and each
        category's letter types (one column per category). The category
        column is restricted to the listed names.
        """
        categories = self.category_service.list_categories()
        letter_types = self.letter_type_service.list_letter_types()

        wb = Workbook()
        sheet = wb.active
        sheet.title = "Documents"
        sheet.append(COLUMNS)
        example_category = categories[0] if categories else None
        example_type = next(
            (lt for lt in letter_types if example_category and lt.category_id == example_category.id),
            None,
        )
        sheet.append(
            [
                "Sample Document Title",
                example_category.name if example_category else "",
                example_type.name if example_type else "",
                "",
                "",
                date.today().isoformat(),
                "Document content here...",
            ]
        )
        for index, width in enumerate(COLUMN_WIDTHS, start=1):
            sheet.column_dimensions[get_column_letter(index)].width = width

        options = wb.create_sheet("Options")
        options.sheet_state = "hidden"
        options.cell(row=1, column=1, value="Categories")
        for row, category in enumerate(categories, start=2):
            options.cell(row=row, column=1, value=category.name)
        for col, category in enumerate(categories, start=2):
            options.cell(row=1, column=col, value=category.name)
            names = [lt.name for lt in letter_types if lt.category_id == category.id]
            for row, name in enumerate(names, start=2):
                options.cell(row=row, column=col, value=name)

        if categories:
            validation = DataValidation(
                type="list",
                formula1=f"=Options!$A$2:$A${len(categories) + 1}",
                allow_blank=True,
            )
            validation.errorTitle = "Invalid Category"
            validation.error = "Please select a valid category from the list."
            validation.promptTitle = "Category"
            validation.prompt = "Select a category"
            sheet.add_data_validation(validation)
            category_col = get_column_letter(COLUMNS.index(CATEGORY) + 1)
            validation.add(f"{category_col}2:{category_col}{TEMPLATE_ROWS}")

        path = Path(file_path)
        wb.save(path)
        logger.info("Import template written to %s", path)
        return path
