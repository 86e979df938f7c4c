"""Tests for spreadsheet import."""

from datetime import datetime

import pytest
from openpyxl import Workbook, load_workbook

from letterdesk.domain.entities import DocumentStatus
from letterdesk.domain.errors import StorageError, ValidationError
from letterdesk.domain.spreadsheet_import import COLUMNS, SpreadsheetImportService, read_rows

HEADER = ",".join(COLUMNS)


@pytest.fixture
def import_service(temp_db, document_service, sample_letter_type):
    return SpreadsheetImportService(temp_db, document_service=document_service)


def write_csv(tmp_path, lines, name="documents.csv"):
    path = tmp_path / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)


class TestReadRows:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_rows(str(tmp_path / "nope.csv"))

    def test_unsupported_type(self, tmp_path):
        path = tmp_path / "documents.txt"
        path.write_text("hello")
        with pytest.raises(ValidationError, match="Unsupported"):
            read_rows(str(path))

    def test_missing_columns(self, tmp_path):
        path = write_csv(tmp_path, ["Document Title,Content", "A,B"])
        with pytest.raises(ValidationError, match="Category Name, Letter Type Name, Issue Date"):
            read_rows(path)

    def test_semicolon_delimiter(self, tmp_path):
        path = write_csv(
            tmp_path,
            [
                ";".join(COLUMNS),
                "Appointment;Official Letters;Appointment Letter;;;2025-03-01;Body",
            ],
        )
        [row] = read_rows(path)
        assert row["Category Name"] == "Official Letters"

    def test_csv_not_utf8(self, tmp_path):
        path = tmp_path / "documents.csv"
        path.write_bytes(
            (HEADER + "\n").encode("utf-8")
            + "Caf\u00e9 opening,Official Letters,Appointment Letter,,,2025-03-01,Body\n".encode("cp1252")
        )
        with pytest.raises(ValidationError, match="not valid UTF-8"):
            read_rows(str(path))

    def test_corrupt_xlsx(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip file")
        with pytest.raises(ValidationError, match="Invalid or corrupted"):
            read_rows(str(path))


class TestImportRows:
    def test_import_csv(self, import_service, admin, tmp_path, document_service):
        path = write_csv(
            tmp_path,
            [
                HEADER,
                "Appointment of Clerk,Official Letters,Appointment Letter,OFF/2025/010,REF-1,2025-03-01,Body one",
                "Appointment of Typist,official letters,APPOINTMENT LETTER,,,2025-02-14,Body two",
            ],
        )

        result = import_service.import_file(admin, path)

        assert result["created"] == 2
        assert result["skipped"] == 0
        assert result["errors"] == []
        first, second = [document_service.get_document(admin, i) for i in result["document_ids"]]
        assert first.letter_number == "OFF/2025/010"
        assert first.reference_number == "REF-1"
        assert first.status == DocumentStatus.DRAFT
        assert first.created_by == admin.id
        assert second.letter_number.startswith("OFF/2025/")
        assert second.reference_number.startswith("REF/OFF/022025/")

    def test_bad_rows_are_reported_and_skipped(self, import_service, admin, tmp_path):
        path = write_csv(
            tmp_path,
            [
                HEADER,
                "Good,Official Letters,Appointment Letter,,,2025-03-01,Body",
                ",Unknown Category,Appointment Letter,,,2025-03-01,Body",
                "Bad date,Official Letters,Appointment Letter,,,31/31/2025,Body",
                ",,,,,,",
                "Future,Official Letters,Appointment Letter,,,2026-01-01,Body",
            ],
        )

        result = import_service.import_file(admin, path)

        assert result["created"] == 1
        assert result["skipped"] == 3
        assert result["errors"][0] == (
            "Row 3: Document Title is required; Category 'Unknown Category' not found"
        )
        assert result["errors"][1] == "Row 4: Invalid Issue Date format. Use YYYY-MM-DD format"
        assert result["errors"][2].startswith("Row 6: ")
        assert "future" in result["errors"][2]

    def test_letter_type_from_other_category(self, import_service, admin, other_letter_type):
        result = import_service.import_rows(
            admin,
            [
                {
                    "Document Title": "Circular",
                    "Category Name": "Official Letters",
                    "Letter Type Name": "Policy Circular",
                    "Issue Date": "2025-03-01",
                    "Content": "Body",
                }
            ],
        )
        assert result["created"] == 0
        assert result["errors"] == [
            "Row 2: Letter Type 'Policy Circular' does not belong to category 'Official Letters'"
        ]

    def test_duplicate_letter_number_in_batch(self, import_service, admin):
        row = {
            "Document Title": "Appointment",
            "Category Name": "Official Letters",
            "Letter Type Name": "Appointment Letter",
            "Letter Number": "OFF/2025/777",
            "Issue Date": "2025-03-01",
            "Content": "Body",
        }
        result = import_service.import_rows(admin, [row, dict(row)])

        assert result["created"] == 1
        assert result["errors"] == ["Row 3: Letter number 'OFF/2025/777' already exists"]

    def test_import_xlsx_with_date_cells(self, import_service, admin, tmp_path, document_service):
        wb = Workbook()
        sheet = wb.active
        sheet.append(COLUMNS)
        sheet.append(
            [
                "Appointment",
                "Official Letters",
                "Appointment Letter",
                None,
                1234.0,
                datetime(2025, 3, 1),
                "Body",
            ]
        )
        path = tmp_path / "documents.xlsx"
        wb.save(path)

        result = import_service.import_file(admin, str(path))

        assert result["created"] == 1
        doc = document_service.get_document(admin, result["document_ids"][0])
        assert doc.reference_number == "1234"
        assert doc.issue_date.isoformat() == "2025-03-01"

    def test_storage_errors_abort(self, temp_db, admin, sample_letter_type):
        class BrokenDocuments:
            def create_document(self, *args, **kwargs):
                raise StorageError("Storage is temporarily unavailable")

        service = SpreadsheetImportService(temp_db, document_service=BrokenDocuments())
        row = {
            "Document Title": "Appointment",
            "Category Name": "Official Letters",
            "Letter Type Name": "Appointment Letter",
            "Issue Date": "2025-03-01",
            "Content": "Body",
        }
        with pytest.raises(StorageError):
            service.import_rows(admin, [row])


class TestTemplate:
    def test_template_lists_categories(self, import_service, tmp_path, other_letter_type):
        path = import_service.write_template(str(tmp_path / "template.xlsx"))

        wb = load_workbook(path)
        sheet = wb["Documents"]
        assert [c.value for c in sheet[1]] == COLUMNS
        assert sheet["B2"].value == "Circulars"
        assert sheet["C2"].value == "Policy Circular"
        assert not sheet["D2"].value

        options = wb["Options"]
        assert options.sheet_state == "hidden"
        assert [options.cell(row=r, column=1).value for r in (2, 3)] == ["Circulars", "Official Letters"]
        assert options.cell(row=1, column=3).value == "Official Letters"
        assert options.cell(row=2, column=3).value == "Appointment Letter"
        assert len(sheet.data_validations.dataValidation) == 1

    def test_template_round_trips_through_import(self, import_service, admin, tmp_path):
        path = import_service.write_template(str(tmp_path / "template.xlsx"))
        rows = read_rows(str(path))
        assert rows[0]["Category Name"] == "Official Letters"
