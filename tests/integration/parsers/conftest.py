from pathlib import Path

import pytest
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas


def _write_pages(path: Path, pages: list[list[str]]) -> None:
    c = canvas.Canvas(str(path), pagesize=LETTER)
    _, height = LETTER

    for lines in pages:
        text = c.beginText(40, height - 50)
        for line in lines:
            text.textLine(line)
        c.drawText(text)
        c.showPage()

    c.save()


@pytest.fixture(scope="module")
def pdf_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Create all test PDFs once per module."""
    dir_path: Path = tmp_path_factory.mktemp("pdfs")

    _write_pages(
        dir_path / "policy.pdf",
        [
            [
                "# Leave Policy",
                "Employees accrue paid leave every calendar month.",
                "## Carry Over",
                "Unused leave carries over to the next year.",
            ]
        ],
    )
    _write_pages(
        dir_path / "multipage.pdf",
        [
            ["This content is on page one of the memo."],
            ["This content is on page two of the memo."],
        ],
    )
    (dir_path / "broken.pdf").write_bytes(b"this is not a pdf at all")

    return dir_path
