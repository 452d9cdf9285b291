"""DOCX report generator for finished quiz sessions."""

from datetime import datetime
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor

from quiz_session.engine.driver import QuizDriver
from quiz_session.engine.errors import SessionIncompleteError
from quiz_session.engine.views import CompletionView, ReviewItem

GREEN = RGBColor(0, 128, 0)
RED = RGBColor(192, 0, 0)
NAVY = RGBColor(0, 51, 102)
GREY = RGBColor(128, 128, 128)


def ensure_output_directory(output_dir: str = "output") -> Path:
    """
    Ensure the output directory exists.

    Args:
        output_dir: Directory path to create

    Returns:
        Path object for the output directory
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


def generate_timestamped_filename(base_name: str, extension: str = "docx") -> str:
    """
    Generate a filename with timestamp.

    Args:
        base_name: Base name for the file
        extension: File extension (without dot)

    Returns:
        Filename with timestamp
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    # Clean the base name to remove any path components
    base_name = Path(base_name).stem
    return f"{base_name}_{timestamp}.{extension}"


def export_session_report(
    driver: QuizDriver,
    output_path: str,
    use_output_dir: bool = True,
    output_dir: str = "output",
) -> str:
    """
    Export the summary and answer review of a completed session to DOCX.

    Args:
        driver: Driver of a completed session
        output_path: Path where the DOCX file should be saved
        use_output_dir: If True, saves to output directory with timestamp (default: True)
        output_dir: Directory to save files in (default: "output")

    Returns:
        Path to the created DOCX file

    Raises:
        SessionIncompleteError: The session has not reached its summary yet
    """
    summary = driver.completion_view()
    if summary is None:
        raise SessionIncompleteError()

    if use_output_dir:
        output_dir_path = ensure_output_directory(output_dir)
        output_path = str(output_dir_path / generate_timestamped_filename(output_path))

    doc = Document()
    setup_document_styles(doc)

    title = doc.add_heading(summary.set_label or "Quiz Report", level=0)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    add_summary(doc, summary)

    date_para = doc.add_paragraph(
        f"Completed: {datetime.now().strftime('%Y-%m-%d %H:%M')}"
    )
    date_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
    date_para.runs[0].font.size = Pt(9)
    date_para.runs[0].font.color.rgb = GREY

    review = driver.review()
    if review:
        doc.add_page_break()
        add_review_table(doc, review)
        add_explanations(doc, review)

    doc.save(output_path)

    return output_path


def setup_document_styles(doc: Document) -> None:
    """Set default font and margins."""
    font = doc.styles["Normal"].font
    font.name = "Calibri"
    font.size = Pt(11)

    for section in doc.sections:
        section.top_margin = Inches(1)
        section.bottom_margin = Inches(1)
        section.left_margin = Inches(1)
        section.right_margin = Inches(1)


def add_summary(doc: Document, summary: CompletionView) -> None:
    """Add the score line and the tier message."""
    stats = summary.stats

    doc.add_paragraph()
    score_para = doc.add_paragraph()
    score_para.add_run(f"Correct: {stats.correct_count}").bold = True
    score_para.add_run("  |  ")
    score_para.add_run(f"Total: {stats.total_count}").bold = True
    score_para.add_run("  |  ")
    score_para.add_run(f"Accuracy: {stats.accuracy_percent}%").bold = True
    score_para.alignment = WD_ALIGN_PARAGRAPH.CENTER

    if summary.tier:
        tier_para = doc.add_paragraph(f"{summary.tier.icon} {summary.tier.message}".strip())
        tier_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        tier_para.runs[0].italic = True


def add_review_table(doc: Document, review: list[ReviewItem]) -> None:
    """Add one row per answered question."""
    header = doc.add_heading("Answer Review", level=1)
    header.runs[0].font.color.rgb = NAVY

    table = doc.add_table(rows=1, cols=5)
    table.style = "Light Grid Accent 1"

    header_cells = table.rows[0].cells
    for cell, text in zip(header_cells, ["Q#", "Question", "Your answer", "Correct answer", "Result"]):
        cell.text = text
        for paragraph in cell.paragraphs:
            for run in paragraph.runs:
                run.bold = True

    for item in review:
        row_cells = table.add_row().cells
        row_cells[0].text = str(item.number)
        row_cells[1].text = item.prompt_text
        row_cells[2].text = ", ".join(item.selected_labels)
        row_cells[3].text = ", ".join(item.correct_labels)
        row_cells[4].text = "Correct" if item.is_correct else "Wrong"

    doc.add_paragraph()


def add_explanations(doc: Document, review: list[ReviewItem]) -> None:
    """Add the accepted-answer rationale of every answered question."""
    header = doc.add_heading("Explanations", level=1)
    header.runs[0].font.color.rgb = NAVY

    for item in review:
        q_para = doc.add_paragraph()
        q_run = q_para.add_run(f"Q{item.number}. ")
        q_run.bold = True
        q_run.font.color.rgb = GREEN if item.is_correct else RED
        q_para.add_run(item.prompt_text)

        exp_para = doc.add_paragraph()
        exp_para.paragraph_format.left_indent = Inches(0.5)
        exp_run = exp_para.add_run(
            f"Answer {', '.join(item.correct_labels)}: {item.correct_text}"
        )
        exp_run.italic = True
        exp_run.font.size = Pt(10)
