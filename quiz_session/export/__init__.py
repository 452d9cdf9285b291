"""Export functionality for session reports."""

from .docx_report import export_session_report

__all__ = ["export_session_report"]
