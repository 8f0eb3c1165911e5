from pathlib import Path
from typing import List

from mediashrink.core.base_compressor import BaseCompressor


# ============================================================================
# PDF Compressor
# ============================================================================


class PdfCompressor(BaseCompressor):
    """Handles PDF compression using Ghostscript's pdfwrite device."""

    name = "pdf"
    tool = "gs"

    def build_args(self, in_path: Path, out_path: Path) -> List[str]:
        return [
            "-sDEVICE=pdfwrite",
            "-dCompatibilityLevel=1.4",
            "-dPDFSETTINGS=/screen",
            "-dNOPAUSE",
            "-dQUIET",
            "-dBATCH",
            f"-sOutputFile={self._escape_output_path(out_path)}",
            str(in_path),
        ]

    @staticmethod
    def _escape_output_path(out_path: Path) -> str:
        # Ghostscript expands %d-style page templates in OutputFile
        return str(out_path).replace("%", "%%")
