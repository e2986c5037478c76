from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalOutputStore:
    """Writes OCR text outputs under ``<root>/output/<base_name>/``."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    def folder_for(self, base_name: str) -> Path:
        return self._root / "output" / base_name

    def write_texts(self, base_name: str, files: dict[str, str]) -> Path:
        folder = self.folder_for(base_name)
        folder.mkdir(parents=True, exist_ok=True)
        for filename, text in files.items():
            (folder / filename).write_text(text, encoding="utf-8")
        logger.info("outputs_written", extra={"folder": str(folder), "file_count": len(files)})
        return folder

    def write_zip(self, base_name: str, files: dict[str, str]) -> Path:
        folder = self.folder_for(base_name)
        folder.mkdir(parents=True, exist_ok=True)
        zip_path = folder / f"{base_name}.zip"
        with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for filename, text in files.items():
                zf.writestr(filename, text.encode("utf-8"))
        logger.info("result_zip_written", extra={"path": str(zip_path), "file_count": len(files)})
        return zip_path

    def write_outputs(
        self, base_name: str, files: dict[str, str], with_zip: bool = False
    ) -> tuple[Path, Path | None]:
        """Write the text files and optional zip; on any failure the folder is removed."""
        folder = self.folder_for(base_name)
        try:
            self.write_texts(base_name, files)
            zip_path = self.write_zip(base_name, files) if with_zip else None
        except Exception:
            logger.warning("outputs_rolled_back", extra={"folder": str(folder)})
            shutil.rmtree(folder, ignore_errors=True)
            raise
        return folder, zip_path
