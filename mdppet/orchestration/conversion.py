import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from tqdm import tqdm

from ..config import OutputConfig, ScannerConfig
from ..markdown import RawRecord, emit_records, render_json, scan_text
from ..snippet import SnippetDocument
from ..utils.file_loader import FileData, FileLoader


logger = logging.getLogger("mdppet")


def _target_mode(target: Path) -> int:
    """Mode for a newly written output: keep an existing file's, else honour the umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class ConversionPipeline:
    """Runs the full markdown to snippet JSON conversion.

    Every source is scanned and validated before anything is written; any
    error aborts the run with no output.
    """

    def __init__(
        self,
        *,
        scanner_config: Optional[ScannerConfig] = None,
        output_config: Optional[OutputConfig] = None,
        loader: Optional[FileLoader] = None,
        show_progress: bool = True,
    ) -> None:
        self.scanner_config = scanner_config or ScannerConfig()
        self.output_config = output_config or OutputConfig()
        self.loader = loader or FileLoader()
        self.show_progress = show_progress
        self._last_run_stats: Optional[Dict[str, Union[int, str]]] = None

    @property
    def last_run_stats(self) -> Optional[Dict[str, Union[int, str]]]:
        return self._last_run_stats

    def convert_text(self, text: str, *, source: Optional[str] = None) -> SnippetDocument:
        """Scan and validate a single document."""
        records = scan_text(text, self.scanner_config, source=source)
        return emit_records(records)

    def convert_files(self, files_data: Sequence[FileData]) -> SnippetDocument:
        """Scan every source in order and merge them into one document."""
        records: List[RawRecord] = []
        progress = tqdm(
            files_data,
            desc="Scanning",
            unit="file",
            disable=not self.show_progress or len(files_data) < 2,
        )
        for file_data in progress:
            found = scan_text(
                file_data.content, self.scanner_config, source=file_data.relative_path
            )
            logger.info("Found %d snippets in %s", len(found), file_data.relative_path)
            records.extend(found)
        return emit_records(records)

    def run(self, path: str) -> str:
        """Convert the sources at ``path`` and return the rendered JSON."""
        self._last_run_stats = None
        files_data = self.loader.load_files(path)
        document = self.convert_files(files_data)
        output_text = render_json(document, self.output_config)
        self._last_run_stats = {
            "total_files": len(files_data),
            "total_snippets": len(document),
            "output_size": len(output_text),
        }
        return output_text

    def write(self, output_text: str, destination: Union[str, Path]) -> None:
        """Write ``output_text`` to ``destination`` without leaving a partial file."""
        target = Path(destination)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as file_handle:
                file_handle.write(output_text)
                file_handle.write("\n")
            os.chmod(tmp_name, _target_mode(target))
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.info("Wrote %d bytes to %s", len(output_text) + 1, target)
