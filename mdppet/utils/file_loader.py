import logging
import os
import sys
from fnmatch import fnmatch
from pathlib import Path
from typing import List, NamedTuple, Sequence, TextIO


class FileInfo(NamedTuple):
    """Information about a detected markdown source."""
    path: str
    extension: str


class FileData(NamedTuple):
    """Loaded markdown source ready for scanning."""
    relative_path: str
    content: str
    extension: str


class FileLoader:
    """Markdown source discovery for snippet conversion."""

    logger = logging.getLogger("mdppet")

    DEFAULT_PATTERNS: Sequence[str] = ("*.md", "*.markdown")

    # Directories to exclude from search
    EXCLUDE_DIRS = {
        '__pycache__', '.venv', 'venv', 'node_modules', 'target', 'dist',
        'build', '.git', '.svn', '.hg', '.pytest_cache', '.tox', '.mypy_cache',
    }

    STDIN = "-"
    ENCODING = "utf-8-sig"

    def __init__(self, patterns: Sequence[str] | None = None, encoding: str | None = None):
        """Initialize file loader.

        Args:
            patterns: Glob patterns matched against file names when walking a
                directory (default: *.md, *.markdown). A file given directly is
                always loaded.
            encoding: Text encoding of the sources (default: utf-8 with an
                optional byte order mark).
        """
        self.patterns = tuple(patterns) if patterns else tuple(self.DEFAULT_PATTERNS)
        self.encoding = encoding or self.ENCODING

    def detect_files(self, path: str) -> List[FileInfo]:
        """Detect markdown sources in the given path (file or directory).

        Raises:
            FileNotFoundError: If path doesn't exist
            ValueError: If path is neither file nor directory
        """
        path_obj = Path(path)

        if not path_obj.exists():
            raise FileNotFoundError(f"Path not found: {path}")

        if path_obj.is_file():
            return [self._file_info(path_obj)]
        elif path_obj.is_dir():
            return self._analyze_directory(path_obj)
        else:
            raise ValueError(f"Path is neither file nor directory: {path}")

    def _analyze_directory(self, dir_path: Path) -> List[FileInfo]:
        files = []
        for root, dirs, filenames in os.walk(dir_path):
            dirs[:] = sorted(d for d in dirs if d not in self.EXCLUDE_DIRS)
            root_path = Path(root)
            for filename in sorted(filenames):
                if any(fnmatch(filename, pattern) for pattern in self.patterns):
                    files.append(self._file_info(root_path / filename))
        return files

    @staticmethod
    def _file_info(file_path: Path) -> FileInfo:
        return FileInfo(
            path=str(file_path.absolute()),
            extension=file_path.suffix,
        )

    def load_files(self, path: str) -> List[FileData]:
        """Detect and load every source under ``path``; ``-`` reads stdin.

        Read and decode errors propagate, a conversion never runs on a
        partial set of sources.
        """
        if path == self.STDIN:
            return [self.load_stream(sys.stdin)]

        base = Path(path)
        files_data = []
        for file_info in self.detect_files(path):
            with open(file_info.path, 'r', encoding=self.encoding, newline='') as f:
                content = f.read()
            if base.is_dir():
                relative = os.path.relpath(file_info.path, base.absolute())
            else:
                relative = str(base)
            files_data.append(FileData(
                relative_path=relative,
                content=content,
                extension=file_info.extension,
            ))

        if files_data:
            self.logger.info("Loaded %d markdown file(s) from %s", len(files_data), path)
        return files_data

    def load_stream(self, stream: TextIO, name: str = "<stdin>") -> FileData:
        content = stream.read()
        if content.startswith("\ufeff"):
            content = content[1:]
        return FileData(
            relative_path=name,
            content=content,
            extension="",
        )
