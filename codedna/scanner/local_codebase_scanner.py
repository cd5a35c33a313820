import os
from pathlib import Path
from typing import List, Optional, Iterator
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..config import settings
from ..types import CodeFile
from ..utils.logger import app_logger

EXTENSION_LANGUAGES = {
    '.js': 'javascript',
    '.jsx': 'javascript',
    '.ts': 'typescript',
    '.tsx': 'typescript',
    '.py': 'python',
}


class LocalCodebaseScanner:
    """Scanner for local codebase analysis."""

    def __init__(self, root_path: Optional[str] = None):
        if root_path is None:
            self.root_path = Path.cwd().resolve()
        else:
            self.root_path = Path(root_path).resolve()

        self.supported_extensions = set(settings.supported_extensions_list)
        self.ignored_dirs = set(settings.ignored_dirs_list)
        self.max_file_size = settings.max_file_size
        self.logger = app_logger.bind(component="scanner")

    def scan_directory(self) -> List[CodeFile]:
        """Scan directory and return list of supported source files."""
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Not a directory: {self.root_path}")

        self.logger.info(f"Scanning directory: {self.root_path}")

        all_files = sorted(self._walk_directory(), key=lambda code_file: code_file.path)

        self.logger.info(f"Found {len(all_files)} supported files")
        return all_files

    def _walk_directory(self) -> Iterator[CodeFile]:
        """Walk through directory and yield code files."""
        def on_error(error: OSError):
            self.logger.warning(f"Cannot read directory: {error.filename}")

        for root, dirs, files in os.walk(self.root_path, onerror=on_error):
            # Remove ignored directories
            dirs[:] = sorted(d for d in dirs if d not in self.ignored_dirs)

            for file_name in files:
                file_path = Path(root) / file_name

                if self._should_include_file(file_path):
                    code_file = self._create_code_file(file_path)
                    if code_file:
                        yield code_file

    def _should_include_file(self, file_path: Path) -> bool:
        """Check if file should be included in scan."""
        # Check file extension
        if file_path.suffix.lower() not in self.supported_extensions:
            return False

        try:
            if file_path.stat().st_size > self.max_file_size:
                self.logger.warning(f"Skipping large file: {file_path}")
                return False
        except OSError:
            return False

        return True

    def _create_code_file(self, file_path: Path) -> Optional[CodeFile]:
        """Create CodeFile object from file path."""
        try:
            stat = file_path.stat()
        except OSError as e:
            self.logger.warning(f"Cannot stat {file_path}: {e}")
            return None

        relative_path = file_path.relative_to(self.root_path)
        return CodeFile(
            path=relative_path.as_posix(),
            absolute_path=str(file_path.resolve()),
            language=self.determine_language(file_path),
            size=stat.st_size,
            last_modified=stat.st_mtime,
            content=None  # Will be loaded later
        )

    @staticmethod
    def determine_language(file_path: Path) -> str:
        """Determine programming language based on extension."""
        return EXTENSION_LANGUAGES.get(file_path.suffix.lower(), 'unknown')

    def load_file_content(self, code_file: CodeFile) -> Optional[str]:
        """Load content of a code file."""
        try:
            with open(code_file.absolute_path, 'r', encoding='utf-8', errors='ignore') as f:
                return f.read()
        except OSError as e:
            self.logger.warning(f"Error loading file {code_file.absolute_path}: {e}")
            return None

    def load_files_content(self, code_files: List[CodeFile], max_workers: Optional[int] = None) -> List[CodeFile]:
        """Load content for multiple files in parallel, keeping scan order."""
        self.logger.info(f"Loading content for {len(code_files)} files")

        def load_content(file: CodeFile) -> CodeFile:
            content = self.load_file_content(file)
            if content is not None:
                file.content = content
            return file

        with ThreadPoolExecutor(max_workers=max_workers or settings.max_workers) as executor:
            futures = [executor.submit(load_content, file) for file in code_files]
            for future in as_completed(futures):
                future.result()

        # Filter out files that couldn't be loaded
        loaded_files = [f for f in code_files if f.content is not None]
        self.logger.info(f"Successfully loaded content for {len(loaded_files)} files")

        return loaded_files
