"""
Regex-based extraction of imports and simple metrics from source text.
"""
import posixpath
import re
from typing import Iterable, List, Optional

from ..types import CodeFile, FileRecord, ImportRef, InvalidFileRecordError
from ..utils.logger import app_logger

# Pattern order decides import order within a file
JS_IMPORT_PATTERNS = [
    re.compile(r"""import\s+.*?\s+from\s+['"](.+?)['"]"""),
    re.compile(r"""import\s+['"](.+?)['"]"""),
    re.compile(r"""require\s*\(\s*['"](.+?)['"]\s*\)"""),
    re.compile(r"""import\s*\(\s*['"](.+?)['"]\s*\)"""),
]

PY_SIMPLE_IMPORT = re.compile(r"^\s*import\s+(\w+)", re.MULTILINE)
PY_FROM_IMPORT = re.compile(r"^\s*from\s+([.\w]+)\s+import", re.MULTILINE)

JS_COMPLEXITY_PATTERNS = [
    re.compile(r"\bif\s*\("),
    re.compile(r"\belse\s+if\s*\("),
    re.compile(r"\bfor\s*\("),
    re.compile(r"\bwhile\s*\("),
    re.compile(r"\bswitch\s*\("),
    re.compile(r"\bcatch\s*\("),
    re.compile(r"\bcase\s+"),
    re.compile(r"\?.*:"),
    re.compile(r"\bfunction\s*\w*\s*\("),
    re.compile(r"=>\s*{"),
    re.compile(r"\|\|"),
    re.compile(r"&&"),
]

PY_COMPLEXITY_PATTERNS = [
    re.compile(r"\bif\s+"),
    re.compile(r"\belif\s+"),
    re.compile(r"\bfor\s+"),
    re.compile(r"\bwhile\s+"),
    re.compile(r"\bexcept[\s:]"),
    re.compile(r"\bdef\s+"),
    re.compile(r"\bclass\s+"),
    re.compile(r"\blambda\s+"),
    re.compile(r"\band\b"),
    re.compile(r"\bor\b"),
]

JS_LANGUAGES = ("javascript", "typescript")


def count_loc(content: str) -> int:
    """Count non-blank lines."""
    return sum(1 for line in content.split("\n") if line.strip())


def calculate_complexity(content: str, language: str) -> int:
    """Base complexity of 1 plus one per control structure match."""
    if language in JS_LANGUAGES:
        patterns = JS_COMPLEXITY_PATTERNS
    elif language == "python":
        patterns = PY_COMPLEXITY_PATTERNS
    else:
        patterns = []
    return 1 + sum(len(pattern.findall(content)) for pattern in patterns)


def resolve_specifier(specifier: str, current_path: str) -> ImportRef:
    """Turn a JS/TS module specifier into a repo-relative import when it is local."""
    if specifier.startswith(".") or specifier.startswith("/"):
        current_dir = posixpath.dirname(current_path)
        # A leading slash is anchored at the importing file's directory, not the filesystem root
        resolved = posixpath.normpath(posixpath.join(current_dir, specifier.lstrip("/")))
        return ImportRef(module=resolved, is_relative=True)
    return ImportRef(module=specifier, is_relative=False)


def resolve_python_module(module: str, current_path: str) -> ImportRef:
    """Map a dotted relative module onto a repo-relative path; absolute modules stay external."""
    if not module.startswith("."):
        return ImportRef(module=module, is_relative=False)
    dots = len(module) - len(module.lstrip("."))
    # One dot is the importing file's own package, each further dot climbs a level
    base = posixpath.dirname(current_path)
    for _ in range(dots - 1):
        base = posixpath.dirname(base)
    remainder = module[dots:].replace(".", "/")
    resolved = posixpath.normpath(posixpath.join(base, remainder)) if remainder else posixpath.normpath(base or ".")
    return ImportRef(module=resolved, is_relative=True)


def extract_imports(content: str, language: str, current_path: str) -> List[ImportRef]:
    imports: List[ImportRef] = []

    if language in JS_LANGUAGES:
        for pattern in JS_IMPORT_PATTERNS:
            for match in pattern.finditer(content):
                imports.append(resolve_specifier(match.group(1), current_path))

    if language == "python":
        for match in PY_SIMPLE_IMPORT.finditer(content):
            imports.append(ImportRef(module=match.group(1), is_relative=False))
        for match in PY_FROM_IMPORT.finditer(content):
            imports.append(resolve_python_module(match.group(1), current_path))

    return imports


class ImportExtractor:
    """Builds file records from loaded source files."""

    def __init__(self):
        self.logger = app_logger.bind(component="import_extractor")

    def extract_file_record(self, code_file: CodeFile) -> FileRecord:
        content = code_file.content or ""
        return FileRecord.from_dict({
            "path": code_file.path,
            "language": code_file.language,
            "loc": count_loc(content),
            "complexity": calculate_complexity(content, code_file.language),
            "imports": [imp.to_dict() for imp in extract_imports(content, code_file.language, code_file.path)],
        })

    def extract_records(self, code_files: Iterable[CodeFile]) -> List[FileRecord]:
        """Extract records for every file; files that fail are skipped with a warning."""
        records: List[FileRecord] = []
        for code_file in code_files:
            record: Optional[FileRecord] = None
            try:
                record = self.extract_file_record(code_file)
            except InvalidFileRecordError as e:
                self.logger.warning(f"Failed to parse {code_file.path}: {e}")
            if record is not None:
                records.append(record)
        self.logger.info(f"Extracted {len(records)} file records")
        return records
