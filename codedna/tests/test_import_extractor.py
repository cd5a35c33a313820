import pytest

from codedna.processor.import_extractor import (
    ImportExtractor,
    calculate_complexity,
    count_loc,
    extract_imports,
    resolve_python_module,
    resolve_specifier,
)
from codedna.types import CodeFile, ImportRef


class TestExtractImports:
    """Test regex import extraction."""

    def test_javascript_imports(self):
        content = (
            "import React from 'react';\n"
            "import { helper } from './utils/helper';\n"
            "const cfg = require('../shared/config');\n"
            "import './styles.css';\n"
            "const lazy = import('./lazy');\n"
        )

        imports = extract_imports(content, "javascript", "src/app.js")

        assert imports == [
            ImportRef("react", False),
            ImportRef("src/utils/helper", True),
            ImportRef("src/styles.css", True),
            ImportRef("shared/config", True),
            ImportRef("src/lazy", True),
        ]

    def test_typescript_uses_same_patterns(self):
        imports = extract_imports("import { A } from \"../models/a\";\n", "typescript", "src/views/v.ts")

        assert imports == [ImportRef("src/models/a", True)]

    def test_python_imports(self):
        content = (
            "import os\n"
            "from .models import User\n"
            "from pkg.util import thing\n"
            "    import json\n"
        )

        imports = extract_imports(content, "python", "pkg/app.py")

        assert imports == [
            ImportRef("os", False),
            ImportRef("json", False),
            ImportRef("pkg/models", True),
            ImportRef("pkg.util", False),
        ]

    @pytest.mark.parametrize("module,current,expected", [
        (".models", "pkg/app.py", ImportRef("pkg/models", True)),
        ("..core.db", "pkg/app.py", ImportRef("core/db", True)),
        (".sub.mod", "pkg/api/views.py", ImportRef("pkg/api/sub/mod", True)),
        (".", "pkg/app.py", ImportRef("pkg", True)),
        (".util", "app.py", ImportRef("util", True)),
        ("pkg.util", "pkg/app.py", ImportRef("pkg.util", False)),
    ])
    def test_resolve_python_module(self, module, current, expected):
        assert resolve_python_module(module, current) == expected

    def test_unknown_language_has_no_imports(self):
        assert extract_imports("import x from './y'", "unknown", "a.txt") == []

    @pytest.mark.parametrize("specifier,current,expected", [
        ("./b", "a.js", ImportRef("b", True)),
        ("../b", "src/deep/a.js", ImportRef("src/b", True)),
        ("/lib/b", "src/a.js", ImportRef("src/lib/b", True)),
        ("lodash", "src/a.js", ImportRef("lodash", False)),
    ])
    def test_resolve_specifier(self, specifier, current, expected):
        assert resolve_specifier(specifier, current) == expected


class TestMetrics:
    """Test LOC and complexity metrics."""

    def test_count_loc_skips_blank_lines(self):
        assert count_loc("a\n\n   \nb\n") == 2
        assert count_loc("") == 0

    def test_python_complexity(self):
        content = "def f(x, y):\n    if x and y:\n        return 1\n"

        assert calculate_complexity(content, "python") == 4

    def test_javascript_complexity(self):
        content = "function a() { if (x) { return 1; } }"

        assert calculate_complexity(content, "javascript") == 3

    def test_baseline_complexity(self):
        assert calculate_complexity("", "python") == 1
        assert calculate_complexity("if (x) {}", "unknown") == 1


class TestImportExtractor:
    """Test file record extraction."""

    def test_extract_file_record(self):
        code_file = CodeFile(
            path="src/app.js",
            absolute_path="/tmp/src/app.js",
            language="javascript",
            content="import { b } from './b';\n\nif (b) { run(); }\n",
        )

        record = ImportExtractor().extract_file_record(code_file)

        assert record.path == "src/app.js"
        assert record.loc == 2
        assert record.complexity == 2
        assert record.imports == (ImportRef("src/b", True),)

    def test_extract_records_keeps_order(self):
        files = [
            CodeFile(path=f"f{i}.py", absolute_path=f"/tmp/f{i}.py", language="python", content="import os\n")
            for i in range(3)
        ]

        records = ImportExtractor().extract_records(files)

        assert [r.path for r in records] == ["f0.py", "f1.py", "f2.py"]

    def test_extract_records_skips_invalid_files(self):
        files = [
            CodeFile(path="", absolute_path="/tmp/broken.py", language="python", content="import os\n"),
            CodeFile(path="ok.py", absolute_path="/tmp/ok.py", language="python", content="import os\n"),
        ]

        records = ImportExtractor().extract_records(files)

        assert [r.path for r in records] == ["ok.py"]

    def test_python_relative_import_becomes_edge(self, build):
        files = [
            CodeFile(path="pkg/app.py", absolute_path="/tmp/pkg/app.py", language="python",
                     content="from .models import User\n"),
            CodeFile(path="pkg/models.py", absolute_path="/tmp/pkg/models.py", language="python",
                     content="class User:\n    pass\n"),
        ]

        graph = build(ImportExtractor().extract_records(files))

        assert [(e.source, e.target) for e in graph.edges] == [("pkg/app.py", "pkg/models.py")]
