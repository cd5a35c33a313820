import pytest
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, Tuple
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from codedna.graph.graph_builder import GraphBuilder
from codedna.types import Graph


RecordFactory = Callable[..., Dict[str, Any]]


def _make_record(
    path: str,
    imports: Sequence[Tuple[str, bool]] = (),
    language: str = "javascript",
    loc: int = 10,
    complexity: int = 1,
) -> Dict[str, Any]:
    return {
        "path": path,
        "language": language,
        "loc": loc,
        "complexity": complexity,
        "imports": [{"module": module, "isRelative": is_relative} for module, is_relative in imports],
    }


@pytest.fixture
def make_record() -> RecordFactory:
    """Factory for plain file-record mappings."""
    return _make_record


@pytest.fixture
def build() -> Callable[[List[Dict[str, Any]]], Graph]:
    """Build a graph with the default resolution rules."""
    builder = GraphBuilder()
    return builder.build


@pytest.fixture
def chain_records(make_record) -> List[Dict[str, Any]]:
    """src/a.js -> src/b.js -> src/c.js"""
    return [
        make_record("src/a.js", [("src/b", True)]),
        make_record("src/b.js", [("src/c", True)]),
        make_record("src/c.js"),
    ]


@pytest.fixture
def two_cycle_records(make_record) -> List[Dict[str, Any]]:
    """src/a.js <-> src/b.js"""
    return [
        make_record("src/a.js", [("src/b", True)]),
        make_record("src/b.js", [("src/a", True)]),
    ]


@pytest.fixture
def temp_codebase(tmp_path: Path) -> Path:
    """Create a small mixed-language codebase on disk."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.js").write_text(
        "import React from 'react';\n"
        "import { helper } from './helper';\n"
        "import { config } from './config';\n"
        "\n"
        "function main() {\n"
        "  if (helper()) {\n"
        "    return config;\n"
        "  }\n"
        "}\n"
    )
    (tmp_path / "src" / "helper.js").write_text(
        "import { main } from './app';\n"
        "export function helper() { return main && true; }\n"
    )
    (tmp_path / "src" / "config.ts").write_text("export const config = {};\n")
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "models.py").write_text(
        "import os\n"
        "from .base import Base\n"
        "\n"
        "class User(Base):\n"
        "    def name(self):\n"
        "        return os.getenv('USER')\n"
    )
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text("module.exports = {};\n")
    (tmp_path / "README.md").write_text("# Test Project\n")
    return tmp_path
