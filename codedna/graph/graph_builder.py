"""
Builds a file-level dependency graph from extracted file records.
"""
import posixpath
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from ..config import settings
from ..types import FileRecord, Graph, GraphEdge, GraphNode, InvalidFileRecordError
from ..utils.logger import app_logger

# Extensions stripped when registering extension-less lookup keys
_STRIPPABLE_EXT = re.compile(r"\.(js|jsx|ts|tsx|py)$")

DEFAULT_RESOLVE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")
DEFAULT_INDEX_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx")


def directory_of(path: str) -> str:
    """Parent directory of a repo-relative path, ``root`` for top-level files."""
    parent = posixpath.dirname(path)
    return parent if parent else "root"


def label_of(path: str) -> str:
    return posixpath.basename(path) or path


class GraphBuilder:
    """Turns file records into a directed graph of internal imports."""

    def __init__(
        self,
        resolve_extensions: Optional[Sequence[str]] = None,
        index_extensions: Optional[Sequence[str]] = None,
    ):
        self.logger = app_logger.bind(component="graph_builder")
        self.resolve_extensions = tuple(
            resolve_extensions if resolve_extensions is not None else DEFAULT_RESOLVE_EXTENSIONS
        )
        self.index_extensions = tuple(
            index_extensions if index_extensions is not None else DEFAULT_INDEX_EXTENSIONS
        )

    @classmethod
    def from_settings(cls) -> "GraphBuilder":
        return cls(
            resolve_extensions=settings.resolve_extensions_list,
            index_extensions=settings.index_extensions_list,
        )

    def build(self, files: Iterable[Union[FileRecord, Dict[str, Any]]]) -> Graph:
        """
        Build the graph for a list of file records.

        Node order follows input order and edge order follows first discovery,
        so the same input always yields the same graph. Relative imports that
        resolve to no known file are dropped without error.
        """
        records = self._coerce_records(files)
        lookup = self._build_lookup(records)

        edge_pairs: List[Tuple[str, str]] = []
        seen: Set[Tuple[str, str]] = set()
        dropped = 0

        for record in records:
            for imp in record.imports:
                if not imp.is_relative:
                    continue
                target = self.resolve(imp.module, lookup)
                if target is None:
                    dropped += 1
                    self.logger.debug(f"Unresolved import '{imp.module}' in {record.path}")
                    continue
                key = (record.path, target.path)
                if key in seen:
                    continue
                seen.add(key)
                edge_pairs.append(key)

        in_degree: Dict[str, int] = {record.path: 0 for record in records}
        out_degree: Dict[str, int] = {record.path: 0 for record in records}
        for source, target in edge_pairs:
            out_degree[source] += 1
            in_degree[target] += 1

        nodes = tuple(
            GraphNode(
                id=record.path,
                label=label_of(record.path),
                language=record.language,
                loc=record.loc,
                complexity=record.complexity,
                directory=directory_of(record.path),
                in_degree=in_degree[record.path],
                out_degree=out_degree[record.path],
            )
            for record in records
        )
        edges = tuple(
            GraphEdge(source=source, target=target, id=f"edge-{index}")
            for index, (source, target) in enumerate(edge_pairs)
        )

        self.logger.info(
            f"Built graph with {len(nodes)} nodes and {len(edges)} edges "
            f"({dropped} unresolved imports dropped)"
        )
        return Graph(nodes=nodes, edges=edges)

    def resolve(self, specifier: str, lookup: Dict[str, FileRecord]) -> Optional[FileRecord]:
        """Return the first file matching the probe sequence for an import specifier."""
        for candidate in self._candidates(specifier):
            record = lookup.get(posixpath.normpath(candidate))
            if record is not None:
                return record
        return None

    def _candidates(self, specifier: str) -> List[str]:
        candidates = [specifier]
        candidates.extend(specifier + ext for ext in self.resolve_extensions)
        candidates.extend(f"{specifier}/index{ext}" for ext in self.index_extensions)
        return candidates

    def _coerce_records(self, files: Iterable[Union[FileRecord, Dict[str, Any]]]) -> List[FileRecord]:
        records: List[FileRecord] = []
        paths: Set[str] = set()
        for item in files:
            record = item if isinstance(item, FileRecord) else FileRecord.from_dict(item)
            if record.path in paths:
                raise InvalidFileRecordError(f"Duplicate file path {record.path!r}")
            paths.add(record.path)
            records.append(record)
        return records

    def _build_lookup(self, records: List[FileRecord]) -> Dict[str, FileRecord]:
        lookup: Dict[str, FileRecord] = {}
        # Keys are normalized like probe candidates, so "./src/a.js" answers to "src/a.js"
        for record in records:
            lookup.setdefault(posixpath.normpath(record.path), record)
        # Stripped keys never shadow a real path or an earlier stripped key
        for record in records:
            stripped = _STRIPPABLE_EXT.sub("", posixpath.normpath(record.path))
            lookup.setdefault(stripped, record)
        return lookup


def build_graph(files: Iterable[Union[FileRecord, Dict[str, Any]]]) -> Graph:
    """Build a graph with the default resolution rules."""
    return GraphBuilder().build(files)
