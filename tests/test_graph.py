"""Tests for the graph module."""

import networkx as nx
import pytest
from pydantic import ValidationError

from projectify.errors import InvalidStateError
from projectify.graph import (
    GraphBuilder,
    GraphStorage,
    ImportResolver,
    build_dependency_graph,
    compute_metrics,
    find_import_paths,
    get_all_dependents,
    get_connected_components,
    get_file_dependencies,
    get_file_dependents,
    get_file_impact,
    get_top_risks,
)
from projectify.graph.import_resolver import python_relative_to_path
from projectify.parser import FileFacts, ProjectAnalysis


def chain_graph():
    """a.ts -> b.ts -> c.ts"""
    return build_dependency_graph({
        "/proj/a.ts": ["./b"],
        "/proj/b.ts": ["./c"],
        "/proj/c.ts": [],
    })


class TestImportResolver:
    """Tests for ImportResolver class."""

    def test_relative_import_finds_extension(self):
        """Test that ./b finds b.ts next to the importing file."""
        resolver = ImportResolver({"/proj/a.ts", "/proj/b.ts"})

        resolved = resolver.resolve("./b", "/proj/a.ts")

        assert resolved.resolved_path == "/proj/b.ts"
        assert resolved.is_relative is True
        assert resolved.is_external is False

    def test_relative_import_exact_path(self):
        """Test that an import already carrying its extension resolves."""
        resolver = ImportResolver({"/proj/a.ts", "/proj/b.ts"})
        assert resolver.resolve_path("./b.ts", "/proj/a.ts") == "/proj/b.ts"

    def test_relative_import_parent_directory(self):
        """Test ../ imports."""
        resolver = ImportResolver({"/proj/src/a.js", "/proj/lib/util.js"})
        assert resolver.resolve_path("../lib/util", "/proj/src/a.js") == "/proj/lib/util.js"

    def test_relative_import_index_file(self):
        """Test resolving a directory import to its index file."""
        resolver = ImportResolver({"/proj/a.ts", "/proj/lib/index.ts"})
        assert resolver.resolve_path("./lib", "/proj/a.ts") == "/proj/lib/index.ts"

    def test_relative_import_package_init(self):
        """Test resolving a directory import to a Python package."""
        resolver = ImportResolver({"/proj/a.py", "/proj/pkg/__init__.py"})
        assert resolver.resolve_path("./pkg", "/proj/a.py") == "/proj/pkg/__init__.py"

    def test_suffix_order_decides_between_candidates(self):
        """Test that the suffix list is walked in order across all candidate shapes."""
        resolver = ImportResolver({"/proj/a.ts", "/proj/b.js", "/proj/b.ts"})
        assert resolver.resolve_path("./b", "/proj/a.ts") == "/proj/b.js"

        # index.js is tried with the .js suffix, before b.ts is tried
        resolver = ImportResolver({"/proj/a.ts", "/proj/b/index.js", "/proj/b.ts"})
        assert resolver.resolve_path("./b", "/proj/a.ts") == "/proj/b/index.js"

    def test_python_relative_module(self):
        """Test Python-style relative imports (.utils, ..core.models)."""
        resolver = ImportResolver({
            "/proj/pkg/api/views.py",
            "/proj/pkg/api/utils.py",
            "/proj/pkg/core/models.py",
            "/proj/pkg/api/__init__.py",
        })

        assert resolver.resolve_path(".utils", "/proj/pkg/api/views.py") == "/proj/pkg/api/utils.py"
        assert resolver.resolve_path("..core.models", "/proj/pkg/api/views.py") == "/proj/pkg/core/models.py"
        assert resolver.resolve_path(".", "/proj/pkg/api/views.py") == "/proj/pkg/api/__init__.py"

    def test_python_relative_to_path(self):
        """Test rewriting of Python relative module spellings."""
        assert python_relative_to_path(".utils") == "./utils"
        assert python_relative_to_path("..core.models") == "../core/models"
        assert python_relative_to_path("...") == "../.."
        assert python_relative_to_path("./already/a/path") == "./already/a/path"

    def test_dotted_module(self):
        """Test dotted module imports resolve next to the importing file."""
        resolver = ImportResolver({
            "/proj/pkg/main.py",
            "/proj/pkg/utils/helpers.py",
            "/proj/pkg/sub/__init__.py",
        })

        assert resolver.resolve_path("utils.helpers", "/proj/pkg/main.py") == "/proj/pkg/utils/helpers.py"
        assert resolver.resolve_path("sub", "/proj/pkg/main.py") == "/proj/pkg/sub/__init__.py"

    def test_dotted_module_has_no_root_lookup(self):
        """Test that dotted modules are not searched from the project root."""
        resolver = ImportResolver({"/proj/pkg/main.py", "/proj/utils.py"})
        assert resolver.resolve_path("utils", "/proj/pkg/main.py") is None

    def test_external_imports_are_unresolved(self):
        """Test package imports that are not in the file set."""
        resolver = ImportResolver({"/proj/a.ts"})

        for import_path in ("left-pad", "react", "os.path", "@scope/pkg", "/abs/path", ""):
            resolved = resolver.resolve(import_path, "/proj/a.ts")
            assert resolved.resolved_path is None
            assert resolved.is_external is True

    def test_scoped_and_absolute_never_resolve(self):
        """Test that / and @ prefixes are not treated as dotted modules."""
        resolver = ImportResolver({"/proj/a.ts", "/proj/@scope/pkg.ts", "/abs/x.ts"})
        assert resolver.resolve_path("@scope/pkg", "/proj/a.ts") is None
        assert resolver.resolve_path("/abs/x", "/proj/a.ts") is None

    def test_never_returns_unknown_path(self):
        """Test that a resolved path is always a known file."""
        known = {"/proj/a.ts", "/proj/b.ts"}
        resolver = ImportResolver(known)

        for import_path in ("./b", "./c", "../b", "b", ".b", "./b/index"):
            resolved = resolver.resolve_path(import_path, "/proj/a.ts")
            assert resolved is None or resolved in known


class TestGraphStorage:
    """Tests for GraphStorage class."""

    def test_add_import_deduplicates(self):
        """Test that the same edge is only added once."""
        storage = GraphStorage()
        storage.add_file("a")
        storage.add_file("b")

        assert storage.add_import("a", "b") is True
        assert storage.add_import("a", "b") is False
        assert storage.get_imports("a") == {"b"}
        assert storage.get_importers("b") == {"a"}

    def test_add_import_requires_known_files(self):
        """Test that edges never reference unknown files."""
        storage = GraphStorage()
        storage.add_file("a")

        assert storage.add_import("a", "missing") is False
        assert storage.get_statistics()["edges"] == 0

    def test_degree_accessors_follow_import_direction(self):
        """Test imports_count/importers_count naming."""
        storage = GraphStorage()
        for name in ("a", "b", "c"):
            storage.add_file(name)
        storage.add_import("a", "c")
        storage.add_import("b", "c")

        assert storage.imports_count("a") == 1
        assert storage.importers_count("a") == 0
        assert storage.imports_count("c") == 0
        assert storage.importers_count("c") == 2

    def test_get_statistics(self):
        """Test graph statistics."""
        storage = GraphStorage()
        for name in ("a", "b", "lonely"):
            storage.add_file(name)
        storage.add_import("a", "b")

        stats = storage.get_statistics()
        assert stats == {"files": 3, "edges": 1, "with_dependents": 1, "isolated": 1}


class TestGraphBuilder:
    """Tests for GraphBuilder and build_dependency_graph."""

    def test_chain_edges(self):
        """Test building edges from relative imports."""
        graph = chain_graph()

        edges = graph.get_edges()
        assert edges["/proj/a.ts"] == frozenset({"/proj/b.ts"})
        assert edges["/proj/b.ts"] == frozenset({"/proj/c.ts"})
        assert edges["/proj/c.ts"] == frozenset()

    def test_relative_input_paths(self):
        """Test the a/b/c scenario with bare file names."""
        graph = build_dependency_graph({
            "a.ts": ["./b"],
            "b.ts": ["./c"],
            "c.ts": [],
        })

        assert graph.get_edges()["a.ts"] == frozenset({"b.ts"})
        assert graph.get_node("c.ts").affected_files == 2
        assert graph.get_node("c.ts").blast_radius == pytest.approx(66.67, abs=0.01)
        assert graph.get_node("a.ts").affected_files == 0

    def test_one_node_per_file(self):
        """Test every file gets exactly one node, even without imports."""
        graph = build_dependency_graph({"/p/x.py": [], "/p/y.py": [], "/p/z.md": []})
        assert set(graph.get_nodes()) == {"/p/x.py", "/p/y.py", "/p/z.md"}

    def test_duplicate_imports_counted_once(self):
        """Test that repeated imports of one target are idempotent."""
        graph = build_dependency_graph({
            "/proj/a.ts": ["./b", "./b.ts", "./b"],
            "/proj/b.ts": [],
        })

        assert graph.get_node("/proj/a.ts").in_degree == 1
        assert graph.get_node("/proj/b.ts").out_degree == 1

    def test_degrees_match_adjacency(self):
        """Test in/out degree equal the size of the adjacency sets."""
        graph = build_dependency_graph({
            "/p/a.js": ["./b", "./c", "lodash"],
            "/p/b.js": ["./c"],
            "/p/c.js": [],
            "/p/d.js": ["./c", "./a"],
        })

        for path, node in graph.get_nodes().items():
            assert node.in_degree == len(graph.get_edges()[path])
            assert node.out_degree == len(graph.get_dependents(path))

        assert graph.get_node("/p/c.js").out_degree == 3
        assert graph.get_node("/p/a.js").in_degree == 2

    def test_unresolved_import_produces_no_edge(self):
        """Test that an external package import is silently dropped."""
        graph = build_dependency_graph({
            "/proj/a.ts": ["left-pad"],
            "/proj/b.ts": [],
        })

        assert graph.get_edges()["/proj/a.ts"] == frozenset()
        assert graph.get_statistics()["unresolved_imports"] == 1

    def test_self_import_is_not_special_cased(self):
        """Test that a file importing itself yields a self edge."""
        graph = build_dependency_graph({"/proj/a.ts": ["./a"]})

        assert graph.get_edges()["/proj/a.ts"] == frozenset({"/proj/a.ts"})
        assert graph.get_node("/proj/a.ts").affected_files == 0

    def test_accepts_file_facts_and_mappings(self):
        """Test the different per-file input shapes."""
        from_facts = build_dependency_graph({
            "/proj/a.py": FileFacts(path="/proj/a.py", language="python", imports=[".b"]),
            "/proj/b.py": FileFacts(path="/proj/b.py", language="python"),
        })
        from_dicts = build_dependency_graph({
            "/proj/a.py": {"imports": [".b"], "language": "python"},
            "/proj/b.py": {"imports": [], "language": "python"},
        })
        from_analysis = build_dependency_graph(ProjectAnalysis(
            file_count=2,
            files={
                "/proj/a.py": FileFacts(path="/proj/a.py", imports=[".b"]),
                "/proj/b.py": FileFacts(path="/proj/b.py"),
            },
        ))

        for graph in (from_facts, from_dicts, from_analysis):
            assert graph.get_edges()["/proj/a.py"] == frozenset({"/proj/b.py"})

    def test_colliding_paths_merge_imports(self, caplog):
        """Test that keys normalizing to one path keep every import."""
        with caplog.at_level("WARNING", logger="projectify.graph.builder"):
            graph = build_dependency_graph({
                "/p/a.ts": ["./b"],
                "/p/./a.ts": ["./c"],
                "/p/b.ts": [],
                "/p/c.ts": [],
            })

        assert "merging their imports" in caplog.text
        assert len(graph) == 3
        assert graph.get_dependencies("/p/a.ts") == ["/p/b.ts", "/p/c.ts"]

    def test_language_is_stored_on_nodes(self):
        """Test that the language tag ends up on the NetworkX node."""
        graph = build_dependency_graph({"/p/a.py": {"imports": [], "language": "python"}})
        assert graph.storage.graph.nodes["/p/a.py"]["language"] == "python"

    def test_order_independent(self):
        """Test that processing order does not change the result."""
        files = {
            "/p/a.js": ["./b", "./c"],
            "/p/b.js": ["./c"],
            "/p/c.js": ["./a"],
            "/p/d.js": [],
        }
        forward = build_dependency_graph(files)
        backward = build_dependency_graph(dict(reversed(list(files.items()))))

        assert dict(forward.get_edges()) == dict(backward.get_edges())
        assert dict(forward.get_nodes()) == dict(backward.get_nodes())

    def test_rebuild_is_idempotent(self):
        """Test that identical input gives identical edges and metrics."""
        first = chain_graph()
        second = chain_graph()

        assert dict(first.get_edges()) == dict(second.get_edges())
        assert dict(first.get_nodes()) == dict(second.get_nodes())

    def test_empty_file_set_raises(self):
        """Test that metrics need at least one file."""
        with pytest.raises(InvalidStateError):
            build_dependency_graph({})

    def test_builder_two_step(self):
        """Test using GraphBuilder directly."""
        builder = GraphBuilder()
        builder.build_from_facts({"/p/a.ts": ["./b", "react"], "/p/b.ts": []})

        assert builder.unresolved_imports == 1
        assert builder.storage.get_statistics()["edges"] == 1

        graph = builder.build()
        assert len(graph) == 2


class TestMetrics:
    """Tests for transitive dependents and blast radius."""

    def test_chain_metrics(self):
        """Test affected files and blast radius along a chain."""
        graph = chain_graph()

        c = graph.get_node("/proj/c.ts")
        b = graph.get_node("/proj/b.ts")
        a = graph.get_node("/proj/a.ts")

        assert c.affected_files == 2
        assert c.blast_radius == pytest.approx(200 / 3)
        assert b.affected_files == 1
        assert b.blast_radius == pytest.approx(100 / 3)
        assert a.affected_files == 0
        assert a.blast_radius == 0

    def test_cycle_terminates(self):
        """Test that mutual imports terminate and list each other as dependents."""
        graph = build_dependency_graph({
            "/p/a.js": ["./b"],
            "/p/b.js": ["./a"],
        })

        assert graph.get_transitive_dependents("/p/a.js") == ["/p/b.js"]
        assert graph.get_transitive_dependents("/p/b.js") == ["/p/a.js"]
        assert graph.get_node("/p/a.js").blast_radius == pytest.approx(50.0)

    def test_longer_cycle_with_tail(self):
        """Test a cycle reached from an outside importer."""
        graph = build_dependency_graph({
            "/p/a.js": ["./b"],
            "/p/b.js": ["./c"],
            "/p/c.js": ["./a"],
            "/p/entry.js": ["./a"],
        })

        assert graph.get_node("/p/a.js").affected_files == 3
        assert graph.get_node("/p/entry.js").affected_files == 0

    def test_get_all_dependents_excludes_start(self):
        """Test that the start node is never its own dependent."""
        storage = GraphStorage()
        for name in ("a", "b"):
            storage.add_file(name)
        storage.add_import("a", "b")
        storage.add_import("b", "a")

        assert get_all_dependents(storage, "a") == {"b"}

    def test_blast_radius_range(self):
        """Test every blast radius lies in [0, 100)."""
        graph = build_dependency_graph({
            "/p/core.py": [],
            "/p/a.py": [".core"],
            "/p/b.py": [".core", ".a"],
            "/p/c.py": [".b"],
        })

        for node in graph.get_nodes().values():
            assert 0 <= node.blast_radius < 100

        # Every other file depends on core
        assert graph.get_node("/p/core.py").affected_files == 3
        assert graph.get_node("/p/core.py").blast_radius == pytest.approx(75.0)

    def test_no_importers_means_zero(self):
        """Test files nobody imports."""
        graph = build_dependency_graph({"/p/a.py": [], "/p/b.py": []})

        for node in graph.get_nodes().values():
            assert node.affected_files == 0
            assert node.blast_radius == 0

    def test_compute_metrics_empty_raises(self):
        """Test the empty file set precondition."""
        with pytest.raises(InvalidStateError):
            compute_metrics(GraphStorage())


class TestRanking:
    """Tests for get_top_blast_radius."""

    def test_default_limit(self):
        """Test the default limit of five."""
        graph = build_dependency_graph({f"/p/f{i}.py": [] for i in range(8)})
        assert len(graph.get_top_blast_radius()) == 5

    def test_limit_zero(self):
        """Test that limit 0 gives an empty list."""
        assert chain_graph().get_top_blast_radius(0) == []

    def test_limit_larger_than_graph(self):
        """Test that a large limit returns every node in rank order."""
        ranked = chain_graph().get_top_blast_radius(100)
        assert [node.id for node in ranked] == ["/proj/c.ts", "/proj/b.ts", "/proj/a.ts"]

    def test_ties_broken_by_path(self):
        """Test deterministic ordering between equal blast radii."""
        graph = build_dependency_graph({
            "/p/z.py": [],
            "/p/m.py": [],
            "/p/a.py": [],
            "/p/user.py": [".z", ".a"],
        })

        ranked = [node.id for node in graph.get_top_blast_radius(4)]
        assert ranked == ["/p/a.py", "/p/z.py", "/p/m.py", "/p/user.py"]

    def test_negative_limit_rejected(self):
        """Test that a negative limit is an error."""
        with pytest.raises(ValueError):
            chain_graph().get_top_blast_radius(-1)


class TestDependencyGraph:
    """Tests for the read-only graph surface."""

    def test_nodes_view_is_read_only(self):
        """Test that the node mapping cannot be modified."""
        graph = chain_graph()
        with pytest.raises(TypeError):
            graph.get_nodes()["/proj/new.ts"] = None

    def test_edges_view_is_read_only(self):
        """Test that the edge mapping cannot be modified."""
        graph = chain_graph()
        with pytest.raises(TypeError):
            graph.get_edges()["/proj/a.ts"] = frozenset()

    def test_underlying_graph_is_frozen(self):
        """Test that the NetworkX graph is frozen after building."""
        graph = chain_graph()
        assert graph.storage.is_frozen
        with pytest.raises(nx.NetworkXError):
            graph.storage.graph.add_node("/proj/new.ts")

    def test_node_records_are_frozen(self):
        """Test that GraphNode records cannot be mutated."""
        node = chain_graph().get_node("/proj/c.ts")
        with pytest.raises(ValidationError):
            node.blast_radius = 0.0

    def test_direct_neighbours(self):
        """Test get_dependencies and get_dependents."""
        graph = chain_graph()

        assert graph.get_dependencies("/proj/b.ts") == ["/proj/c.ts"]
        assert graph.get_dependents("/proj/b.ts") == ["/proj/a.ts"]
        assert graph.get_dependencies("/proj/unknown.ts") == []
        assert graph.get_dependents("/proj/unknown.ts") == []
        assert graph.get_transitive_dependents("/proj/unknown.ts") == []

    def test_contains_and_len(self):
        """Test container protocol."""
        graph = chain_graph()
        assert len(graph) == 3
        assert "/proj/a.ts" in graph
        assert "/proj/x.ts" not in graph


class TestGraphQueries:
    """Tests for graph query functions."""

    def test_get_top_risks(self):
        """Test serialized top risks."""
        risks = get_top_risks(chain_graph(), 2)

        assert [risk["name"] for risk in risks] == ["c.ts", "b.ts"]
        assert risks[0]["affected_files"] == 2
        assert risks[0]["id"] == "/proj/c.ts"

    def test_get_file_dependencies_and_dependents(self):
        """Test neighbour detail lists."""
        graph = chain_graph()

        deps = get_file_dependencies(graph, "/proj/a.ts")
        assert [d["id"] for d in deps] == ["/proj/b.ts"]

        dependents = get_file_dependents(graph, "/proj/c.ts")
        assert [d["id"] for d in dependents] == ["/proj/b.ts"]

    def test_get_file_impact(self):
        """Test the combined impact view."""
        impact = get_file_impact(chain_graph(), "/proj/c.ts")

        assert impact["imported_by"] == ["/proj/b.ts"]
        assert impact["transitive_dependents"] == ["/proj/a.ts", "/proj/b.ts"]
        assert impact["imports"] == []

    def test_get_file_impact_unknown(self):
        """Test impact of a file outside the graph."""
        impact = get_file_impact(chain_graph(), "/proj/nope.ts")
        assert "error" in impact

    def test_find_import_paths(self):
        """Test finding import chains between files."""
        graph = chain_graph()

        assert find_import_paths(graph, "/proj/a.ts", "/proj/c.ts") == [
            ["/proj/a.ts", "/proj/b.ts", "/proj/c.ts"]
        ]
        assert find_import_paths(graph, "/proj/c.ts", "/proj/a.ts") == []
        assert find_import_paths(graph, "/proj/missing.ts", "/proj/a.ts") == []

    def test_get_connected_components(self):
        """Test grouping files by import connectivity."""
        graph = build_dependency_graph({
            "/p/a.js": ["./b"],
            "/p/b.js": [],
            "/p/c.js": ["./d"],
            "/p/d.js": ["./e"],
            "/p/e.js": [],
            "/p/lonely.js": [],
        })

        components = get_connected_components(graph)
        assert components == [
            ["/p/c.js", "/p/d.js", "/p/e.js"],
            ["/p/a.js", "/p/b.js"],
            ["/p/lonely.js"],
        ]
