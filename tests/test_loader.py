"""
Loader Tests
Tests reading graph descriptions and resolving edge targets.
"""
from graphdesc import Graph, Relation, SchemaError, load_graph, parse_graph
from test_framework import (
    GraphWorkspace,
    SuiteRunner,
    blog_document,
)


def expect_schema_error(func, *args, contains: str = "") -> SchemaError:
    try:
        func(*args)
    except SchemaError as e:
        if contains and contains not in str(e):
            raise AssertionError(f"SchemaError {e!r} does not mention {contains!r}")
        return e
    raise AssertionError("SchemaError not raised")


def test_parse_blog_graph():
    """Types keep their order; fields and flags are read"""
    graph = parse_graph(blog_document())

    assert isinstance(graph, Graph)
    assert [t.name for t in graph] == ["User", "Post", "Tag"]
    assert len(graph) == 3

    user = graph["User"]
    assert user.id is not None and user.id.name == "id"
    assert [f.name for f in user.fields] == ["email", "nickname"]
    assert user["email"].unique
    assert user["email"].validators == ["NotEmpty"]
    assert user["email"].struct_tag == 'json:"email,omitempty"'
    assert user["nickname"].optional and user["nickname"].nillable
    assert user["nickname"].comment == "display name"

    post = graph["Post"]
    assert post["updated_at"].update_default
    assert post["created_at"].immutable and post["created_at"].default


def test_edges_resolved():
    """Edges point at Type objects, including forward and self references"""
    graph = parse_graph(blog_document())
    user, post = graph["User"], graph["Post"]

    posts, friends = user.edges
    assert posts.type is post
    assert posts.rel is Relation.O2M
    assert not posts.is_inverse
    assert friends.type is user

    author = post.edges[0]
    assert author.type is user
    assert author.is_inverse
    assert author.inverse == "posts"
    assert author.rel is Relation.M2O


def test_defaults_for_omitted_keys():
    graph = parse_graph({"types": [{"name": "Tag", "fields": [{"name": "label", "type": "string"}]}]})
    tag = graph["Tag"]

    assert tag.id is None
    assert tag.edges == []
    label = tag["label"]
    assert not (label.unique or label.optional or label.nillable or label.immutable)
    assert label.validators == [] and label.comment == ""


def test_unknown_edge_target():
    doc = {"types": [{"name": "User", "edges": [{"name": "pets", "type": "Pet", "rel": "O2M"}]}]}
    expect_schema_error(parse_graph, doc, contains="User.pets")


def test_duplicate_type():
    doc = {"types": [{"name": "User"}, {"name": "User"}]}
    expect_schema_error(parse_graph, doc, contains="duplicate type 'User'")


def test_invalid_documents():
    """Missing names, unknown keys and bad relations are rejected"""
    expect_schema_error(parse_graph, {"types": [{"fields": []}]})
    expect_schema_error(parse_graph, {"types": [{"name": "User", "colour": "red"}]})
    expect_schema_error(parse_graph, {"types": [{"name": "A", "edges": [{"name": "b", "type": "A", "rel": "X2Y"}]}]})
    expect_schema_error(parse_graph, [1, 2, 3])


def test_load_graph_from_file():
    with GraphWorkspace("load") as ws:
        path = ws.write_graph("graph.json", blog_document())
        graph = load_graph(path)
        assert [t.name for t in graph] == ["User", "Post", "Tag"]

        graph = load_graph(str(path))
        assert graph.by_name("Post") is not None
        assert graph.by_name("Comment") is None


def test_load_graph_errors_name_the_file():
    with GraphWorkspace("load_errors") as ws:
        broken = ws.write_text("broken.json", "{not json")
        expect_schema_error(load_graph, broken, contains="broken.json")

        missing = ws.tmpdir / "missing.json"
        expect_schema_error(load_graph, missing, contains="missing.json")

        bad = ws.write_graph("bad.json", {"types": [{"name": "A"}, {"name": "A"}]})
        expect_schema_error(load_graph, bad, contains="bad.json")


def test_relation_string_form():
    assert str(Relation.O2O) == "O2O"
    assert str(Relation.M2M) == "M2M"
    assert str(Relation.UNK) == "Unk"
    assert Relation("O2M") is Relation.O2M


def run_tests():
    """Run all loader tests"""
    runner = SuiteRunner()

    runner.run_test(test_parse_blog_graph, "Parse blog graph")
    runner.run_test(test_edges_resolved, "Edges resolved")
    runner.run_test(test_defaults_for_omitted_keys, "Defaults for omitted keys")
    runner.run_test(test_unknown_edge_target, "Unknown edge target")
    runner.run_test(test_duplicate_type, "Duplicate type")
    runner.run_test(test_invalid_documents, "Invalid documents")
    runner.run_test(test_load_graph_from_file, "Load from file")
    runner.run_test(test_load_graph_errors_name_the_file, "Load errors name the file")
    runner.run_test(test_relation_string_form, "Relation string form")

    return runner.print_summary()


if __name__ == "__main__":
    import sys
    success = run_tests()
    sys.exit(0 if success else 1)
