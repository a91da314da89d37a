"""Tests for MetaStore and the decoration registry."""

from rich.console import Console

from fluentchain import Chain
from fluentchain.core.keys import MetaKey
from fluentchain.meta import (
    MetaStore,
    decorated_names,
    decoration_records,
    describe_decorations,
    ensure_meta,
    undecorate,
)


class Host:
    pass


class OwnMeta:
    meta = "mine"


def render(table) -> str:
    console = Console(record=True, width=120)
    console.print(table)
    return console.export_text()


class TestMetaStoreCalls:
    """The key / key+prop / key+prop+value call forms."""

    def test_record_and_lookup(self):
        meta = MetaStore()
        assert meta("schema", "a", int) is meta
        assert meta("schema", "a") is int
        assert meta(MetaKey.SCHEMA) == {"a": int}

    def test_lookup_returns_copy(self):
        meta = MetaStore()
        meta("schema", "a", int)
        meta("schema")["b"] = str
        assert meta("schema") == {"a": int}

    def test_set_like_keys_accumulate(self):
        meta = MetaStore()
        meta("decorated", "eh")
        meta(MetaKey.DECORATED, "ah")
        meta("decorated", "eh")
        assert meta("decorated") == ["eh", "ah"]
        assert meta.lookup("decorated", "eh") is True

    def test_empty_lookups(self):
        meta = MetaStore()
        assert meta("decorated") == []
        assert meta("schema") == {}
        assert meta("schema", "nope") is None

    def test_has_and_remove(self):
        meta = MetaStore()
        meta("schema", "a", int)("decorated", "eh")
        assert meta.has("schema", "a")
        assert meta.has("decorated")
        meta.remove("schema", "a").remove("decorated", "eh")
        assert not meta.has("schema", "a")
        assert not meta.has("decorated")

    def test_record_decoration(self):
        meta = MetaStore()
        record = meta.record_decoration("size", "accessor")
        assert record.kind == "accessor"
        assert meta.records == [record]
        assert meta("decorated") == ["size"]


class TestEnsureMeta:
    def test_attaches_hidden_store_once(self):
        host = Host()
        meta = ensure_meta(host)
        assert isinstance(meta, MetaStore)
        assert ensure_meta(host) is meta
        assert host.meta is meta

    def test_existing_chain_meta_is_reused(self):
        chain = Chain()
        assert ensure_meta(chain) is chain.meta

    def test_unrelated_meta_member(self):
        assert ensure_meta(OwnMeta()) is None
        assert decorated_names(OwnMeta()) == []
        assert decoration_records(OwnMeta()) == []


class TestRegistryQueries:
    def test_undecorated_target(self):
        assert decorated_names(Host()) == []
        assert undecorate(Host()) == []

    def test_undecorate_ignores_own_members(self):
        host = Host()
        host.own = lambda: "own"
        Chain(host).method("eh").decorate().build()
        assert undecorate(host, ["own", "eh"]) == ["eh"]
        assert host.own() == "own"

    def test_accessor_decorations_recorded_as_accessors(self):
        host = Host()
        Chain(host).method("size").get_set().decorate().build()
        kinds = {r.name: r.kind for r in decoration_records(host)}
        assert kinds["size"] == "accessor"


class TestDescribeDecorations:
    def test_table_lists_members(self):
        host = Host()
        Chain(host).method(["eh", "ah"]).decorate().build()
        table = describe_decorations(host)
        assert table.row_count == 2
        assert table.title == "Decorations on Host"
        text = render(table)
        assert "eh" in text
        assert "ah" in text

    def test_removed_members_flagged(self):
        host = Host()
        Chain(host).method("eh").decorate().build()
        undecorate(host)
        text = render(describe_decorations(host, title="Host members"))
        assert "removed" in text
        assert "Host members" in text
