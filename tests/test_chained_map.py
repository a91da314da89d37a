"""Tests for the ChainedMap store."""

from fluentchain.chain import Chainable, ChainedMap


class TestReadWrite:
    """get / set / has / delete."""

    def test_set_then_get(self):
        chain = ChainedMap()
        assert chain.set("eh", True).get("eh") is True

    def test_later_write_overwrites(self):
        chain = ChainedMap().set("eh", 1).set("eh", 2)
        assert chain.get("eh") == 2
        assert chain.entries() == {"eh": 2}

    def test_missing_key_returns_default(self):
        chain = ChainedMap()
        assert chain.get("nope") is None
        assert chain.get("nope", 3) == 3
        assert not chain.has("nope")

    def test_delete(self):
        chain = ChainedMap().set("eh", 1).delete("eh")
        assert not chain.has("eh")

    def test_values(self):
        chain = ChainedMap().set("a", 1).set("b", 2)
        assert sorted(chain.values()) == [1, 2]


class TestTap:
    def test_tap_replaces_with_result(self):
        chain = ChainedMap().set("moose", {"eh": True})
        chain.tap("moose", lambda moose, merge: {**moose, "eh": False})
        assert chain.get("moose") == {"eh": False}

    def test_tap_passes_merge_helper(self):
        chain = ChainedMap().set("list", [1])
        chain.tap("list", lambda old, merge: merge(old, [2]))
        assert chain.get("list") == [1, 2]

    def test_tap_on_missing_key_sees_none(self):
        chain = ChainedMap()
        chain.tap("count", lambda old, merge: (old or 0) + 1)
        assert chain.get("count") == 1


class TestExtend:
    def test_extend_adds_shorthand_setters(self):
        chain = ChainedMap().extend(["eh", "moose"])
        assert chain.eh(1) is chain
        chain.moose("big")
        assert chain.entries() == {"eh": 1, "moose": "big"}
        assert chain.shorthands == ["eh", "moose"]


class TestClear:
    def test_clear_empties_store(self):
        chain = ChainedMap().set("a", 1)
        chain.clear()
        assert chain.entries() == {}

    def test_clear_recurses_into_children(self):
        root = ChainedMap()
        root.child = ChainedMap(root)
        root.child.set("x", 1)
        root.lookup = {"k": "v"}
        root.clear()
        assert root.child.entries() == {}
        assert root.lookup == {}

    def test_clear_leaves_parent_alone(self):
        parent = ChainedMap().set("keep", True)
        child = ChainedMap(parent)
        child.clear()
        assert parent.get("keep") is True


class TestEntries:
    def test_entries_is_a_snapshot(self):
        chain = ChainedMap().set("a", 1)
        snapshot = chain.entries()
        chain.set("b", 2)
        assert snapshot == {"a": 1}

    def test_include_chains_inlines_children(self):
        root = ChainedMap().set("y", 2)
        root.child = ChainedMap(root).set("x", 1)
        assert root.entries() == {"y": 2}
        assert root.entries(True) == {"y": 2, "child": {"x": 1}}

    def test_include_chains_skips_parent(self):
        parent = ChainedMap().set("p", 1)
        child = ChainedMap(parent).set("c", 1)
        assert child.entries(True) == {"c": 1}


class TestMerge:
    def test_merge_concatenates_lists(self):
        chain = ChainedMap().set("eh", [1]).merge({"eh": [2]})
        assert chain.get("eh") == [1, 2]

    def test_merge_recurses_into_mappings(self):
        chain = ChainedMap().set("opts", {"a": 1, "nested": {"b": 2}})
        chain.merge({"opts": {"nested": {"c": 3}}})
        assert chain.get("opts") == {"a": 1, "nested": {"b": 2, "c": 3}}

    def test_merge_sets_new_keys(self):
        chain = ChainedMap().merge({"fresh": "value"})
        assert chain.get("fresh") == "value"

    def test_merge_with_callback_leaves_store_untouched(self):
        seen = []
        chain = ChainedMap().set("eh", [1])
        chain.merge({"eh": [2]}, seen.append)
        assert seen == [{"eh": [1, 2]}]
        assert chain.get("eh") == [1]

    def test_merge_delegates_to_child_chain(self):
        root = ChainedMap()
        root.child = ChainedMap(root).set("x", [1])
        root.merge({"child": {"x": [2]}})
        assert root.child.get("x") == [1, 2]
        assert not root.has("child")


class TestFrom:
    def test_from_sets_plain_keys(self):
        chain = ChainedMap().from_({"eh": True})
        assert chain.get("eh") is True

    def test_from_calls_same_named_methods(self):
        chain = ChainedMap().extend(["eh"])
        calls = []
        chain.eh = lambda value: calls.append(value)
        chain.from_({"eh": 1})
        assert calls == [1]

    def test_from_merges_into_child_chain(self):
        root = ChainedMap()
        root.child = ChainedMap(root)
        root.from_({"child": {"x": 1}})
        assert root.child.get("x") == 1


class TestClean:
    def test_clean_drops_empty_values(self):
        chain = ChainedMap()
        cleaned = chain.clean(
            {"none": None, "list": [], "dict": {}, "zero": 0, "text": "", "ok": [1]}
        )
        assert cleaned == {"zero": 0, "text": "", "ok": [1]}


class TestChainable:
    def test_end_returns_parent(self):
        parent = ChainedMap()
        assert ChainedMap(parent).end() is parent

    def test_when_runs_matching_branch(self):
        chain = ChainedMap()
        chain.when(True, lambda c: c.set("yes", 1), lambda c: c.set("no", 1))
        chain.when(False, lambda c: c.set("a", 1), lambda c: c.set("b", 1))
        assert chain.entries() == {"yes": 1, "b": 1}

    def test_empty_chain_is_truthy(self):
        assert Chainable()
        assert ChainedMap()
