# test_history.py
import os
import sys
import unittest

import numpy as np
import polars as pl

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dwgraph.core._History import GraphDiff
from dwgraph.core._helpers import PreconditionError
from dwgraph.core.graph import Graph


class TestHistory(unittest.TestCase):
    def setUp(self):
        self.g = Graph([1, 2, 3])

    def test_constructor_nodes_not_logged(self):
        self.assertEqual(self.g.history(), [])

    def test_mutations_are_recorded(self):
        self.g.insert_node(4)
        self.g.insert_edge(1, 2, 5)
        self.g.erase_edge(1, 2, 5)
        ops = [evt["op"] for evt in self.g.history()]
        self.assertEqual(ops, ["insert_node", "insert_edge", "erase_edge"])
        insert = self.g.history()[1]
        self.assertEqual(insert["src"], 1)
        self.assertEqual(insert["dst"], 2)
        self.assertEqual(insert["weight"], 5)
        self.assertTrue(insert["result"])
        self.assertEqual(self.g.history()[2]["args"], [1, 2, 5])
        versions = [evt["version"] for evt in self.g.history()]
        self.assertEqual(versions, [1, 2, 3])

    def test_cursor_args_are_tagged(self):
        self.g.insert_edge(1, 2, 5)
        self.g.erase_edge(self.g.begin())
        evt = self.g.history()[-1]
        self.assertEqual(evt["args"], ["<<Cursor>>"])
        self.assertEqual(evt["result"], "<<Cursor>>")

    def test_numpy_scalars_are_unwrapped(self):
        self.g.insert_node(np.int64(9))
        evt = self.g.history()[-1]
        self.assertEqual(evt["value"], 9)
        self.assertIsInstance(evt["value"], int)

    def test_failed_calls_not_recorded(self):
        with self.assertRaises(PreconditionError):
            self.g.insert_edge(1, 42, 0)
        self.assertEqual(self.g.history(), [])

    def test_internal_calls_not_recorded(self):
        self.g.insert_edge(1, 2, 1)
        self.g.insert_edge(3, 1, 1)
        self.g.clear_history()
        self.g.merge_replace_node(1, 2)
        self.assertEqual([evt["op"] for evt in self.g.history()], ["merge_replace_node"])

    def test_enable_and_mark(self):
        self.g.enable_history(False)
        self.g.insert_node(10)
        self.g.mark("paused")
        self.assertEqual(self.g.history(), [])
        self.g.enable_history(True)
        self.g.mark("resumed")
        self.assertEqual(self.g.history()[-1]["op"], "mark")
        self.assertEqual(self.g.history()[-1]["label"], "resumed")

    def test_disabled_from_constructor(self):
        g = Graph([1], history=False)
        g.insert_node(2)
        self.assertEqual(g.history(), [])

    def test_history_as_dataframe(self):
        self.g.insert_node(7)
        self.g.insert_node(8)
        df = self.g.history(as_df=True)
        self.assertIsInstance(df, pl.DataFrame)
        self.assertEqual(df.height, 2)
        self.assertEqual(df["op"].to_list(), ["insert_node", "insert_node"])

    def test_copy_with_history(self):
        self.g.insert_node(4)
        plain = self.g.copy()
        audited = self.g.copy(history=True)
        self.assertEqual(plain.history(), [])
        self.assertEqual(len(audited.history()), 1)


class TestSnapshots(unittest.TestCase):
    def setUp(self):
        self.g = Graph(["a", "b", "c"])
        self.g.insert_edge("a", "b", 1)

    def test_diff_against_current(self):
        self.g.snapshot("before")
        self.g.insert_edge("b", "c", 2)
        self.g.erase_node("a")
        d = self.g.diff("before")
        self.assertIsInstance(d, GraphDiff)
        self.assertEqual(d.nodes_removed, {"a"})
        self.assertEqual(d.nodes_added, set())
        self.assertEqual(d.edges_added, {("b", "c", 2)})
        self.assertEqual(d.edges_removed, {("a", "b", 1)})
        self.assertFalse(d.is_empty())
        self.assertIn("nodes +0/-1", d.summary())
        self.assertIn("edges +1/-1", d.summary())

    def test_diff_between_labels(self):
        self.g.snapshot("s0")
        self.g.snapshot("s1")
        self.assertTrue(self.g.diff("s0", "s1").is_empty())

    def test_diff_against_other_graph(self):
        other = self.g.copy()
        other.insert_node("d")
        d = self.g.diff(other, None)
        self.assertEqual(d.nodes_removed, {"d"})
        self.assertEqual(d.label_a, "external")

    def test_unknown_snapshot(self):
        with self.assertRaises(ValueError):
            self.g.diff("missing")
        with self.assertRaises(TypeError):
            self.g.diff(42)

    def test_list_snapshots(self):
        self.g.snapshot()
        listed = self.g.list_snapshots()
        self.assertEqual(len(listed), 1)
        self.assertEqual(listed[0]["counts"], {"nodes": 3, "edges": 1})
        self.assertNotIn("nodes", listed[0])

    def test_to_dict(self):
        self.g.snapshot("s")
        self.g.insert_node("z")
        d = self.g.diff("s").to_dict()
        self.assertEqual(d["nodes_added"], ["z"])
        self.assertEqual(d["label_b"], "current")


if __name__ == "__main__":
    unittest.main()
