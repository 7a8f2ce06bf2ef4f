import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

import pandas as pd

from flame_timeline_tool.converter import convert_events
from flame_timeline_tool.models import TraceEvent
from flame_timeline_tool.presenter import (
    document_to_json, write_json, intervals_to_dataframe, write_tables, plot_timeline, INTERVAL_COLUMNS
)


class TestPresenter(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.document = convert_events([
            TraceEvent(name="f", ph="B", ts=0, pid=1),
            TraceEvent(name="g", ph="B", ts=5, pid=1),
            TraceEvent(name="h", ph="B", ts=6, pid=1),
            TraceEvent(name="h", ph="E", ts=8, pid=1),
            TraceEvent(name="g", ph="E", ts=10, pid=1),
            TraceEvent(name="x", ph="B", ts=1, pid=2),
        ])

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_document_to_json(self):
        data = json.loads(document_to_json(self.document))
        self.assertEqual(set(data), {"threads", "timeRange", "frames", "strings", "version"})
        self.assertEqual(data["timeRange"]["endNs"], 10000)

    def test_write_json_stdout(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            result = write_json(self.document, '-')
        self.assertIsNone(result)
        self.assertEqual(json.loads(buffer.getvalue()), self.document.to_dict())

    def test_write_json_file(self):
        path = os.path.join(self.temp_dir.name, "sub", "out.json")
        write_json(self.document, path)
        with open(path, encoding='utf-8') as f:
            self.assertEqual(json.load(f), self.document.to_dict())

    def test_intervals_to_dataframe(self):
        df = intervals_to_dataframe(self.document)
        self.assertEqual(list(df.columns), INTERVAL_COLUMNS)
        self.assertEqual(len(df), self.document.total_intervals)

        deepest = df[df['depth'] == 3].iloc[0]
        self.assertEqual(deepest['thread'], "G1")
        self.assertEqual(deepest['stack'], "g;h")
        self.assertEqual(deepest['duration_ns'], 2000)

        open_ended = df[df['thread'] == "G2"].iloc[0]
        self.assertTrue(pd.isna(open_ended['duration_ns']))

    def test_write_tables(self):
        files = write_tables(self.document, self.temp_dir.name, "trace", ["csv", "xlsx"])
        self.assertEqual([f.name for f in files], ["trace_intervals.csv", "trace_intervals.xlsx"])
        for file_path in files:
            self.assertTrue(file_path.exists())

        df = pd.read_csv(files[0])
        self.assertEqual(len(df), self.document.total_intervals)

    def test_plot_timeline(self):
        path = plot_timeline(self.document, os.path.join(self.temp_dir.name, "timeline.png"))
        self.assertTrue(path.exists())
        self.assertGreater(path.stat().st_size, 0)

    def test_interval_ending_at_zero_is_bounded(self):
        document = convert_events([
            TraceEvent(name="f", ph="B", ts=-5, pid=1),
            TraceEvent(name="f", ph="E", ts=0, pid=1),
        ])
        df = intervals_to_dataframe(document)
        self.assertEqual(len(df), 1)
        self.assertEqual(df.iloc[0]['end_ns'], 0)
        self.assertEqual(df.iloc[0]['duration_ns'], 5000)

    def test_plot_empty_document(self):
        path = plot_timeline(convert_events([]), os.path.join(self.temp_dir.name, "empty.png"))
        self.assertTrue(path.exists())


if __name__ == '__main__':
    unittest.main()
