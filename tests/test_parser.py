"""
Trace 解析器单元测试
"""

import gzip
import json
import os
import tempfile
import unittest

from flame_timeline_tool.models import TraceEvent
from flame_timeline_tool.converter import convert_events
from flame_timeline_tool.parser import parse_trace_data, parse_trace_file


class TestTraceEvent(unittest.TestCase):
    """测试 TraceEvent 类"""

    def test_phase_properties(self):
        begin = TraceEvent(name="f", ph="B", ts=0.0, pid=1)
        end = TraceEvent(name="f", ph="E", ts=1.0, pid=1)
        other = TraceEvent(name="f", ph="X", ts=1.0, pid=1)
        self.assertTrue(begin.is_begin and begin.is_stack_event)
        self.assertTrue(end.is_end and end.is_stack_event)
        self.assertFalse(other.is_stack_event)


class TestParseTraceData(unittest.TestCase):
    """测试内存数据解析"""

    def test_array_format(self):
        events = parse_trace_data(json.dumps([
            {"name": "f", "ph": "B", "ts": 1.5, "pid": 2, "tid": 3, "args": {"k": "v"}},
        ]))
        self.assertEqual(events, [
            TraceEvent(name="f", ph="B", ts=1.5, pid=2, tid=3, args={"k": "v"}),
        ])

    def test_trace_events_object_format(self):
        data = json.dumps({"traceEvents": [{"name": "f", "ph": "B", "ts": 0, "pid": 1}]}).encode('utf-8')
        events = parse_trace_data(data)
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].name, "f")

    def test_missing_fields_use_defaults(self):
        events = parse_trace_data('[{"ph": "E"}]')
        self.assertEqual(events[0], TraceEvent(name="", ph="E", ts=0.0, pid=0, tid=0, args={}))

    def test_bad_records_skipped(self):
        with self.assertLogs('flame_timeline_tool.parser', level='WARNING'):
            events = parse_trace_data(json.dumps([
                "not an event",
                {"name": "f", "ph": "B", "ts": "abc", "pid": 1},
                {"name": "g", "ph": "B", "ts": 1, "pid": 1},
            ]))
        self.assertEqual([e.name for e in events], ["g"])

    def test_non_finite_timestamps_skipped(self):
        data = ('[{"name": "f", "ph": "B", "ts": NaN, "pid": 1},'
                ' {"name": "g", "ph": "B", "ts": Infinity, "pid": 1},'
                ' {"name": "h", "ph": "B", "ts": 2, "pid": Infinity},'
                ' {"name": "k", "ph": "B", "ts": 3, "pid": 1}]')
        with self.assertLogs('flame_timeline_tool.parser', level='WARNING'):
            events = parse_trace_data(data)
        self.assertEqual([e.name for e in events], ["k"])

        document = convert_events(events)
        self.assertEqual(document.threads["G1"][0].start_ns, 3000)

    def test_invalid_json(self):
        with self.assertRaises(ValueError):
            parse_trace_data("{not json")

    def test_unsupported_shape(self):
        with self.assertRaises(ValueError):
            parse_trace_data('{"events": []}')


class TestParseTraceFile(unittest.TestCase):
    """测试文件解析"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.events = [{"name": "f", "ph": "B", "ts": 0, "pid": 1}, {"name": "f", "ph": "E", "ts": 2, "pid": 1}]

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_plain_file(self):
        path = os.path.join(self.temp_dir.name, "trace.json")
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.events, f)
        self.assertEqual(len(parse_trace_file(path)), 2)

    def test_gzip_file(self):
        path = os.path.join(self.temp_dir.name, "trace.json.gz")
        with gzip.open(path, 'wt', encoding='utf-8') as f:
            json.dump({"traceEvents": self.events}, f)
        events = parse_trace_file(path)
        self.assertEqual([e.ph for e in events], ["B", "E"])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            parse_trace_file(os.path.join(self.temp_dir.name, "missing.json"))


if __name__ == '__main__':
    unittest.main()
