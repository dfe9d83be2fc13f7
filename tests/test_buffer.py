"""Line buffer ingestion and accessor tests.

Covers terminator handling, strict UTF-8 decoding and out-of-range access.
"""

from __future__ import annotations

import io
import unittest

from lazypager.buffer import LineBuffer, ingest, split_lines
from lazypager.errors import EncodingError, IndexOutOfRange, PagerError


class SplitLinesTests(unittest.TestCase):
    def test_single_trailing_terminator_adds_no_phantom_line(self) -> None:
        self.assertEqual(split_lines("a\nb\n"), ["a", "b"])
        self.assertEqual(split_lines("a\nb"), ["a", "b"])

    def test_extra_trailing_empty_lines_are_preserved(self) -> None:
        self.assertEqual(split_lines("a\n\n"), ["a", ""])
        self.assertEqual(split_lines("a\n\n\n"), ["a", "", ""])

    def test_empty_and_newline_only_input(self) -> None:
        self.assertEqual(split_lines(""), [])
        self.assertEqual(split_lines("\n"), [""])

    def test_crlf_counts_as_one_terminator(self) -> None:
        self.assertEqual(split_lines("a\r\nb\r\n"), ["a", "b"])
        self.assertEqual(split_lines("a\r\n\r\n"), ["a", ""])


class IngestTests(unittest.TestCase):
    def test_ingest_reads_whole_stream(self) -> None:
        buffer = ingest(io.BytesIO("héllo\nwörld\n".encode("utf-8")))

        self.assertEqual(buffer.line_count(), 2)
        self.assertEqual(buffer.line_at(0), "héllo")
        self.assertEqual(buffer.line_at(1), "wörld")

    def test_empty_stream_is_legal(self) -> None:
        buffer = ingest(io.BytesIO(b""))

        self.assertEqual(buffer.line_count(), 0)
        self.assertEqual(list(buffer), [])

    def test_invalid_utf8_raises_encoding_error_with_offset(self) -> None:
        with self.assertRaises(EncodingError) as ctx:
            ingest(io.BytesIO(b"ok\n\xff\n"))

        self.assertEqual(ctx.exception.offset, 3)
        self.assertIsInstance(ctx.exception, PagerError)
        self.assertIsInstance(ctx.exception, ValueError)


class LineBufferAccessTests(unittest.TestCase):
    def test_line_at_rejects_out_of_range_indices(self) -> None:
        buffer = LineBuffer(["only"])

        with self.assertRaises(IndexOutOfRange):
            buffer.line_at(1)
        with self.assertRaises(IndexOutOfRange):
            buffer.line_at(-1)
        with self.assertRaises(IndexError):
            LineBuffer().line_at(0)

    def test_lines_between_clips_to_bounds(self) -> None:
        buffer = LineBuffer.from_text("a\nb\nc\n")

        self.assertEqual(buffer.lines_between(1, 10), ("b", "c"))
        self.assertEqual(buffer.lines_between(-5, 1), ("a",))
        self.assertEqual(buffer.lines_between(3, 2), ())

    def test_buffer_is_detached_from_source_list(self) -> None:
        source = ["a", "b"]
        buffer = LineBuffer(source)
        source.append("c")

        self.assertEqual(buffer.line_count(), 2)

    def test_text_keeps_original_terminators(self) -> None:
        buffer = LineBuffer.from_text("a\r\nb")

        self.assertEqual(list(buffer), ["a", "b"])
        self.assertEqual(buffer.text, "a\r\nb")
        self.assertEqual(LineBuffer(["x", ""]).text, "x\n\n")


if __name__ == "__main__":
    unittest.main()
