"""Unit tests for the staleness marker writer."""

import pytest

from typeprops.marker import marker_line, stamp_file, stamp_text

TIMESTAMP = 1624351200000
MARKER = marker_line(TIMESTAMP)


class TestStampText:
    """Tests for stamp_text."""

    @pytest.mark.unit
    def test_marks_each_helper_call(self):
        """Every helper call line gets a marker above it."""
        text = 'transformTypeToKeys<Type>()\nconsole.log("Hello, world!");\ntransformTypeToPropTypes<Type>()'
        assert stamp_text(text, TIMESTAMP).split("\n") == [
            MARKER,
            "transformTypeToKeys<Type>()",
            'console.log("Hello, world!");',
            MARKER,
            "transformTypeToPropTypes<Type>()",
        ]

    @pytest.mark.unit
    def test_imports_not_marked(self):
        """Import lines naming a helper are not calls."""
        text = (
            "import { transformTypeToKeys } from 'typescript-type-transformer';\n"
            "transformTypeToPropTypes<Type>()"
        )
        assert stamp_text(text, TIMESTAMP).split("\n") == [
            "import { transformTypeToKeys } from 'typescript-type-transformer';",
            MARKER,
            "transformTypeToPropTypes<Type>()",
        ]

    @pytest.mark.unit
    def test_old_timestamp_replaced(self):
        """An existing marker is replaced, not duplicated."""
        text = "// typescript-type-transformer:update=123456\ntransformTypeToKeys<Type>()"
        assert stamp_text(text, TIMESTAMP).split("\n") == [
            MARKER,
            "transformTypeToKeys<Type>()",
        ]

    @pytest.mark.unit
    def test_stray_marker_removed(self):
        """Markers no longer above a call are dropped."""
        text = (
            "transformTypeToKeys<Type>()\n"
            "// typescript-type-transformer:update=123456\n"
            'console.log("Hello, world!");\n'
            "transformTypeToPropTypes<Type>()"
        )
        assert stamp_text(text, TIMESTAMP).split("\n") == [
            MARKER,
            "transformTypeToKeys<Type>()",
            'console.log("Hello, world!");',
            MARKER,
            "transformTypeToPropTypes<Type>()",
        ]

    @pytest.mark.unit
    def test_marker_follows_indentation(self):
        """Markers are indented like the call they annotate."""
        text = "  const keys = transformTypeToKeys(opts);"
        assert stamp_text(text, TIMESTAMP).split("\n")[0] == marker_line(TIMESTAMP, "  ")

    @pytest.mark.unit
    def test_schema_calls_marked(self):
        """Schema helper calls are marked; their imports are not."""
        text = (
            "import { transformTypeToSchema } from 'typescript-type-transformer';\n"
            "const schema = transformTypeToSchema<Type>({ maxDepth: 2 });"
        )
        assert stamp_text(text, TIMESTAMP).split("\n") == [
            "import { transformTypeToSchema } from 'typescript-type-transformer';",
            MARKER,
            "const schema = transformTypeToSchema<Type>({ maxDepth: 2 });",
        ]

    @pytest.mark.unit
    def test_mentions_without_call_ignored(self):
        """A helper name not followed by a call is not marked."""
        text = "const fn = transformTypeToKeys;"
        assert stamp_text(text, TIMESTAMP) == text


class TestStampFile:
    """Tests for stamp_file."""

    @pytest.mark.unit
    def test_rewrites_file(self, tmp_path):
        """Files with helper calls are rewritten."""
        source = tmp_path / "widget.ts"
        source.write_text("transformTypeToKeys<Type>()\n", encoding="utf-8")
        assert stamp_file(source, TIMESTAMP) is True
        assert source.read_text(encoding="utf-8") == f"{MARKER}\ntransformTypeToKeys<Type>()\n"

    @pytest.mark.unit
    def test_unchanged_file_not_written(self, tmp_path):
        """Files without helper calls are left alone."""
        source = tmp_path / "plain.ts"
        source.write_text("export const x = 1;\n", encoding="utf-8")
        assert stamp_file(source, TIMESTAMP) is False

    @pytest.mark.unit
    def test_default_timestamp_is_milliseconds(self, tmp_path):
        """The default marker value is the current epoch time in ms."""
        source = tmp_path / "widget.ts"
        source.write_text("transformTypeToKeys<Type>()", encoding="utf-8")
        stamp_file(source)
        value = int(source.read_text(encoding="utf-8").split("\n")[0].rsplit("=", 1)[1])
        assert value > TIMESTAMP

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            stamp_file(tmp_path / "missing.ts", TIMESTAMP)
