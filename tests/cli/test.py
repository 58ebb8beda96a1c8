"""Tests for the command line interface."""

import json

import pytest

from typeprops.__main__ import main


@pytest.fixture
def widget_file(tmp_path, widget_json):
    path = tmp_path / "widget.json"
    path.write_text(json.dumps(widget_json), encoding="utf-8")
    return path


class TestTransformCommand:
    """Tests for ``transform``."""

    @pytest.mark.integration
    def test_writes_output_file(self, widget_file, tmp_path):
        """The patched AST is written as JSON."""
        output = tmp_path / "out.json"
        assert main(["transform", str(widget_file), "-o", str(output)]) == 0
        dumped = json.loads(output.read_text(encoding="utf-8"))
        widget = dumped["program"]["body"][5]["declaration"]
        assert widget["body"]["body"][0]["key"]["name"] == "propTypes"

    @pytest.mark.integration
    def test_keys_flag(self, widget_file, capsys):
        """--keys also rewrites keys helper calls."""
        assert main(["transform", str(widget_file), "--keys"]) == 0
        dumped = json.loads(capsys.readouterr().out)
        init = dumped["program"]["body"][7]["declaration"]["declarations"][0]["init"]
        assert init["type"] == "ArrayExpression"
        assert init["elements"][0]["value"] == "id"

    @pytest.mark.integration
    def test_production_flag(self, widget_file, capsys):
        """--production nulls keys calls that do not opt in."""
        assert main(["transform", str(widget_file), "--keys", "--production"]) == 0
        dumped = json.loads(capsys.readouterr().out)
        init = dumped["program"]["body"][7]["declaration"]["declarations"][0]["init"]
        assert init["type"] == "NullLiteral"

    @pytest.mark.integration
    def test_component_and_schema_flags(self, widget_file, capsys):
        """--components and --schema rewrite their helper calls."""
        assert main(["transform", str(widget_file), "--components", "--schema"]) == 0
        body = json.loads(capsys.readouterr().out)["program"]["body"]
        assignment = body[9]["expression"]
        assert assignment["type"] == "AssignmentExpression"
        assert assignment["left"]["property"]["name"] == "propTypes"
        schema = body[10]["declarations"][0]["init"]
        assert schema["type"] == "ObjectExpression"
        assert schema["properties"][0]["key"]["name"] == "id"

    @pytest.mark.integration
    def test_helper_calls_kept_without_flags(self, widget_file, capsys):
        """Helper calls are only rewritten when asked for."""
        assert main(["transform", str(widget_file)]) == 0
        body = json.loads(capsys.readouterr().out)["program"]["body"]
        assert body[9]["expression"]["type"] == "CallExpression"
        assert body[10]["declarations"][0]["init"]["type"] == "CallExpression"

    @pytest.mark.integration
    def test_invalid_ast(self, tmp_path):
        """Malformed AST JSON exits with status 1."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"type": "Identifier"}), encoding="utf-8")
        assert main(["transform", str(path)]) == 1

    @pytest.mark.integration
    def test_missing_file(self, tmp_path):
        """Unreadable input exits with status 1."""
        assert main(["transform", str(tmp_path / "missing.json")]) == 1


class TestPreviewCommand:
    """Tests for ``preview``."""

    @pytest.mark.integration
    def test_prints_validators(self, widget_file, capsys):
        """Each class is listed with its validators or status."""
        assert main(["preview", str(widget_file)]) == 0
        out = capsys.readouterr().out
        assert "Widget.propTypes = {" in out
        assert "label: PropTypes.string.isRequired" in out
        assert "// Untyped: not_applicable" in out


class TestStampCommand:
    """Tests for ``stamp``."""

    @pytest.mark.integration
    def test_stamps_file(self, tmp_path):
        """Markers are written with the given timestamp."""
        source = tmp_path / "widget.ts"
        source.write_text("transformTypeToKeys<Props>()", encoding="utf-8")
        assert main(["stamp", str(source), "-t", "42"]) == 0
        assert source.read_text(encoding="utf-8").startswith(
            "// typescript-type-transformer:update=42\n"
        )

    @pytest.mark.integration
    def test_missing_file(self, tmp_path):
        """Missing files give a non-zero exit code."""
        assert main(["stamp", str(tmp_path / "missing.ts")]) == 1


class TestMain:
    """Tests for command dispatch."""

    @pytest.mark.unit
    def test_env_lists_variables(self, capsys):
        """env prints every variable with its value."""
        assert main(["env"]) == 0
        out = capsys.readouterr().out
        assert "TYPEPROPS_MAX_DEPTH=10" in out
        assert "TYPEPROPS_VALIDATOR_PROPERTY='propTypes'" in out

    @pytest.mark.unit
    def test_unknown_command(self):
        """Unknown commands exit with status 1."""
        assert main(["frobnicate"]) == 1

    @pytest.mark.unit
    def test_no_command(self):
        """No arguments shows help and exits with status 1."""
        assert main([]) == 1
