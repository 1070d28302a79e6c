"""
CLI pipeline tests

Runs the pipeline stages behind the docmacro command on a YAML document
with a registry imported from a module path.
"""

import textwrap
from argparse import Namespace

import pytest

from docmacro.__main__ import (
    document_read,
    document_transform,
    document_write,
    env_check,
    macros_load,
    registry_import,
    results_report,
)
from docmacro.lib.document import document_load
from docmacro.lib.registry import MacroRegistry
from docmacro.models import ProgramState, pipeline
from docmacro.models.nodes import ContentLeaf, NodeKind


MACROS_MODULE = textwrap.dedent('''
    from docmacro.lib.registry import MacroRegistry
    from docmacro.models.nodes import ContentLeaf

    registry = MacroRegistry()

    @registry.macro("greet", supports_inline=True)
    def greet(parameters, content, context):
        return [ContentLeaf("Hello " + parameters.get("who", "world"))]

    def registry_build():
        return registry

    not_a_registry = 42
''')

DOCUMENT = textwrap.dedent('''
    - type: placeholder
      name: greet
      parameters: {who: reader}
      inline: true
    - type: placeholder
      name: missing
''')


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Input dir with a document and an importable macros module"""
    (tmp_path / "sitemacros_cli.py").write_text(MACROS_MODULE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))

    inputdir = tmp_path / "in"
    inputdir.mkdir()
    (inputdir / "page.yaml").write_text(DOCUMENT, encoding="utf-8")
    return tmp_path


def state_make(workspace, **overrides) -> ProgramState:
    options = {
        "inputFile": "page.yaml",
        "outputFile": None,
        "macros": "sitemacros_cli:registry",
        "syntax": "markdown",
        "maxMacroExecutions": None,
        "inlinePolicy": None,
        "verbosity": 0,
    }
    options.update(overrides)
    return ProgramState.state_createFromNamespace(
        Namespace(**options), inputdir=workspace / "in", outputdir=workspace / "out"
    )


class TestRegistryImport:
    """--macros module:attribute resolution"""

    def test_registry_object(self, workspace):
        """Attribute holding a registry"""
        assert isinstance(registry_import("sitemacros_cli:registry"), MacroRegistry)

    def test_registry_factory(self, workspace):
        """Attribute returning a registry"""
        assert registry_import("sitemacros_cli:registry_build").has("greet", None)

    def test_malformed_path(self):
        """Missing attribute part"""
        with pytest.raises(ValueError):
            registry_import("sitemacros_cli")

    def test_not_a_registry(self, workspace):
        """Attributes that are not registries are rejected"""
        with pytest.raises(TypeError):
            registry_import("sitemacros_cli:not_a_registry")


class TestStages:
    """Individual pipeline stages"""

    def test_env_check(self, workspace):
        """Paths resolved and output directory created"""
        state = env_check(state_make(workspace))

        assert state.envOK is True
        assert state.inputDocumentFile == workspace / "in" / "page.yaml"
        assert state.outputDocumentFile == workspace / "out" / "page.yaml"
        assert (workspace / "out").is_dir()

    def test_env_check_missing_input(self, workspace):
        """Missing input file exits with status 1"""
        with pytest.raises(SystemExit) as excinfo:
            env_check(state_make(workspace, inputFile="absent.yaml"))

        assert excinfo.value.code == 1

    def test_macros_load_failure(self, workspace):
        """Unknown module exits with status 1"""
        with pytest.raises(SystemExit):
            macros_load(state_make(workspace, macros="no_such_module_here:registry"))

    def test_states_are_copied(self, workspace):
        """Stages return new states"""
        initial = state_make(workspace)
        checked = env_check(initial)

        assert checked is not initial
        assert initial.envOK is False


class TestPipeline:
    """Full run from YAML to YAML"""

    def test_full_pipeline(self, workspace):
        """Known macro expanded, unknown macro rendered as error, output written"""
        state = pipeline(
            state_make(workspace, outputFile="result.yaml"),
            env_check,
            document_read,
            macros_load,
            document_transform,
            document_write,
            results_report,
        )

        assert state.transformResult == {
            "placeholders_before": 2,
            "placeholders_after": 0,
            "errors": 1,
        }

        output = document_load(workspace / "out" / "result.yaml")
        greet = output.children[0]
        assert greet.kind is NodeKind.MARKER
        assert greet.parameters == {"who": "reader"}
        assert greet.children == [ContentLeaf("Hello reader")]
        assert output.children[1].children[0].children[0].text == "Unknown macro: missing"

    def test_report_without_result(self, workspace):
        """Reporting without a transformation exits with status 1"""
        with pytest.raises(SystemExit):
            results_report(state_make(workspace))
