#!/usr/bin/env python3
"""
docmacro - Macro expansion for document trees

Reads a document tree serialized as YAML, expands every macro placeholder
with the macros of a user-supplied registry, and writes the transformed
tree back as YAML.

As with other ChRIS-style tools, the "plugin" pattern is used as a general
purpose app framework: positional inputdir/outputdir, options for the rest.

Usage:
    docmacro inputdir/ outputdir/ --inputFile page.yaml --macros mysite.macros:registry

Examples:
    # Expand with a registry object
    docmacro . out/ --inputFile page.yaml --macros mysite.macros:registry

    # Registry factory, custom syntax and cap, verbose
    docmacro . out/ --inputFile page.yaml --macros mysite.macros:registry_build \\
        --syntax xwiki/2.0 --maxMacroExecutions 200 -vv
"""

import sys
import importlib
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import MacroTransformation, MacroRegistry, __version__, LOG, state_connectToLogger
from .lib.document import DocumentError, document_load, document_save
from .lib.tree import nodes_walk, placeholders_find
from .models import ProgramState, pipeline, InlinePolicy, NodeKind


# Define CLI arguments
parser = ArgumentParser(
    description="docmacro - Expand macro placeholders in YAML document trees",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input YAML document (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help="Output YAML document (relative to outputdir). Defaults to the input file name",
)

parser.add_argument(
    "--macros",
    required=True,
    type=str,
    help="Macro registry to use, as module:attribute (a MacroRegistry or a function returning one)",
)

parser.add_argument(
    "--syntax", default=None, type=str, help="Syntax identifier scoping macro resolution"
)

parser.add_argument(
    "--maxMacroExecutions",
    default=None,
    type=int,
    help="Macro executions allowed before assuming a loop. Defaults to DOCMACRO_MAX_MACRO_EXECUTIONS",
)

parser.add_argument(
    "--inlinePolicy",
    default=None,
    choices=[policy.value for policy in InlinePolicy],
    help="Halt or skip after inline usage of a block-only macro. Defaults to DOCMACRO_INLINE_POLICY",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Returns:
        ProgramState with added fields:
            - inputDocumentFile: Resolved path to the input document
            - outputDocumentFile: Resolved path to the output document
            - envOK: True if environment is valid

    Exits:
        1 if the input file does not exist
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputDocumentFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputDocumentFile = state.outputdir / (state.outputFile or state.inputFile)
    state.outputDocumentFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.outputDocumentFile}", level=2)

    state.envOK = True
    return state


def document_read(inputstate: ProgramState) -> ProgramState:
    """
    Load the YAML document into a tree.

    Exits:
        1 if the file cannot be read or is not a valid document
    """
    state = inputstate.copy()

    LOG("Reading document...", level=1)
    try:
        state.document = document_load(state.inputDocumentFile)
    except (OSError, DocumentError) as e:
        print(f"Error reading document: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Found {len(placeholders_find(state.document))} macro placeholder(s)", level=2)
    return state


def registry_import(spec: str) -> MacroRegistry:
    """
    Import a macro registry from a "module:attribute" path

    Raises:
        ValueError: If the path is malformed or does not lead to a registry
    """
    module_name, _, attribute = spec.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Expected module:attribute, got '{spec}'")

    target = getattr(importlib.import_module(module_name), attribute)
    registry = target if isinstance(target, MacroRegistry) else target()
    if not isinstance(registry, MacroRegistry):
        raise ValueError(f"'{spec}' did not provide a MacroRegistry")
    return registry


def macros_load(inputstate: ProgramState) -> ProgramState:
    """
    Import the macro registry named by --macros.

    Exits:
        1 if the registry cannot be imported
    """
    state = inputstate.copy()

    try:
        state.registry = registry_import(state.macros)
    except (ImportError, AttributeError, TypeError, ValueError) as e:
        print(f"Error loading macros: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Loaded {len(state.registry.names(state.syntax))} macro name(s)", level=2)
    return state


def document_transform(inputstate: ProgramState) -> ProgramState:
    """
    Expand all macros of the document.

    Returns:
        ProgramState with added field:
            - transformResult: Dict containing:
                - placeholders_before: int
                - placeholders_after: int (left unexpanded by the cap or a halt)
                - errors: int (error elements rendered by the transformation)
    """
    state = inputstate.copy()

    LOG("Expanding macros...", level=1)

    transformation = MacroTransformation(
        state.registry,
        max_macro_executions=state.maxMacroExecutions,
        inline_policy=state.inlinePolicy,
    )
    before = len(placeholders_find(state.document))
    transformation.transform(state.document, state.syntax)

    state.transformResult = {
        "placeholders_before": before,
        "placeholders_after": len(placeholders_find(state.document)),
        "errors": sum(
            1 for node in nodes_walk(state.document)
            if node.kind is NodeKind.ELEMENT
            and node.attributes.get("class") == transformation.reporter.error_class
        ),
    }
    return state


def document_write(inputstate: ProgramState) -> ProgramState:
    """Write the transformed tree to the output document."""
    state = inputstate.copy()

    document_save(state.document, state.outputDocumentFile)
    LOG(f"Wrote {state.outputDocumentFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display transformation results to user.

    Exits:
        1 if transformResult is None
    """
    state: ProgramState = inputstate.copy()
    if state.transformResult is None:
        print("Error: Transformation failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Transformation complete!", level=1)
    LOG(f"  Output: {state.outputDocumentFile}", level=1)
    LOG(f"  Placeholders: {state.transformResult['placeholders_before']} → "
        f"{state.transformResult['placeholders_after']}", level=1)
    LOG(f"  Errors: {state.transformResult['errors']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="docmacro - Macro expansion for document trees",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - expand the macros of a YAML document tree.

    Orchestrates the pipeline:
        1. env_check: Validate paths
        2. document_read: Load the YAML tree
        3. macros_load: Import the macro registry
        4. document_transform: Expand macros
        5. document_write: Save the YAML tree
        6. results_report: Display results
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(
        state,
        env_check,
        document_read,
        macros_load,
        document_transform,
        document_write,
        results_report,
    )


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
