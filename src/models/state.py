"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile, macros,
                   syntax, maxMacroExecutions, inlinePolicy
        - env_check: inputDocumentFile, outputDocumentFile, envOK
        - document_read: document
        - macros_load: registry
        - document_transform: transformResult
        - document_write: (writes outputDocumentFile)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the source YAML document
        outputdir: Directory for the transformed document
        verbosity: Logging verbosity level (1-3)
        inputFile: Input document filename (relative to inputdir)
        outputFile: Output document filename (relative to outputdir)
        macros: Import path of the macro registry ("module:attribute")
        syntax: Active syntax identifier
        maxMacroExecutions: Iteration cap override
        inlinePolicy: Inline violation policy override ("halt" or "skip")
        envOK: Environment validation passed
        inputDocumentFile: Resolved path to the input document
        outputDocumentFile: Resolved path to the output document
        document: Root node of the loaded document tree
        registry: MacroRegistry imported from the macros option
        transformResult: Summary of the transformation (placeholder counts)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: Optional[str] = field(default=None)
    macros: str = field(default="")
    syntax: Optional[str] = field(default=None)
    maxMacroExecutions: Optional[int] = field(default=None)
    inlinePolicy: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    inputDocumentFile: Path = field(default=Path("/"))
    outputDocumentFile: Path = field(default=Path("/"))
    document: Optional[Any] = field(default=None)  # Container at runtime
    registry: Optional[Any] = field(default=None)  # MacroRegistry at runtime
    transformResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, macros, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Options unknown to ProgramState (e.g. added by chris_plugin) are dropped
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            document_read,
            macros_load,
            document_transform,
            document_write,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
