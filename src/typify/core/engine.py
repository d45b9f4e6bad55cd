"""
Orchestration Engine for JavaScript to TypeScript Conversion.

This module provides the `ConversionEngine`, the Pipeline Coordinator. A
conversion moves through four stages:

1.  **Parsed**: The source is parsed with tree-sitter (module mode, JSX, or TSX
    when configured). Syntax errors abort the conversion.
2.  **Visited**: Scope analysis resolves bindings, then one walk of the
    `TypifyRewriter` records require rewrites, var rewrites and parameter
    annotations, and raises the import bundles the file needs.
3.  **ImportsAssembled**: Bundle imports are placed in front of the
    require-derived imports.
4.  **Printed**: The collected edits are spliced into the source and the
    rendered imports are prepended, separated by a blank line.

The engine never returns partial output: any failure yields an unsuccessful
`ConversionResult` with empty code.
"""

from typing import List, Optional

from typify.analysis.scopes import ScopeAnalyzer
from typify.config import RuntimeConfig
from typify.core.conversion_result import ConversionResult
from typify.core.errors import ConversionError
from typify.core.parser import JsParser
from typify.core.printer import SourcePrinter
from typify.core.rewriter import RewriterContext, TypifyRewriter
from typify.core.tracer import TraceLogger
from typify.enums import ConversionStage

IMPORT_SEPARATOR = "\n"
BODY_SEPARATOR = "\n\n"


def join_output(imports: List[str], body: str) -> str:
  """
  Concatenates rendered imports and the rewritten body.

  Args:
      imports: Rendered import statements, in emission order.
      body: The rewritten program text.

  Returns:
      str: Final file content. Without imports the body is returned unchanged.
  """
  if not imports:
    return body
  return IMPORT_SEPARATOR.join(imports) + BODY_SEPARATOR + body


class ConversionEngine:
  """
  The main conversion unit.

  This class encapsulates the logic required to convert a single unit of code.
  It holds no state between runs, so one engine may convert many files.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): The runtime configuration object.
            Defaults are used when omitted.
    """
    self.config = config or RuntimeConfig()
    self.parser = JsParser(self.config.dialect)

  def run(self, code: str) -> ConversionResult:
    """
    Executes the full conversion pipeline.

    Args:
        code (str): The input JavaScript source.

    Returns:
        ConversionResult: Object containing converted code, reports and trace.
    """
    tracer = TraceLogger()
    stage = ConversionStage.PENDING
    tracer.start_phase("Conversion Pipeline", f"dialect={self.config.dialect.value}")

    try:
      tracer.start_phase("Parse", "Source -> Syntax Tree")
      tree = self.parser.parse(code)
      stage = ConversionStage.PARSED
      tracer.end_phase()

      tracer.start_phase("Scope Analysis", "Bindings & References")
      scopes = ScopeAnalyzer(tree).analyze()
      tracer.end_phase()

      tracer.start_phase("Rewrite", "Single tree walk")
      context = RewriterContext(tree, scopes, self.config, tracer)
      rewriter = TypifyRewriter(context)
      rewriter.run()
      stage = ConversionStage.VISITED
      tracer.end_phase()

      tracer.start_phase("Import Assembly", "Bundles before require-derived imports")
      imports = [SourcePrinter.print_import(r) for r in rewriter.assemble_imports()]
      stage = ConversionStage.IMPORTS_ASSEMBLED
      tracer.end_phase()

      tracer.start_phase("Print", "Splice edits")
      body = SourcePrinter(tree.source).print(context.edits)
      final_code = join_output(imports, body)
      stage = ConversionStage.PRINTED
      tracer.end_phase()

    except ConversionError as e:
      tracer.log_warning(f"Conversion aborted after stage '{stage.value}': {e}")
      tracer.close_all()
      return ConversionResult(
        code="",
        errors=[f"{type(e).__name__}: {e}"],
        success=False,
        stage=stage,
        trace_events=tracer.export(),
      )

    tracer.end_phase()
    return ConversionResult(
      code=final_code,
      success=True,
      stage=stage,
      parameters=context.parameters,
      imports=imports,
      trace_events=tracer.export(),
    )
