"""
Rewriter Package.

This package provides the `TypifyRewriter` class, composed of several mixins
to handle specific aspects of the conversion:
- Annotations: Parameter type inference and bundle detection.
- Imports: require() to import statements.
- Declarations: var to const/let.

On a declaration node the import rewrite runs before the mutability rewrite;
a declaration consumed by the import rewrite is not rewritten further.
"""

from typify.core.rewriter.annotations import AnnotationMixin
from typify.core.rewriter.base import BaseRewriter
from typify.core.rewriter.context import RewriterContext
from typify.core.rewriter.declarations import DeclarationMixin
from typify.core.rewriter.imports import ImportMixin


class TypifyRewriter(
  AnnotationMixin,
  ImportMixin,
  DeclarationMixin,
  BaseRewriter,
):
  """
  The single-pass tree rewriter for typify.

  Inherits functionality from the component Mixins and the base traversal
  logic. This class is the entry point for the ConversionEngine.
  """

  pass


__all__ = ["RewriterContext", "TypifyRewriter"]
