"""
Core Package.

Contains the conversion pipeline:
- Parser and Printer collaborators (tree-sitter, source splicing)
- Conversion Engine (Pipeline Coordinator)
- Rewriters and Mixins
- Trace logging
"""
