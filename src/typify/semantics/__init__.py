"""
Semantics Package.

Type verdicts, import schemas and the curated name-pattern catalog of
framework conventions.
"""
