"""
Static Analysis Package.

This package contains the passes that inspect a parsed JavaScript tree before
any rewriting decision is made.

Modules:
    - ``scopes``: Lexical scopes, bindings and read/write reference sites.
    - ``usage``: Classifying a parameter's type from its reference sites.
"""
