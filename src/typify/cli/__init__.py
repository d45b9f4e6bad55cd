"""
Command-line interface for typify.

``typify convert`` writes TypeScript next to (or away from) JavaScript sources;
``typify inspect`` only reports the parameter types it would attach.
The argparse definition lives in ``__main__``, the work in ``handlers``.
"""
