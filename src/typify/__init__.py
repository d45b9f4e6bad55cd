"""
typify Package.

Converts CommonJS-era JavaScript into TypeScript: ``require()`` declarations
become ``import`` statements, ``var`` becomes ``const``/``let``, and untyped
function parameters receive annotations inferred from their usage or their
name, together with the imports those annotations need.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import typify
    print(typify.convert('function greet(name) { return "Hello " + name; }'))
    # function greet(name: string) { return "Hello " + name; }

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from typify import ConversionEngine, RuntimeConfig

    engine = ConversionEngine(RuntimeConfig(rewrite_var=False))
    res = engine.run("var app = require('express')();")

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Optional

from typify.config import RuntimeConfig
from typify.core.conversion_result import ConversionResult
from typify.core.engine import ConversionEngine
from typify.core.errors import ConversionError

__version__ = "1.0.0"


def convert(code: str, config: Optional[RuntimeConfig] = None) -> str:
  """
  Converts a string of JavaScript code to TypeScript.

  This is a convenience wrapper around `ConversionEngine`. For file-based
  conversions use the ``typify`` CLI or the engine directly.

  Args:
      code (str): The JavaScript source.
      config (RuntimeConfig, optional): Conversion settings. Defaults apply when omitted.

  Returns:
      str: The TypeScript source.

  Raises:
      ConversionError: If the source cannot be parsed or printed.
  """
  result = ConversionEngine(config).run(code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ConversionError(f"Conversion failed:\n{error_msg}")

  return result.code


__all__ = [
  "ConversionEngine",
  "ConversionError",
  "ConversionResult",
  "RuntimeConfig",
  "convert",
  "__version__",
]
