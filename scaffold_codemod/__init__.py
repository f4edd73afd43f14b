"""
Codemods that migrate scaffold-eth projects to newer package layouts.

The main codemod moves imports of the legacy components that lived under
``~~/components/scaffold-eth`` over to the ``@scaffold-ui/components``
package.  ``InputBase`` was renamed to ``BaseInput`` there, so it is
imported as ``BaseInput as InputBase`` and existing code keeps working.

Example::

    # Preview the changes for a whole project
    scaffold-codemod migrate-scaffold-ui-imports packages/nextjs --dry-run

The rewriting itself is a pure text transform available as
:func:`rewrite`; see ``scaffold_codemod.rewriter`` for details and
``scaffold_codemod.cli`` for the command line interface.
"""

__version__ = "0.1.0"

__all__ = [
    "ImportRewriter",
    "RewriteConfig",
    "RewriteResult",
    "DEFAULT_CONFIG",
    "rewrite",
    "run_codemod",
]

from .rewriter import ImportRewriter, RewriteResult, rewrite  # noqa: F401
from .rules import DEFAULT_CONFIG, RewriteConfig  # noqa: F401
from .runner import run_codemod  # noqa: F401
