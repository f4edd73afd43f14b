"""
Static rule tables for the scaffold-ui import migration.

The rewriter never consults module-level state directly; every table it
needs lives on a :class:`RewriteConfig` instance that is passed in.  The
:data:`DEFAULT_CONFIG` below reproduces the fixed migration from the old
``~~/components/scaffold-eth`` component paths to the
``@scaffold-ui/components`` package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

__all__ = [
    "SpecifierRename",
    "RewriteRule",
    "RewriteConfig",
    "COMPONENT_TARGET",
    "LEGACY_PREFIX",
    "DEFAULT_CONFIG",
]


@dataclass(frozen=True)
class SpecifierRename:
    """Rename an exported name, optionally keeping the old name as an alias."""

    new_name: str
    keep_alias: bool = False


@dataclass(frozen=True)
class RewriteRule:
    """Map one legacy module path onto a target module path.

    Parameters
    ----------
    legacy_path: str
        The exact module path this rule matches.
    target: str
        The module path written in place of ``legacy_path``.
    description: str
        Human readable text used in the change summary.
    renames: Mapping[str, SpecifierRename]
        Specifier renames applied to the named-import clause.
    requires_legacy_specifier: bool
        When true the rule only fires if the statement imports at least one
        name from :attr:`RewriteConfig.legacy_specifiers`.
    """

    legacy_path: str
    target: str
    description: str
    renames: Mapping[str, SpecifierRename] = field(default_factory=lambda: MappingProxyType({}))
    requires_legacy_specifier: bool = False


@dataclass(frozen=True)
class RewriteConfig:
    """Everything the rewriter needs to know about one migration."""

    prefix: str
    rules: Tuple[RewriteRule, ...]
    legacy_specifiers: FrozenSet[str] = frozenset()
    raw_replacements: Tuple[Tuple[str, str], ...] = ()

    def rule_for(self, path: str) -> Optional[RewriteRule]:
        """Return the rule registered for ``path`` or ``None``."""
        for rule in self.rules:
            if rule.legacy_path == path:
                return rule
        return None


COMPONENT_TARGET = "@scaffold-ui/components"
LEGACY_PREFIX = "~~/components/scaffold-eth"

_DESCRIPTION = f"components import migrated to {COMPONENT_TARGET}"

_COMPONENT_RENAMES: Mapping[str, SpecifierRename] = MappingProxyType(
    {"InputBase": SpecifierRename(new_name="BaseInput", keep_alias=True)}
)

# Nested paths that used to re-export the same components.
_NESTED_PATHS = (
    f"{LEGACY_PREFIX}/Input",
    f"{LEGACY_PREFIX}/Input/AddressInput",
    f"{LEGACY_PREFIX}/Input/EtherInput",
    f"{LEGACY_PREFIX}/Address/Address",
    f"{LEGACY_PREFIX}/Address",
)

DEFAULT_CONFIG = RewriteConfig(
    prefix=LEGACY_PREFIX,
    rules=(
        RewriteRule(
            legacy_path=LEGACY_PREFIX,
            target=COMPONENT_TARGET,
            description=_DESCRIPTION,
            renames=_COMPONENT_RENAMES,
            requires_legacy_specifier=True,
        ),
    )
    + tuple(
        RewriteRule(
            legacy_path=path,
            target=COMPONENT_TARGET,
            description=_DESCRIPTION,
            renames=_COMPONENT_RENAMES,
        )
        for path in _NESTED_PATHS
    ),
    legacy_specifiers=frozenset(
        {"Address", "AddressInput", "Balance", "EtherInput", "InputBase", "BaseInput"}
    ),
    # Longer paths first so a nested path is never half-replaced by its parent.
    raw_replacements=(
        (f"{LEGACY_PREFIX}/Input/AddressInput", COMPONENT_TARGET),
        (f"{LEGACY_PREFIX}/Input/EtherInput", COMPONENT_TARGET),
        (f"{LEGACY_PREFIX}/Input", COMPONENT_TARGET),
        (f"{LEGACY_PREFIX}/Address/Address", COMPONENT_TARGET),
        (f"{LEGACY_PREFIX}/Address", COMPONENT_TARGET),
    ),
)
