"""
Text-level rewriting of legacy scaffold-eth component imports.

This module implements the core of the codemod.  It takes the raw text of a
single file and returns the rewritten text together with a short list of
human readable change descriptions.  Nothing here touches the filesystem;
:mod:`scaffold_codemod.runner` handles discovery, writing and reporting.

Rewriting happens in three passes over the text buffer:

1. ``import ... from "<path>"`` statements whose path matches a rule are
   pointed at the new package.  Named specifiers covered by a rename rule
   are renamed, keeping the old name as an alias when the rule asks for it.
2. ``export ... from "<path>"`` statements are handled the same way.
3. Any legacy path string still present (comments, prose in Markdown,
   string literals) is replaced by plain substring replacement.

Statements are located with regular expressions rather than a parser, so
the rewriting works on ``.ts``, ``.tsx``, ``.js`` and Markdown files alike.
Every entry of a named-import clause that is not renamed is reproduced
exactly, including its whitespace and comma.

Example::

    >>> rewrite('import { InputBase } from "~~/components/scaffold-eth";').updated_content
    'import { BaseInput as InputBase } from "@scaffold-ui/components";'
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple

from .rules import DEFAULT_CONFIG, RewriteConfig, SpecifierRename

__all__ = [
    "ImportSpecifier",
    "NamedImportEntry",
    "NamedImports",
    "ImportTransform",
    "ImportAnalysis",
    "RewriteResult",
    "ClauseParseError",
    "ImportRewriter",
    "locate_statements",
    "parse_named_imports",
    "build_named_imports",
    "extract_default_import",
    "resolve_transform",
    "analyze_statement",
    "rewrite",
]

logger = logging.getLogger(__name__)

# A statement body may span lines but never crosses a statement terminator.
_IMPORT_PATTERN = re.compile(r"""\bimport\s+[^;]*?from\s+["']([^"']+)["'];?""")
_EXPORT_PATTERN = re.compile(r"""\bexport\s+[^;]*?from\s+["']([^"']+)["'];?""")
_STATEMENT_PATTERNS = {"import": _IMPORT_PATTERN, "export": _EXPORT_PATTERN}

_NAMED_SECTION = re.compile(r"\{([^{}]*)\}")
_TYPE_MARKER = re.compile(r"type\s+")
_ALIAS_INFIX = re.compile(r"\s+as\s+")
_COMMENT = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
_CLAUSE_TOKEN = re.compile(r"//[^\n]*|/\*.*?\*/|,", re.DOTALL)
_DEFAULT_IMPORT = re.compile(r"import\s+([A-Za-z_$][\w$]*)\s*(?:,|from)")
_WHITESPACE = re.compile(r"\s+")


class ClauseParseError(ValueError):
    """Raised when a named-import clause cannot be split into entries."""


@dataclass(frozen=True)
class ImportSpecifier:
    """A single ``[type] name [as alias]`` specifier."""

    is_type: bool
    imported: str
    alias: Optional[str] = None


@dataclass(frozen=True)
class NamedImportEntry:
    """One comma separated slot of a ``{ ... }`` clause.

    Filler slots (whitespace after a trailing comma, for instance) have no
    ``spec`` and are emitted from ``raw`` unchanged.  The leading and
    trailing text of a specifier also carries any comments next to it.
    """

    raw: str
    spec: Optional[ImportSpecifier] = None
    leading_whitespace: str = ""
    trailing_whitespace: str = ""
    comma: str = ""


@dataclass
class NamedImports:
    """Parsed clause entries plus the imported names they reference."""

    entries: List[NamedImportEntry] = field(default_factory=list)
    specifiers: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ImportTransform:
    """The new module path and renames resolved for one statement."""

    new_path: str
    renames: Mapping[str, SpecifierRename]
    description: str


@dataclass
class ImportAnalysis:
    """Outcome of looking at a single import or export statement."""

    original: str
    updated: str
    specifiers: List[str] = field(default_factory=list)
    default_import: Optional[str] = None
    applied: Optional[ImportTransform] = None


@dataclass
class RewriteResult:
    """Rewritten file text and one summary line per applied change."""

    updated_content: str
    change_summary: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.change_summary)


def locate_statements(content: str, kind: str = "import") -> List[Tuple[str, str]]:
    """Return ``(statement, path)`` pairs for every ``kind`` statement in ``content``.

    Parameters
    ----------
    content: str
        The text to scan.
    kind: str
        Either ``"import"`` or ``"export"``.

    Returns
    -------
    list[tuple[str, str]]
        Full statement text and its quoted module path, in source order.
    """
    pattern = _STATEMENT_PATTERNS[kind]
    return [(match.group(0), match.group(1)) for match in pattern.finditer(content)]


def _split_clause(body: str) -> List[Tuple[str, str]]:
    """Split ``body`` on the commas that sit outside comments.

    Returns ``(text, comma)`` pairs; ``comma`` is empty for the last token.
    """
    if "/*" in _COMMENT.sub("", body):
        raise ClauseParseError("unterminated block comment")
    tokens: List[Tuple[str, str]] = []
    start = 0
    for match in _CLAUSE_TOKEN.finditer(body):
        if match.group(0) == ",":
            tokens.append((body[start:match.start()], ","))
            start = match.end()
    tokens.append((body[start:], ""))
    return tokens


def _parse_specifier(text: str) -> ImportSpecifier:
    is_type = False
    rest = text
    marker = _TYPE_MARKER.match(rest)
    if marker:
        is_type = True
        rest = rest[marker.end():].strip()
    alias: Optional[str] = None
    imported = rest
    infix = _ALIAS_INFIX.search(rest)
    if infix:
        imported = rest[:infix.start()].strip()
        alias = rest[infix.end():].strip()
    return ImportSpecifier(is_type=is_type, imported=imported, alias=alias)


def parse_named_imports(body: str) -> NamedImports:
    """Split the inside of a ``{ ... }`` clause into entries.

    Each token keeps its surrounding whitespace, comments and trailing
    comma so that :func:`build_named_imports` can put untouched entries
    back exactly as they were.  A token holding nothing but whitespace and
    comments becomes a filler entry.

    Raises
    ------
    ClauseParseError
        If the clause contains an unterminated block comment.
    """
    result = NamedImports()
    for text, comma in _split_clause(body):
        raw = text + comma
        if not raw:
            continue
        # Blank out comments so offsets still line up with ``text``
        masked = _COMMENT.sub(lambda m: " " * len(m.group(0)), text)
        if not masked.strip():
            result.entries.append(NamedImportEntry(raw=raw))
            continue
        start = len(masked) - len(masked.lstrip())
        end = len(masked.rstrip())
        spec = _parse_specifier(masked[start:end])
        result.specifiers.append(spec.imported)
        result.entries.append(
            NamedImportEntry(
                raw=raw,
                spec=spec,
                leading_whitespace=text[:start],
                trailing_whitespace=text[end:],
                comma=comma,
            )
        )
    return result


def build_named_imports(
    entries: Iterable[NamedImportEntry], renames: Mapping[str, SpecifierRename]
) -> str:
    """Reassemble a clause body, applying ``renames``.

    An explicit alias already present in the source is kept over the
    compatibility alias a rename rule would add.
    """
    parts: List[str] = []
    for entry in entries:
        spec = entry.spec
        if spec is None or spec.imported not in renames:
            parts.append(entry.raw)
            continue
        rule = renames[spec.imported]
        alias = spec.alias
        if alias is None and rule.keep_alias:
            alias = spec.imported
        text = f"type {rule.new_name}" if spec.is_type else rule.new_name
        if alias:
            text += f" as {alias}"
        parts.append(f"{entry.leading_whitespace}{text}{entry.trailing_whitespace}{entry.comma}")
    return "".join(parts)


def extract_default_import(statement: str) -> Optional[str]:
    """Return the default binding of an import statement, if there is one."""
    match = _DEFAULT_IMPORT.search(_WHITESPACE.sub(" ", statement))
    if not match:
        return None
    identifier = match.group(1)
    # ``import type { X }`` / ``import type X`` are type-only imports
    if identifier == "type":
        return None
    return identifier


def resolve_transform(
    path: str, specifiers: Iterable[str], config: RewriteConfig = DEFAULT_CONFIG
) -> Optional[ImportTransform]:
    """Decide which transform, if any, applies to ``path``.

    Parameters
    ----------
    path: str
        The module path of the statement.
    specifiers: Iterable[str]
        Every name the statement imports (named and default).
    config: RewriteConfig
        The rule tables.

    Returns
    -------
    ImportTransform | None
        ``None`` when the path is outside the legacy prefix, has no rule,
        or is the bare package path without any legacy component imported.
    """
    if not path.startswith(config.prefix):
        return None
    rule = config.rule_for(path)
    if rule is None:
        return None
    if rule.requires_legacy_specifier and not any(
        name in config.legacy_specifiers for name in specifiers
    ):
        return None
    return ImportTransform(new_path=rule.target, renames=rule.renames, description=rule.description)


def analyze_statement(
    statement: str, path: str, config: RewriteConfig = DEFAULT_CONFIG
) -> ImportAnalysis:
    """Work out the rewritten form of a single statement.

    A statement whose named-import clause cannot be parsed is returned
    unchanged.
    """
    section = _NAMED_SECTION.search(statement)
    named: Optional[NamedImports] = None
    if section:
        try:
            named = parse_named_imports(section.group(1))
        except ClauseParseError as exc:
            logger.debug("Leaving statement untouched (%s): %r", exc, statement)
            return ImportAnalysis(original=statement, updated=statement)

    specifiers = list(named.specifiers) if named else []
    default_import = extract_default_import(statement)
    if default_import:
        specifiers.append(default_import)

    transform = resolve_transform(path, specifiers, config)
    if transform is None:
        return ImportAnalysis(
            original=statement,
            updated=statement,
            specifiers=specifiers,
            default_import=default_import,
        )

    # The module path is the last thing in the statement.
    head, _, tail = statement.rpartition(path)
    updated = f"{head}{transform.new_path}{tail}"
    if section and named and transform.renames:
        body = build_named_imports(named.entries, transform.renames)
        updated = updated.replace(section.group(0), "{" + body + "}", 1)

    return ImportAnalysis(
        original=statement,
        updated=updated,
        specifiers=specifiers,
        default_import=default_import,
        applied=transform,
    )


class ImportRewriter:
    """Apply a :class:`RewriteConfig` to file contents.

    Instances hold no state besides the configuration and can be shared
    between threads.
    """

    def __init__(self, config: RewriteConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def rewrite(self, content: str) -> RewriteResult:
        """Rewrite ``content`` and describe each change that was made."""
        summary: List[str] = []
        updated = content
        for kind in ("import", "export"):
            # Matches are taken from the buffer before any of them is applied,
            # then substituted by text so earlier edits cannot shift later ones.
            for statement, path in locate_statements(updated, kind):
                analysis = analyze_statement(statement, path, self.config)
                if analysis.applied is None or analysis.updated == statement:
                    continue
                logger.debug("%s %r -> %r", kind, statement, analysis.updated)
                summary.append(f"{kind} → {analysis.applied.description}")
                updated = updated.replace(statement, analysis.updated, 1)

        for legacy, modern in self.config.raw_replacements:
            if legacy in updated:
                updated = updated.replace(legacy, modern)
                summary.append(f"text → {legacy} → {modern}")
        return RewriteResult(updated_content=updated, change_summary=summary)


def rewrite(content: str, config: RewriteConfig = DEFAULT_CONFIG) -> RewriteResult:
    """Rewrite one file's text with ``config``.  See :class:`ImportRewriter`."""
    return ImportRewriter(config).rewrite(content)
