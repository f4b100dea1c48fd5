"""
Orchestrator

Glue layer. Discovers files and wires the per-file flow:
file exemption -> parse -> function exemption -> classify -> report.
No rule logic lives here.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .classifier import classify
from .data_structures import Configuration, Diagnostic, Violation
from .exemptions import is_file_exempt, is_function_exempt
from .exemptions.files import normalize_path
from .git_changes import get_changed_files
from .parser import SUPPORTED_SUFFIXES, ParseError, extract_sites, parse_checked
from .reporter import report

logger = logging.getLogger(__name__)

SKIPPED_DIRS = {"node_modules", "dist", "build", "coverage"}


@dataclass
class LintResult:
    diagnostics:   List[Diagnostic] = field(default_factory=list)
    files_checked: int = 0
    files_exempt:  int = 0
    files_skipped: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


@dataclass(frozen=True)
class FileContext:
    """Per-file state, computed once when the file is entered."""

    path:   str
    exempt: bool


def enter_file(path: str, config: Configuration) -> FileContext:
    rel = normalize_path(path)
    return FileContext(path=rel, exempt=is_file_exempt(rel, config))


def lint_source(
    source: str,
    path: str,
    config: Configuration,
    file_context: Optional[FileContext] = None,
) -> List[Diagnostic]:
    """
    Lint one file's source text.

    `path` is used for grammar selection, file exemptions and
    diagnostics. Raises ParseError when the source does not parse.
    """
    ctx = file_context or enter_file(path, config)
    if ctx.exempt:
        return []

    tree = parse_checked(source, ctx.path)

    diagnostics: List[Diagnostic] = []
    for site in extract_sites(tree):
        if is_function_exempt(site, config):
            logger.debug(
                "%s:%d: exempt %s %s",
                ctx.path, site.location.line, site.node_type, site.display_name,
            )
            continue

        result = classify(site, config)
        if isinstance(result, Violation):
            report(result, ctx.path, diagnostics)

    return diagnostics


def _display_path(file_path: Path, root: Path) -> str:
    try:
        return file_path.relative_to(root).as_posix()
    except ValueError:
        return file_path.as_posix()


def _is_skipped_dir(part: str) -> bool:
    return (part.startswith(".") and part not in (".", "..")) or part in SKIPPED_DIRS


def discover_files(paths: Iterable[Path]) -> List[Path]:
    """
    Expand path arguments into source files.

    Directories are walked; explicit files are kept when their
    extension is supported.
    """
    found: List[Path] = []
    seen: Set[Path] = set()

    for path in paths:
        path = Path(path).resolve()
        if not path.exists():
            raise ValueError(f"Path does not exist: {path}")

        if path.is_file():
            candidates = [path] if path.suffix.lower() in SUPPORTED_SUFFIXES else []
        else:
            candidates = []
            for file_path in sorted(path.rglob("*")):
                if file_path.suffix.lower() not in SUPPORTED_SUFFIXES or not file_path.is_file():
                    continue
                parts = file_path.relative_to(path).parts[:-1]
                if any(_is_skipped_dir(p) for p in parts):
                    continue
                candidates.append(file_path)

        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                found.append(candidate)

    return found


def lint_file(file_path: Path, root: Path, config: Configuration, result: LintResult) -> None:
    rel_path = _display_path(file_path, root)
    ctx = enter_file(rel_path, config)

    if ctx.exempt:
        logger.debug("Skipping exempt file %s", rel_path)
        result.files_exempt += 1
        return

    try:
        source = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", rel_path, e)
        result.files_skipped.append(rel_path)
        return

    try:
        diagnostics = lint_source(source, rel_path, config, file_context=ctx)
    except ParseError:
        logger.warning("Skipping %s: syntax errors", rel_path)
        result.files_skipped.append(rel_path)
        return

    result.files_checked += 1
    result.diagnostics.extend(diagnostics)


def lint_paths(
    paths: Iterable[Path],
    config: Configuration,
    root: Optional[Path] = None,
    changed_since: Optional[str] = None,
) -> LintResult:
    """
    Lint every supported file under `paths`.

    Paths in diagnostics and glob matching are relative to `root`
    (default: current directory). With `changed_since`, only files
    changed since that git revision are linted.
    """
    root_path = Path(root or Path.cwd()).resolve()
    files = discover_files(paths)

    if changed_since is not None:
        changed = get_changed_files(str(root_path), changed_since)
        files = [f for f in files if f in changed]
        logger.debug("%d file(s) changed since %s", len(files), changed_since)

    result = LintResult()
    for file_path in files:
        lint_file(file_path, root_path, config, result)

    return result
