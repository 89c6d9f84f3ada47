"""Filesystem Template Loader — reads .hbs templates from ordered search roots.

Invariants:
    - Roots are searched in order; the first root holding a file wins
    - Missing roots are skipped, not errors
    - Partials are the top-level .hbs files of each root, keyed by filename stem
    - Nothing is cached: every call reads the disk again
    - Files are decoded as UTF-8; an undecodable or unreadable main template raises
      TemplateLoadError, an unreadable partial is logged and skipped
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from sqlite_serve.core.capabilities import TemplateSource
from sqlite_serve.core.domain_types import TEMPLATE_EXTENSION, TemplateLocator
from sqlite_serve.core.errors import TemplateLoadError

logger = logging.getLogger(__name__)


def _read(path: Path, locator: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(locator, f"cannot read {path}: {e}") from e


class FileTemplateLoader:
    """TemplateLoader over plain directories."""

    def load(
        self, locator: TemplateLocator, search_roots: Sequence[str],
    ) -> TemplateSource:
        for root in search_roots:
            candidate = Path(root) / locator.path
            if candidate.is_file():
                return TemplateSource(
                    name=locator.name,
                    text=_read(candidate, locator.path),
                    origin=str(candidate),
                )
        raise TemplateLoadError(
            locator.path,
            f"not found in {', '.join(search_roots) or 'no search roots'}",
            not_found=True,
        )

    def list_partials(self, search_roots: Sequence[str]) -> dict[str, str]:
        partials: dict[str, str] = {}
        for root in search_roots:
            directory = Path(root)
            if not directory.is_dir():
                logger.debug(f"Template root {root} does not exist, skipping")
                continue
            for path in sorted(directory.glob(f"*{TEMPLATE_EXTENSION}")):
                if not path.is_file() or path.stem in partials:
                    continue
                try:
                    partials[path.stem] = _read(path, path.name)
                except TemplateLoadError as e:
                    logger.warning(
                        f"Skipping partial {path}: {e.detail}",
                        extra={"template": path.name},
                    )
        return partials
