"""Mustache Renderer — renders .hbs templates with chevron.

Invariants:
    - Syntax is the mustache subset of Handlebars: {{name}}, {{{raw}}},
      {{#results}}...{{/results}}, {{^results}}...{{/results}}, {{> partial}}
    - Partials come only from the mapping passed in; chevron never reads the disk
    - A partial that rendering reaches but that is absent raises TemplateRenderError;
      references in branches that never render are not checked
    - Template syntax errors raise TemplateRenderError

Design Decisions:
    - Absent partials raise a non-KeyError from __missing__: chevron treats
      KeyError as "try the filesystem"
"""

from collections.abc import Mapping
from typing import Any

import chevron
from chevron.tokenizer import ChevronError

from sqlite_serve.core.capabilities import TemplateSource
from sqlite_serve.core.errors import TemplateRenderError


class MissingPartial(Exception):
    def __init__(self, name: str):
        super().__init__(f"partial not found: {name}")
        self.name = name


class PartialMap(dict):
    """Partial sources by name; lookups of unknown names raise MissingPartial."""

    def __missing__(self, name: str) -> str:
        raise MissingPartial(name)


class ChevronRenderer:
    """TemplateRenderer backed by chevron."""

    def render(
        self,
        main: TemplateSource,
        partials: Mapping[str, str],
        context: Mapping[str, Any],
    ) -> str:
        try:
            return chevron.render(
                template=main.text,
                data=dict(context),
                partials_dict=PartialMap(partials),
            )
        except MissingPartial as e:
            raise TemplateRenderError(f"{main.name}: {e}") from e
        except ChevronError as e:
            raise TemplateRenderError(f"{main.name}: {e}") from e
