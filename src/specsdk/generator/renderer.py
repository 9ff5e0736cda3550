"""Render a :class:`~specsdk.models.ClientModel` into source files with Jinja2.

For every key in the adapter's manifest the renderer loads
``<language>/<key>.j2``, renders it with the adapter's template data, and
returns the text together with the output path. Templates are looked up in a
custom override directory first (when one is configured) and then in the
templates bundled with specsdk::

    <templates_dir>/typescript/client.j2      # user override, wins
    specsdk/templates/typescript/client.j2    # bundled default

Rendering stops at the first failing key; there is no partial success.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import jinja2
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined

from specsdk.exceptions import TemplateError
from specsdk.models import ClientModel

if TYPE_CHECKING:
    from specsdk.adapters.base import LanguageAdapter

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
"""Path to the bundled template root (``specsdk/templates/``)."""

TEMPLATE_SUFFIX = ".j2"


@dataclass(frozen=True)
class RenderedFile:
    """One rendered manifest entry."""

    key: str
    path: str
    content: str


def output_path_for(key: str, extension: str) -> str:
    """Derive the output path of a manifest key.

    Keys that already contain a ``.`` (``package.json``, ``README.md``) are
    used as-is; others get the adapter's extension (``client`` -> ``client.ts``).
    """
    if "." in key:
        return key
    return f"{key}.{extension}"


class TemplateRenderer:
    """Render an adapter's manifest with Jinja2.

    Args:
        adapter: The target-language adapter; supplies the manifest, file
            extension and template data.
        templates_dir: Optional override root. ``<templates_dir>/<language>``
            is searched before the bundled templates.

    Example::

        renderer = TemplateRenderer(TypeScriptAdapter())
        for rendered in renderer.render(model):
            print(rendered.path, len(rendered.content))
    """

    def __init__(
        self,
        adapter: LanguageAdapter,
        templates_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        self.adapter = adapter
        self.templates_dir = Path(templates_dir) if templates_dir else None
        self.env = self._create_jinja_env()

    def _search_path(self) -> list[Path]:
        paths: list[Path] = []
        if self.templates_dir is not None:
            override = self.templates_dir / self.adapter.name
            if override.is_dir():
                paths.append(override)
            else:
                logger.debug("No template overrides for %s in %s", self.adapter.name, override)
        paths.append(TEMPLATE_DIR / self.adapter.name)
        return paths

    def _create_jinja_env(self) -> Environment:
        """Create the Jinja2 environment for this adapter's templates.

        Autoescape is off because the output is source code, not HTML.
        Undefined variables raise instead of rendering as empty strings.
        """
        loaders = [FileSystemLoader(str(path)) for path in self._search_path()]
        return Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, model: ClientModel) -> list[RenderedFile]:
        """Render every manifest key for *model*, in manifest order.

        Raises:
            TemplateError: If a key has no template or its template fails to
                render. The error names the key.
        """
        context = self.adapter.get_template_data(model)
        return [self.render_file(key, context) for key in self.adapter.manifest]

    def render_file(self, key: str, context: dict) -> RenderedFile:
        """Render a single manifest key with a prepared *context*."""
        template_name = f"{key}{TEMPLATE_SUFFIX}"
        try:
            template = self.env.get_template(template_name)
            content = template.render(**context)
        except jinja2.TemplateNotFound as exc:
            raise TemplateError(
                f"No template '{template_name}' for language '{self.adapter.name}'",
                file_key=key,
            ) from exc
        except jinja2.TemplateError as exc:
            raise TemplateError(f"Failed to render template: {exc}", file_key=key) from exc

        path = output_path_for(key, self.adapter.file_extension)
        logger.debug("Rendered %s -> %s (%d chars)", key, path, len(content))
        return RenderedFile(key=key, path=path, content=content)
