"""One-pass generation: acquire, parse, build, render, write.

The pipeline is synchronous and linear. The adapter is resolved first so an
unsupported language fails before any network or disk access, and the first
error aborts the whole run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from specsdk.adapters.base import LanguageAdapter
from specsdk.adapters.registry import get_adapter
from specsdk.generator.model_builder import build_client_model
from specsdk.generator.renderer import RenderedFile, TemplateRenderer
from specsdk.generator.writer import write_files
from specsdk.models import ClientModel, GeneratorConfig
from specsdk.parser import load_spec, parse_document

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """What a generation run produced."""

    model: ClientModel
    files: list[RenderedFile]
    written: list[Path] = field(default_factory=list)
    dry_run: bool = False


def build_model(config: GeneratorConfig) -> ClientModel:
    """Acquire the document named by *config* and build its client model.

    Raises:
        ConfigurationError: If ``config.language`` has no adapter.
        SpecAcquisitionError: If the document cannot be read.
        SpecParseError: If the document is malformed.
    """
    return _build_model(config, get_adapter(config.language))


def _build_model(config: GeneratorConfig, adapter: LanguageAdapter) -> ClientModel:
    logger.debug("Using %s adapter", adapter.name)
    raw = load_spec(config.spec, timeout=config.timeout)
    document = parse_document(raw)
    return build_client_model(document, adapter, config.project_name)


def generate_client(config: GeneratorConfig, dry_run: bool = False) -> GenerationResult:
    """Run the full pipeline for *config*.

    Args:
        config: Resolved generator configuration.
        dry_run: Render everything but write nothing.

    Returns:
        A :class:`GenerationResult`; ``written`` is empty on a dry run.

    Raises:
        SpecsdkError: Any subclass, from whichever stage failed first.

    Example::

        config = GeneratorConfig(spec="petstore.yaml", project_name="Petstore")
        result = generate_client(config)
        for path in result.written:
            print(path)
    """
    adapter = get_adapter(config.language)
    model = _build_model(config, adapter)

    files = TemplateRenderer(adapter, config.templates_dir).render(model)
    if dry_run:
        logger.debug("Dry run: %d files rendered, nothing written", len(files))
        return GenerationResult(model=model, files=files, dry_run=True)

    written = write_files(files, config.output_dir)
    logger.debug("Wrote %d files to %s", len(written), config.output_dir)
    return GenerationResult(model=model, files=files, written=written)
