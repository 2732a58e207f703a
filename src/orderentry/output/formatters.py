"""Output mode dispatch for ServiceResult.

Three modes, picked from the global CLI flags:
- ``--json``: the full result serialized by pydantic
- ``--quiet``: a single OK/ERROR line
- default: Rich rendering per operation (see :mod:`renderers`)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from orderentry.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from orderentry.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags relevant to formatting."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
