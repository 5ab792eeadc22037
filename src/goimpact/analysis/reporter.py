"""Render impact results for humans and CI scripts."""

import json

from goimpact.analysis.models import ImpactResult
from goimpact.core.constants import EXPLAIN_INDENT


def render_text(result: ImpactResult, explain: bool = False) -> str:
    """
    One line per impacted package, in the order packages were marked.

    In explain mode the files that pulled each package in are listed
    beneath it, indented.
    """
    lines: list[str] = []
    for impact in result.packages:
        lines.append(impact.package)
        if explain:
            lines.extend(f"{EXPLAIN_INDENT}{cause.file}" for cause in impact.causes)
    return "\n".join(lines)


def render_json(result: ImpactResult, explain: bool = False) -> str:
    """The result as JSON; causes are only included in explain mode."""
    if explain:
        return result.model_dump_json(indent=2)
    data = result.model_dump(exclude={"packages": {"__all__": {"causes"}}})
    return json.dumps(data, indent=2)


def render(result: ImpactResult, fmt: str = "text", explain: bool = False) -> str:
    """Render a result in the named format ("text" or "json")."""
    if fmt == "json":
        return render_json(result, explain)
    return render_text(result, explain)
