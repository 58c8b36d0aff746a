"""Template Engine — formats checkout results into markdown.

Each vertical registers its own renderer function; the engine dispatches
on the vertical name. A generic fallback handles any unregistered vertical.
Results may be plain dicts or pydantic models.
"""

from decimal import Decimal
from typing import Any, Callable, Dict

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def fmt_money(value: Decimal | float | int | None, currency: str = "$") -> str:
    """Format a number as currency."""
    if value is None:
        return "N/A"
    return f"{currency}{value:,.2f}"


def fmt_pct(value: Decimal | float | None) -> str:
    """Format a fraction (0.10) as a percentage (10.0%)."""
    if value is None:
        return "N/A"
    return f"{value * 100:.1f}%"


def fmt_int(value: int | None) -> str:
    """Format an integer with comma separators."""
    if value is None:
        return "N/A"
    return f"{value:,}"


def as_dict(result: BaseModel | Dict[str, Any]) -> Dict[str, Any]:
    """Normalise a result to a plain dict."""
    if isinstance(result, BaseModel):
        return result.model_dump()
    return dict(result)


# ---------------------------------------------------------------------------
# Generic fallback renderer
# ---------------------------------------------------------------------------

def render_generic(name: str, result: Dict) -> str:
    """Generic fallback renderer for any result.

    Lists are summarised, nested dicts show their first 4 keys.
    """
    if "error" in result and result["error"]:
        return f"**Error:** {result['error']}"

    lines = [f"## {name}\n"]

    for key, value in result.items():
        if key.startswith("_"):
            continue
        if isinstance(value, list):
            lines.append(f"**{key}:** {len(value)} items")
            for item in value[:5]:
                if isinstance(item, dict):
                    summary = ", ".join(f"{k}={v}" for k, v in list(item.items())[:3])
                    lines.append(f"  - {summary}")
                else:
                    lines.append(f"  - {item}")
        elif isinstance(value, dict):
            summary = ", ".join(f"{k}={v}" for k, v in list(value.items())[:4])
            lines.append(f"**{key}:** {summary}")
        elif isinstance(value, (float, Decimal)):
            lines.append(f"**{key}:** {value:,.2f}")
        else:
            lines.append(f"**{key}:** {value}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Renderer type and registry
# ---------------------------------------------------------------------------

VerticalRenderer = Callable[[str, Dict], str]

_VERTICAL_RENDERERS: Dict[str, VerticalRenderer] = {}


def register_renderer(vertical: str, renderer: VerticalRenderer) -> None:
    """Register a vertical-specific renderer.

    Example::

        def render_bookstore(name, result):
            if "breakdown" in result:
                ...
            return render_generic(name, result)

        register_renderer("bookstore", render_bookstore)
    """
    _VERTICAL_RENDERERS[vertical] = renderer


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TemplateEngine:
    """Formats results into human-readable markdown.

    Usage::

        markdown = TemplateEngine.render("purchase", confirmation, "bookstore")
    """

    @staticmethod
    def render(
        name: str,
        result: BaseModel | Dict[str, Any],
        vertical: str,
    ) -> str:
        """Render a result with the vertical's renderer, or generically."""
        data = as_dict(result)
        renderer = _VERTICAL_RENDERERS.get(vertical)
        if renderer is None:
            return render_generic(name, data)
        return renderer(name, data)

    @staticmethod
    def list_verticals() -> list[str]:
        """Return list of verticals with registered renderers."""
        return list(_VERTICAL_RENDERERS.keys())
