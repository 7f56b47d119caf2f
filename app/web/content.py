"""
➡️ But : Rendre le contenu des articles (markdown simplifié) en HTML sûr.

Règles, ligne par ligne :

"# ", "## ", "### " → titres h1 / h2 / h3
"- " et "1. " → éléments de liste
"> " → citation
*ligne entière* → paragraphe en italique
"| ..." → ligne de tableau ignorée
ligne vide → espacement

Dans les paragraphes et listes : **gras** et [texte](url).
Le texte est toujours échappé avant l'application des balises.
"""

import re
from typing import List

from markupsafe import Markup, escape

_BOLD = re.compile(r"\*\*(.*?)\*\*")
_LINK = re.compile(r"\[(.*?)\]\((.*?)\)")
_ORDERED = re.compile(r"^\d+\. ")
_SAFE_URL = re.compile(r"^(https?://|mailto:|/|#)", re.IGNORECASE)


def _link(match: "re.Match[str]") -> str:
    text, url = match.group(1), match.group(2)
    if not _SAFE_URL.match(url):
        return text
    return f'<a href="{url}" class="link">{text}</a>'


def render_inline(text: str) -> Markup:
    # échappé d'abord : les groupes capturés sont déjà sûrs
    html = str(escape(text))
    html = _BOLD.sub(r"<strong>\1</strong>", html)
    html = _LINK.sub(_link, html)
    return Markup(html)


def _render_line(line: str) -> str:
    if line.startswith("### "):
        return f"<h3>{escape(line[4:])}</h3>"
    if line.startswith("## "):
        return f"<h2>{escape(line[3:])}</h2>"
    if line.startswith("# "):
        return f"<h1>{escape(line[2:])}</h1>"
    if line.startswith("- "):
        return f"<li>{render_inline(line[2:])}</li>"
    if _ORDERED.match(line):
        return f'<li class="ordered">{render_inline(_ORDERED.sub("", line))}</li>'
    if line.startswith("> "):
        return f"<blockquote>{escape(line[2:])}</blockquote>"
    if len(line) > 1 and line.startswith("*") and line.endswith("*") and not line.startswith("**"):
        return f'<p class="italic">{escape(line[1:-1])}</p>'
    if not line.strip():
        return '<div class="spacer"></div>'
    if line.startswith("|"):
        return ""
    return f"<p>{render_inline(line)}</p>"


def render_content(content: str) -> Markup:
    if not content:
        return Markup("")
    parts: List[str] = [_render_line(line) for line in content.split("\n")]
    return Markup("\n".join(p for p in parts if p))
