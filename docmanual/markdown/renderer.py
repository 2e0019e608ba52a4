"""
Markdown -> HTML для страниц руководства.

Рендерер намеренно маленький: экранирование всего ввода, затем
упорядоченный набор проходов по тексту. Готовые HTML-фрагменты (код,
картинки, ссылки) откладываются в хранилище и заменяются метками вида
``<@N@>``. После экранирования символ ``<`` в тексте пользователя
невозможен, поэтому метки не пересекаются с содержимым документа, а
следующие проходы не могут испортить уже собранную разметку.

Функция тотальна: незакрытые блоки кода и непарные звездочки остаются
обычным текстом.
"""

import html
import re
from typing import Callable, List, Set, Tuple

_TOKEN_RE = re.compile(r"<@(\d+)@>")
_BLOCK_TOKENS_RE = re.compile(r"^(?:<@\d+@>[ \t]*)+$")

# Строка после ``` (язык и прочее) отбрасывается
_FENCE_RE = re.compile(r"```[^\n`]*\n(.*?)```", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")
_HEADING_RE = re.compile(r"^(#{1,3}) (.+)$", re.MULTILINE)
_IMAGE_RE = re.compile(r"!\[([^\]<]*)\]\(([^)<]+)\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)<]+)\)")
_BLOCKQUOTE_RE = re.compile(r"^&gt; (.+)$", re.MULTILINE)
_LIST_ITEM_RE = re.compile(r"^- (.+)$", re.MULTILINE)
_LIST_RUN_RE = re.compile(r"^<li>.*</li>(?:\n<li>.*</li>)*$", re.MULTILINE)
_RULE_RE = re.compile(r"^---$", re.MULTILINE)
_PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t]*\n")
_BLOCK_LINE_RE = re.compile(
    r"^(?:<(h[1-6])>.*</\1>|<ul>.*</ul>|<blockquote>.*</blockquote>|<hr>)$"
)

_EMPHASIS = (
    (re.compile(r"\*\*\*(.+?)\*\*\*"), r"<strong><em>\1</em></strong>"),
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.+?)\*"), r"<em>\1</em>"),
)

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")
_SAFE_SCHEMES = {"http", "https", "mailto"}
_URL_JUNK_RE = re.compile(r"[\x00-\x20\x7f]")


class _Stash:
    """Хранилище готовых фрагментов одного вызова render_markdown"""

    def __init__(self):
        self._fragments: List[str] = []
        self._standalone: Set[int] = set()

    def put(self, fragment: str, standalone: bool = False) -> str:
        """Сохранить фрагмент и вернуть метку

        standalone - фрагмент может стоять на строке один, не внутри абзаца.
        """
        index = len(self._fragments)
        # Вложенные метки раскрываются сразу, restore остается однопроходным
        self._fragments.append(self.restore(fragment))
        if standalone:
            self._standalone.add(index)
        return f"<@{index}@>"

    def is_standalone_line(self, line: str) -> bool:
        line = line.strip()
        if not _BLOCK_TOKENS_RE.match(line):
            return False
        return all(int(index) in self._standalone for index in _TOKEN_RE.findall(line))

    def restore(self, text: str) -> str:
        return _TOKEN_RE.sub(lambda m: self._fragments[int(m.group(1))], text)


def _safe_url(url: str) -> str:
    url = _URL_JUNK_RE.sub("", url.strip().replace(" ", "%20"))
    match = _SCHEME_RE.match(url)
    if match and match.group(1).lower() not in _SAFE_SCHEMES:
        return "#"
    return url


def _emphasis(text: str) -> str:
    for pattern, replacement in _EMPHASIS:
        text = pattern.sub(replacement, text)
    return text


def _code(text: str, stash: _Stash) -> str:
    # Блок кода всегда занимает отдельную строку
    text = _FENCE_RE.sub(
        lambda m: "\n" + stash.put(f"<pre><code>{m.group(1)}</code></pre>", standalone=True) + "\n",
        text,
    )
    return _INLINE_CODE_RE.sub(lambda m: stash.put(f"<code>{m.group(1)}</code>"), text)


def _headings(text: str, stash: _Stash) -> str:
    def heading(match):
        level = len(match.group(1))
        return f"<h{level}>{match.group(2)}</h{level}>"

    return _HEADING_RE.sub(heading, text)


def _images(text: str, stash: _Stash) -> str:
    def image(match):
        alt, src = match.group(1), _safe_url(match.group(2))
        return stash.put(f'<img src="{src}" alt="{alt}" class="md-image">', standalone=True)

    return _IMAGE_RE.sub(image, text)


def _links(text: str, stash: _Stash) -> str:
    def link(match):
        label, href = _emphasis(match.group(1)), _safe_url(match.group(2))
        return stash.put(f'<a href="{href}" target="_blank" rel="noopener noreferrer">{label}</a>')

    return _LINK_RE.sub(link, text)


def _emphasis_pass(text: str, stash: _Stash) -> str:
    return _emphasis(text)


def _blockquotes(text: str, stash: _Stash) -> str:
    return _BLOCKQUOTE_RE.sub(r"<blockquote>\1</blockquote>", text)


def _lists(text: str, stash: _Stash) -> str:
    text = _LIST_ITEM_RE.sub(r"<li>\1</li>", text)
    # Каждая непрерывная серия пунктов получает свой <ul>, в одну строку
    return _LIST_RUN_RE.sub(lambda m: "<ul>" + m.group(0).replace("\n", "") + "</ul>", text)


def _rules(text: str, stash: _Stash) -> str:
    return _RULE_RE.sub("<hr>", text)


def _paragraphs(text: str, stash: _Stash) -> str:
    chunks = []
    for chunk in _PARAGRAPH_BREAK_RE.split(text):
        parts: List[str] = []
        lines: List[str] = []
        for line in chunk.split("\n"):
            if _BLOCK_LINE_RE.match(line.strip()) or stash.is_standalone_line(line):
                if lines:
                    parts.append("<p>" + "\n".join(lines) + "</p>")
                    lines = []
                parts.append(line.strip())
            elif line.strip():
                lines.append(line)
        if lines:
            parts.append("<p>" + "\n".join(lines) + "</p>")
        chunks.append("\n".join(parts))
    return "".join(chunks)


RenderPass = Callable[[str, _Stash], str]

PASSES: Tuple[RenderPass, ...] = (
    _code,
    _headings,
    _images,
    _links,
    _emphasis_pass,
    _blockquotes,
    _lists,
    _rules,
    _paragraphs,
)


def render_markdown(text: str) -> str:
    """Преобразование Markdown документа в HTML-фрагмент"""
    if not text:
        return ""

    stash = _Stash()
    result = html.escape(text.replace("\r\n", "\n").replace("\r", "\n"), quote=True)
    for render_pass in PASSES:
        result = render_pass(result, stash)
    return stash.restore(result)
