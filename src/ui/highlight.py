"""Search-as-you-type highlighting for the Item picker."""
from __future__ import annotations

import html
import re
from typing import Optional

from PyQt6.QtCore import QRectF, QSize
from PyQt6.QtGui import QTextDocument
from PyQt6.QtWidgets import QStyle, QStyledItemDelegate, QStyleOptionViewItem, QWidget

_WORD_START = re.compile(r"(?:^|(?<=[\s\-_/(]))\S")


def match_ranges(text: str, query: str) -> list[tuple[int, int]]:
    """Ranges of text matched by query.

    Each whitespace-separated query word matches, case-insensitively, at the
    start of a word in text (first unused occurrence). Overlapping or touching
    ranges are merged.
    """
    lowered = text.lower()
    starts = [m.start() for m in _WORD_START.finditer(text)]
    ranges: list[tuple[int, int]] = []
    for word in (query or "").lower().split():
        for start in starts:
            end = start + len(word)
            if lowered.startswith(word, start) and not any(
                start < r_end and r_start < end for r_start, r_end in ranges
            ):
                ranges.append((start, end))
                break
    ranges.sort()
    merged: list[tuple[int, int]] = []
    for start, end in ranges:
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(end, merged[-1][1]))
        else:
            merged.append((start, end))
    return merged


def split_highlighted(text: str, ranges: list[tuple[int, int]]) -> list[tuple[str, bool]]:
    """Cut text into (segment, highlighted) pieces covering all of it."""
    parts: list[tuple[str, bool]] = []
    pos = 0
    for start, end in ranges:
        if start > pos:
            parts.append((text[pos:start], False))
        parts.append((text[start:end], True))
        pos = end
    if pos < len(text):
        parts.append((text[pos:], False))
    return parts


def highlighted_html(text: str, query: str) -> str:
    return "".join(
        f"<b>{html.escape(seg)}</b>" if hit else html.escape(seg)
        for seg, hit in split_highlighted(text, match_ranges(text, query))
    )


class HighlightDelegate(QStyledItemDelegate):
    """Paints completer rows with the typed words in bold."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._query = ""

    def set_query(self, query: str) -> None:
        self._query = query or ""

    def _document(self, option: QStyleOptionViewItem, text: str) -> QTextDocument:
        doc = QTextDocument()
        doc.setDefaultFont(option.font)
        doc.setHtml(highlighted_html(text, self._query))
        return doc

    def paint(self, painter, option, index) -> None:
        opt = QStyleOptionViewItem(option)
        self.initStyleOption(opt, index)
        text = opt.text
        opt.text = ""
        style = opt.widget.style() if opt.widget else None
        if style is not None:
            style.drawControl(QStyle.ControlElement.CE_ItemViewItem, opt, painter, opt.widget)
        doc = self._document(opt, text)
        painter.save()
        painter.translate(opt.rect.left() + 4, opt.rect.top())
        doc.drawContents(painter, QRectF(0, 0, opt.rect.width() - 4, opt.rect.height()))
        painter.restore()

    def sizeHint(self, option, index) -> QSize:
        opt = QStyleOptionViewItem(option)
        self.initStyleOption(opt, index)
        doc = self._document(opt, opt.text)
        return QSize(int(doc.idealWidth()) + 8, max(int(doc.size().height()), 20))
