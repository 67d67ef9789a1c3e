"""Character-level scanner for documentation comments.

Splits source text into code and ``/** ... */`` comment regions and
captures the first two identifier-like tokens that follow each comment,
which serve as a fallback name when the comment carries no naming tag.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

START_COMMENT = "/**"
END_COMMENT = "*/"

_CHUNK_SIZE = 8192


@dataclass(frozen=True)
class ScannedComment:
    """A comment body with the code tokens that follow it.

    Attributes:
        body: Text between the comment delimiters.
        first_token: First word after the comment, or empty string.
        second_token: Second word after the comment, or empty string.
    """

    body: str
    first_token: str = ""
    second_token: str = ""


class _State(Enum):
    CODE = "code"
    COMMENT = "comment"


class _TokenState(Enum):
    SKIPPING = "skipping"
    AWAITING_TOKEN_START = "awaiting_token_start"
    READING_TOKEN_1 = "reading_token_1"
    AWAITING_TOKEN_2_START = "awaiting_token_2_start"
    READING_TOKEN_2 = "reading_token_2"


def is_word_char(ch: str) -> bool:
    """Return True for characters that may appear inside a token."""
    return ch.isalnum() or ch in "._"


class CommentScanner:
    """Incremental two-state scanner over source text.

    Feed text in arbitrary chunks with :meth:`feed`; each call yields the
    comments completed so far. A comment is emitted when the next comment
    opens, or by :meth:`close` at end of input.
    """

    def __init__(self) -> None:
        self._state = _State.CODE
        self._token_state = _TokenState.SKIPPING
        self._buffer: list[str] = []
        self._tail = ""
        self._tokens = ["", ""]
        self._pending: Optional[str] = None

    def feed(self, text: str) -> Iterator[ScannedComment]:
        """Consume a chunk of source text.

        Args:
            text: Next chunk of the source.

        Yields:
            Comments whose trailing code has been fully consumed.
        """
        for ch in text:
            self._tail = (self._tail + ch)[-3:]
            if self._state is _State.CODE:
                self._capture(ch)
                if self._tail.endswith(START_COMMENT):
                    emitted = self._emit_pending()
                    if emitted is not None:
                        yield emitted
                    self._buffer = []
                    self._tail = ""
                    self._state = _State.COMMENT
            else:
                self._buffer.append(ch)
                if self._tail.endswith(END_COMMENT):
                    self._pending = "".join(self._buffer[: -len(END_COMMENT)])
                    self._buffer = []
                    self._tail = ""
                    self._tokens = ["", ""]
                    self._state = _State.CODE
                    self._token_state = _TokenState.AWAITING_TOKEN_START

    def close(self) -> Iterator[ScannedComment]:
        """Flush the last pending comment at end of input."""
        emitted = self._emit_pending()
        if emitted is not None:
            yield emitted

    def _emit_pending(self) -> Optional[ScannedComment]:
        if self._pending is None:
            return None
        comment = ScannedComment(self._pending, self._tokens[0], self._tokens[1])
        self._pending = None
        self._tokens = ["", ""]
        self._token_state = _TokenState.SKIPPING
        return comment

    def _capture(self, ch: str) -> None:
        state = self._token_state
        if state is _TokenState.SKIPPING:
            return
        word = is_word_char(ch)
        if state is _TokenState.AWAITING_TOKEN_START:
            if word:
                self._tokens[0] = ch
                self._token_state = _TokenState.READING_TOKEN_1
        elif state is _TokenState.READING_TOKEN_1:
            if word:
                self._tokens[0] += ch
            else:
                self._token_state = _TokenState.AWAITING_TOKEN_2_START
        elif state is _TokenState.AWAITING_TOKEN_2_START:
            if word:
                self._tokens[1] = ch
                self._token_state = _TokenState.READING_TOKEN_2
        elif state is _TokenState.READING_TOKEN_2:
            if word:
                self._tokens[1] += ch
            else:
                self._token_state = _TokenState.SKIPPING


def scan_chunks(chunks: Iterable[str]) -> Iterator[ScannedComment]:
    """Scan an iterable of text chunks and yield every comment in order."""
    scanner = CommentScanner()
    for chunk in chunks:
        yield from scanner.feed(chunk)
    yield from scanner.close()


def scan_source(source: str) -> list[ScannedComment]:
    """Scan a complete source string.

    Args:
        source: Source code text.

    Returns:
        Comments in file order.
    """
    return list(scan_chunks([source]))


def scan_file(file_path: str, encoding: str = "utf-8") -> Iterator[ScannedComment]:
    """Scan a source file, reading it incrementally.

    A read failure is logged and ends the scan of this file; comments
    already yielded stay valid and nothing further is emitted.

    Args:
        file_path: Path to the source file.
        encoding: Text encoding of the file.

    Yields:
        Comments in file order.
    """
    path = Path(file_path)
    scanner = CommentScanner()
    try:
        with open(path, encoding=encoding) as f:
            while True:
                chunk = f.read(_CHUNK_SIZE)
                if not chunk:
                    break
                yield from scanner.feed(chunk)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        return
    yield from scanner.close()
