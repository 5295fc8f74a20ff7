# coding:utf-8
'''
Lexical scanning primitives.

Every higher component looks at SQL text through these helpers: quoted
literals and comments are opaque, parenthesis depth is tracked in code only.
'''
import re
from collections import Counter, namedtuple
from enum import Enum
from sqlparse import lexer, tokens as T


class SegmentKind(Enum):
    """
        Lexical region of a text
    """
    code = 0
    quoted = 1        # '...', "..." or [...]
    line_comment = 2  # -- up to the end of line
    block_comment = 3 # /* ... */


class Segment(namedtuple('Segment', 'kind text start')):
    __slots__ = ()

    def is_code(self):
        return self.kind is SegmentKind.code

    def is_comment(self):
        return self.kind in (SegmentKind.line_comment, SegmentKind.block_comment)


TopLevelMatch = namedtuple('TopLevelMatch', 'start end text')

_OPENER = re.compile(r"--|/\*|['\"\[]")
_CLOSERS = {"'": "'", '"': '"', '[': ']'}
_DEPTH_TOKEN = re.compile(r"[()]|(?<![\w@#$.])(?:CASE|END)(?![\w@#$])", re.IGNORECASE)
_WHITESPACE = re.compile(r'\s+')


class Scanner(object):
    """
        Splits text into segments, carrying quote / block comment /
        parenthesis / CASE state from one chunk to the next.
        Feeding a script line by line gives the same segments as feeding it whole.
    """

    __slots__ = ('escape', 'kind', 'closer', 'depth', 'case_depth')

    def __init__(self, escape=False):
        self.escape = escape
        self.kind = SegmentKind.code
        self.closer = None
        self.depth = 0
        self.case_depth = 0

    def is_open(self):
        """
            inside a quoted literal or block comment
        """
        return self.kind is not SegmentKind.code

    def is_nested(self):
        return self.is_open() or self.depth > 0 or self.case_depth > 0

    def feed(self, text):
        segments = []
        length = len(text)
        pos = 0
        search = 0
        while pos < length:
            if self.kind is SegmentKind.code:
                match = _OPENER.search(text, pos)
                end = match.start() if match else length
                if end > pos:
                    segments.append(Segment(SegmentKind.code, text[pos:end], pos))
                    self._track(text[pos:end])
                if not match:
                    break
                pos = end
                search = pos + self._open(match.group())
                continue

            end, closed = self._construct_end(text, search)
            segments.append(Segment(self.kind, text[pos:end], pos))
            if closed:
                self.kind = SegmentKind.code
                self.closer = None
            pos = end

        # a line comment never outlives its chunk
        if self.kind is SegmentKind.line_comment:
            self.kind = SegmentKind.code
        return segments

    def _open(self, opener):
        if opener == '--':
            self.kind = SegmentKind.line_comment
            return 2
        if opener == '/*':
            self.kind = SegmentKind.block_comment
            return 2
        self.kind = SegmentKind.quoted
        self.closer = _CLOSERS[opener]
        return 1

    def _construct_end(self, text, search):
        length = len(text)
        if self.kind is SegmentKind.line_comment:
            index = text.find('\n', search)
            return (index, True) if index >= 0 else (length, False)
        if self.kind is SegmentKind.block_comment:
            index = text.find('*/', search)
            return (index + 2, True) if index >= 0 else (length, False)

        index = search
        while index < length:
            char = text[index]
            if self.escape and char == '\\':
                index += 2
                continue
            if char == self.closer:
                return index + 1, True
            index += 1
        return length, False

    def _track(self, code):
        for match in _DEPTH_TOKEN.finditer(code):
            value = match.group()
            if value == '(':
                self.depth += 1
            elif value == ')':
                self.depth = max(self.depth - 1, 0)
            elif value.upper() == 'CASE':
                self.case_depth += 1
            elif self.case_depth:
                self.case_depth -= 1


def iter_segments(text, escape=False):
    return Scanner(escape).feed(text)


def find_unterminated(text, escape=False):
    """
        Start offset of a quoted literal or block comment that is never closed, or None
    """
    scanner = Scanner(escape)
    segments = scanner.feed(text)
    if scanner.is_open():
        return segments[-1].start
    return None


def code_text(text, escape=False):
    """
        text with quoted literals and comments blanked out
    """
    return "".join(
        seg.text if seg.is_code() else " " * len(seg.text)
        for seg in iter_segments(text, escape)
    )


def normalize_line_breaks(text, escape=False):
    """
        text with the CRLF line breaks of its code turned into LF.
        Quoted literals and block comments keep their line breaks as written.
    """
    out = []
    for seg in iter_segments(text, escape):
        if seg.is_code():
            out.append(seg.text.replace("\r\n", "\n"))
        elif seg.kind is SegmentKind.line_comment and seg.text.endswith("\r") \
                and text[seg.start + len(seg.text):].startswith("\n"):
            out.append(seg.text[:-1])
        else:
            out.append(seg.text)
    return "".join(out)


def line_break(text, escape=False):
    """
        The line break of the first line of code in text: "\\r\\n" or "\\n"
    """
    for seg in iter_segments(text, escape):
        if not seg.is_code():
            continue
        index = seg.text.find("\n")
        if index >= 0:
            position = seg.start + index
            return "\r\n" if text[position - 1:position] == "\r" else "\n"
    return "\n"


def convert_line_breaks(text, newline, escape=False):
    """
        Replace the LF line breaks of the code of text with newline
    """
    if newline == "\n":
        return text
    return "".join(
        seg.text.replace("\n", newline) if seg.is_code() else seg.text
        for seg in iter_segments(text, escape)
    )


def line_code(segments):
    """
        Code of a scanned line without its comments. Quoted literals are
        reduced to an empty literal so their contents never look like keywords.
    """
    return "".join(
        seg.text if seg.is_code() else "''" for seg in segments if not seg.is_comment()
    ).strip()


def first_code(lines, escape=False):
    """
        Code of the first line in lines that has any, or None
    """
    scanner = Scanner(escape)
    for line in lines:
        code = line_code(scanner.feed(line))
        if code:
            return code
    return None


def has_comment(text, escape=False):
    return any(seg.is_comment() for seg in iter_segments(text, escape))


def has_line_comment(text, escape=False):
    return any(seg.kind is SegmentKind.line_comment for seg in iter_segments(text, escape))


def keyword_pattern(*phrases):
    """
        Case-insensitive, word-boundary pattern for keyword phrases.
        Words inside a phrase may be separated by any whitespace.
    """
    alternatives = "|".join(r"\s+".join(phrase.split()) for phrase in phrases)
    return re.compile(r"(?<![\w@#$.])(?:" + alternatives + r")(?![\w@#$])", re.IGNORECASE)


def find_top_level(text, pattern, escape=False):
    """
        Matches of pattern that start in code at parenthesis depth 0
    """
    found = []
    depth = 0
    for seg in iter_segments(text, escape):
        if not seg.is_code():
            continue
        depths = []
        for char in seg.text:
            depths.append(depth)
            if char == '(':
                depth += 1
            elif char == ')':
                depth = max(depth - 1, 0)
        for match in pattern.finditer(seg.text):
            if depths[match.start()] == 0:
                found.append(TopLevelMatch(seg.start + match.start(), seg.start + match.end(), match.group()))
    return found


def find_matching_paren(text, open_index, escape=False):
    """
        Index of the parenthesis closing the one at open_index, or -1
    """
    depth = 0
    for seg in iter_segments(text, escape):
        if not seg.is_code() or seg.start + len(seg.text) <= open_index:
            continue
        for offset, char in enumerate(seg.text):
            index = seg.start + offset
            if index < open_index:
                continue
            if char == '(':
                depth += 1
            elif char == ')':
                depth -= 1
                if depth == 0:
                    return index
    return -1


def is_balanced(text, escape=False):
    depth = 0
    for seg in iter_segments(text, escape):
        if not seg.is_code():
            continue
        for char in seg.text:
            if char == '(':
                depth += 1
            elif char == ')':
                depth -= 1
                if depth < 0:
                    return False
    return depth == 0


def collapse_whitespace(text, escape=False):
    """
        Collapse whitespace runs outside quotes and comments to one space.
        A run that holds a line break and touches a comment keeps a single
        line break, so comments stay on their own lines.
    """
    segments = iter_segments(text, escape)
    out = []
    for index, seg in enumerate(segments):
        if not seg.is_code():
            out.append(seg.text)
            continue
        prev_comment = index > 0 and segments[index - 1].is_comment()
        next_comment = index + 1 < len(segments) and segments[index + 1].is_comment()
        last = 0
        for match in _WHITESPACE.finditer(seg.text):
            keep_newline = "\n" in match.group() and (
                (match.start() == 0 and prev_comment) or
                (match.end() == len(seg.text) and next_comment))
            out.append(seg.text[last:match.start()])
            out.append("\n" if keep_newline else " ")
            last = match.end()
        out.append(seg.text[last:])
    return "".join(out).strip()


def append_after_code(text, suffix, escape=False):
    """
        Insert suffix right after the last code character of text,
        ahead of any trailing comments
    """
    position = None
    for seg in iter_segments(text, escape):
        if seg.is_comment():
            continue
        stripped = seg.text.rstrip()
        if stripped:
            position = seg.start + len(stripped)
    if position is None:
        return text + suffix
    return text[:position] + suffix + text[position:]


def token_signature(text):
    """
        Multiset of the non-whitespace lexical tokens of text
    """
    signature = Counter()
    for ttype, value in lexer.tokenize(text):
        if ttype in T.Whitespace:
            continue
        value = value.strip()
        if not value:
            continue
        if ttype not in T.Comment and ttype not in T.String:
            value = " ".join(value.split())
        signature[value] += 1
    return signature


def same_tokens(before, after):
    return token_signature(before) == token_signature(after)


def startswith_word(text, words):
    """
        The word of words that text starts with (case-insensitive,
        whole word), or None
    """
    if isinstance(words, str):
        words = (words,)
    for word in words:
        if re.match(re.escape(word) + r"(?![\w@#$])", text, re.IGNORECASE):
            return word
    return None


def contains_word(text, words):
    if isinstance(words, str):
        words = (words,)
    for word in words:
        if keyword_pattern(word).search(text):
            return True
    return False
