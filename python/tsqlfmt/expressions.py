# coding:utf-8
'''
Reflow of single expressions: CASE ... END, window OVER (...) and the
alignment of column aliases.

Every function takes an item text whose whitespace is already collapsed
and returns it unchanged when the expression is not in the expected shape.
Continuation lines are indented relative to the item column; the layout
adds the column itself.
'''
import re
from tsqlfmt import tokenutils as tu


_CASE_WORDS = tu.keyword_pattern("CASE", "WHEN", "THEN", "ELSE", "END")
_OVER = re.compile(r"(?<![\w@#$.])OVER\s*\(", re.IGNORECASE)
_WINDOW_PARTS = tu.keyword_pattern("PARTITION BY", "ORDER BY", "ROWS", "RANGE")
_CLAUSE = tu.keyword_pattern("SELECT", "FROM", "WHERE", "GROUP BY", "HAVING", "ORDER BY")
_AS = tu.keyword_pattern("AS")


def reflow_case(text, indent_size=4, escape=False):
    """
        CASE WHEN a = 1 THEN 'x' ELSE 'y' END AS k

        CASE
            WHEN a = 1
                THEN 'x'
            ELSE 'y'
        END AS k
    """
    if tu.has_comment(text, escape):
        return text
    matches = tu.find_top_level(text, _CASE_WORDS, escape)
    first = next((index for index, match in enumerate(matches) if match.text.upper() == "CASE"), None)
    if first is None:
        return text

    level = 0
    breaks = []
    end = None
    for match in matches[first:]:
        word = match.text.upper()
        if word == "CASE":
            level += 1
        elif word == "END":
            level -= 1
            if level == 0:
                end = match
                break
        elif level == 1:
            breaks.append(match)
    if end is None or not breaks:
        return text

    case = matches[first]
    indent = " " * indent_size
    lines = [(text[:case.end] + " " + text[case.end:breaks[0].start].strip()).rstrip()]
    stops = breaks[1:] + [end]
    for match, stop in zip(breaks, stops):
        part = text[match.start:stop.start].strip()
        if match.text.upper() == "THEN":
            lines.append(indent * 2 + part)
        else:
            lines.append(indent + part)
    lines.append(text[end.start:].strip())
    return "\n".join(lines)


def reflow_window(text, indent_size=4, escape=False):
    """
        ROW_NUMBER() OVER (PARTITION BY a ORDER BY b) AS r

        ROW_NUMBER()
            OVER (
                PARTITION BY a
                ORDER BY b
            ) AS r
    """
    if tu.has_comment(text, escape) or not tu.is_balanced(text, escape):
        return text
    if tu.find_top_level(text, _CLAUSE, escape):
        return text
    found = tu.find_top_level(text, _OVER, escape)
    if not found:
        return text
    over = found[0]
    function = text[:over.start].rstrip()
    if not function:
        return text
    open_index = over.end - 1
    close_index = tu.find_matching_paren(text, open_index, escape)
    if close_index < 0:
        return text

    content = text[open_index + 1:close_index].strip()
    indent = " " * indent_size
    lines = [function, indent + text[over.start:open_index].rstrip() + " ("]
    starts = [match.start for match in tu.find_top_level(content, _WINDOW_PARTS, escape)]
    if not starts or starts[0] != 0:
        starts.insert(0, 0)
    for begin, stop in zip(starts, starts[1:] + [len(content)]):
        part = content[begin:stop].strip()
        if part:
            lines.append(indent * 2 + part)
    lines.append(indent + ")" + text[close_index + 1:])
    return "\n".join(lines)


def reflow(text, indent_size=4, escape=False):
    """
        CASE reflow when the item has a top-level CASE, window reflow otherwise
    """
    reflowed = reflow_case(text, indent_size, escape)
    if reflowed != text:
        return reflowed
    return reflow_window(text, indent_size, escape)


def align_aliases(items, escape=False):
    """
        Pad single-line items so their top-level AS line up
    """
    positions = {}
    for index, item in enumerate(items):
        if item.is_multiline():
            continue
        found = tu.find_top_level(item.text, _AS, escape)
        if found:
            positions[index] = found[-1]
    if len(positions) < 2:
        return list(items)

    width = max(len(items[index].text[:match.start].rstrip()) for index, match in positions.items())
    aligned = []
    for index, item in enumerate(items):
        match = positions.get(index)
        if match is None:
            aligned.append(item)
            continue
        head = item.text[:match.start].rstrip()
        aligned.append(item.with_text(head.ljust(width) + " " + item.text[match.start:]))
    return aligned


def reflow_select_items(items, local_config):
    escape = local_config.escape_sequence_u005c
    items = [
        item.with_text(reflow(item.text, local_config.indent_size, escape)) for item in items
    ]
    if local_config.align_aliases:
        items = align_aliases(items, escape)
    return items
