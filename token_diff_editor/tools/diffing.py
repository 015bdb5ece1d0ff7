import difflib
import logging
import re

from token_diff_editor.tools.contract import DiffSegment, SegmentKind

logger = logging.getLogger(__name__)

SEARCH_MARKER = "<<<<<<< SEARCH\n"
DIVIDER_MARKER = "=======\n"
REPLACE_MARKER = ">>>>>>> REPLACE\n"

# Only "\n" ends a line; "\r", form feeds and unicode separators stay inside it.
LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


def split_lines(text: str) -> list[str]:
    return LINE_RE.findall(text)


def diff_lines(original: str, modified: str) -> list[DiffSegment]:
    """
    Line-granular diff of two texts.

    - Lines keep their terminators, so joining every unchanged and removed
      segment rebuilds `original` exactly (likewise unchanged + added for
      `modified`).
    - A replaced run is emitted as its removed segment followed directly by
      its added segment.
    """

    old_lines = split_lines(original)
    new_lines = split_lines(modified)

    matcher = difflib.SequenceMatcher(a=old_lines, b=new_lines, autojunk=False)
    segments: list[DiffSegment] = []

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            segments.append(DiffSegment(SegmentKind.UNCHANGED, "".join(old_lines[i1:i2])))
            continue
        if tag in ("delete", "replace"):
            segments.append(DiffSegment(SegmentKind.REMOVED, "".join(old_lines[i1:i2])))
        if tag in ("insert", "replace"):
            segments.append(DiffSegment(SegmentKind.ADDED, "".join(new_lines[j1:j2])))

    return segments


def format_search_replace(segments: list[DiffSegment]) -> str:
    parts: list[str] = []

    for segment in segments:
        if segment.kind is SegmentKind.REMOVED:
            # Not closed here: a removal without a following addition stays open.
            parts.append(SEARCH_MARKER + segment.text + DIVIDER_MARKER)
        elif segment.kind is SegmentKind.ADDED:
            parts.append(segment.text + REPLACE_MARKER)
        else:
            parts.append(segment.text)

    return "".join(parts)


def generate_diff(original: str, modified: str) -> str:
    segments = diff_lines(original, modified)
    logger.debug("Diff produced %d segments", len(segments))
    return format_search_replace(segments)
